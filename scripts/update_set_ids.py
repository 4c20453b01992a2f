#!/usr/bin/env python3
"""
Data migration script to backfill question set ids.

This script:
1. Reads every stored question
2. Sets set_id to the third part of its question id (01 for E01-C00-01-002)
3. Reports questions whose id carries no set part

Usage:
    python scripts/update_set_ids.py
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotest.database import SessionLocal, init_db
from dotest.logging_setup import setup_console_logging
from dotest.services.set_id_service import update_set_ids


def migrate_set_ids():
    """Main migration function."""
    init_db()
    db = SessionLocal()
    try:
        summary = update_set_ids(db)
        print(f"Updated {summary['success']} of {summary['total']} questions")
        if summary["failed"]:
            print(f"WARNING: {summary['failed']} question ids have no set part")
        return True
    except Exception as e:
        db.rollback()
        print(f"ERROR: Migration failed: {e}")
        return False
    finally:
        db.close()


if __name__ == "__main__":
    setup_console_logging()
    print("=== Question Set Id Backfill ===\n")
    success = migrate_set_ids()
    sys.exit(0 if success else 1)
