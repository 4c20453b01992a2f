"""Backfill of question set ids from question ids."""
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session as DbSession

from dotest.models.db import Question
from dotest.utils.question_ids import derive_set_number

logger = logging.getLogger(__name__)


def update_set_ids(db: DbSession) -> dict[str, int]:
    """Set `set_id` on every question from the third part of its id.

    Questions whose id has no set part are counted as failed and left as is.
    """
    questions = db.execute(select(Question)).scalars().all()
    success = 0
    failed = 0
    for question in questions:
        set_number = derive_set_number(question.question_id)
        if set_number is None:
            logger.warning("Cannot derive set id from %s", question.question_id)
            failed += 1
            continue
        question.set_id = set_number
        success += 1
    db.commit()

    summary = {"success": success, "failed": failed, "total": len(questions)}
    logger.info("Set id backfill finished: %s", summary)
    return summary
