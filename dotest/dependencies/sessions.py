"""Dependencies for the test-session and content endpoints."""
import random
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session as DbSession

from dotest.config import SESSION_RANDOM_SEED
from dotest.database import get_db
from dotest.services.cache_service import ContentCache, content_cache
from dotest.services.content_service import SqlContentRepository
from dotest.services.session_service import SessionStore, session_store
from dotest.services.shuffler import RandomSource

_seeded_rng = random.Random(SESSION_RANDOM_SEED) if SESSION_RANDOM_SEED is not None else None


def get_session_store() -> SessionStore:
    """The process-wide store of active sessions."""
    return session_store


def get_content_cache() -> ContentCache:
    return content_cache


def get_rng() -> RandomSource:
    """Random source for sampling and shuffling.

    A fixed SESSION_RANDOM_SEED makes every run reproducible; otherwise each
    request gets a generator seeded from OS entropy.
    """
    if _seeded_rng is not None:
        return _seeded_rng
    return random.Random()


def get_repository(
    db: Annotated[DbSession, Depends(get_db)],
) -> SqlContentRepository:
    return SqlContentRepository(db)
