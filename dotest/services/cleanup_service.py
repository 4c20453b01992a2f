"""Service for cleanup operations."""
import logging
import threading
import time
from datetime import timedelta

from dotest.config import SESSION_CLEANUP_INTERVAL_SECONDS, SESSION_IDLE_MINUTES
from dotest.services.session_service import SessionStore, session_store

logger = logging.getLogger(__name__)


def cleanup_idle_sessions(
    store: SessionStore = session_store,
    idle_minutes: int = SESSION_IDLE_MINUTES,
) -> int:
    """Discard in-memory sessions that have been idle too long."""
    if idle_minutes <= 0:
        return 0

    evicted = store.evict_idle(timedelta(minutes=idle_minutes))
    if evicted:
        logger.info(f"Discarded {len(evicted)} idle test sessions")
    return len(evicted)


def schedule_session_cleanup(
    store: SessionStore = session_store,
    interval_seconds: int = SESSION_CLEANUP_INTERVAL_SECONDS,
) -> threading.Thread:
    """Start a daemon thread that periodically discards idle sessions."""

    def _worker() -> None:
        while True:
            time.sleep(interval_seconds)
            try:
                cleanup_idle_sessions(store)
            except Exception:
                logger.exception("Session cleanup failed")

    thread = threading.Thread(
        target=_worker,
        name="session_cleanup",
        daemon=True,
    )
    thread.start()
    return thread
