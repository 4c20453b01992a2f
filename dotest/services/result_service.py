"""Service layer for persisted test results."""
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session as DbSession

from dotest.models.db import TestResult
from dotest.services.grader import TestSession

logger = logging.getLogger(__name__)


def get_result_by_session(db: DbSession, session_id: str) -> TestResult | None:
    return db.execute(
        select(TestResult).where(TestResult.session_id == session_id)
    ).scalar_one_or_none()


def record_result(db: DbSession, session: TestSession) -> TestResult:
    """Store the final score of a completed session. Idempotent per session."""
    existing = get_result_by_session(db, session.session_id)
    if existing:
        return existing

    report = session.report
    result = TestResult(
        session_id=session.session_id,
        client_id=session.client_id,
        book_id=session.book_id or "",
        chapter_id=session.chapter_id or "",
        set_id=session.set_id,
        score=report.correct_count,
        total_questions=report.total,
        percentage=report.percentage,
    )
    if session.completed_at is not None:
        result.completed_at = session.completed_at
    db.add(result)
    db.commit()
    db.refresh(result)
    logger.info(
        "Recorded result for session %s: %d/%d",
        session.session_id,
        report.correct_count,
        report.total,
    )
    return result


def get_results(
    db: DbSession,
    client_id: str | None = None,
    limit: int = 100,
    offset: int = 0,
) -> list[TestResult]:
    """Results, newest first, optionally for one client."""
    query = select(TestResult)
    if client_id:
        query = query.where(TestResult.client_id == client_id)
    query = query.order_by(TestResult.completed_at.desc()).limit(limit).offset(offset)
    return list(db.execute(query).scalars().all())
