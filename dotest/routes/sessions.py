"""Test session endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session as DbSession

from dotest.database import get_db
from dotest.dependencies import get_repository, get_rng, get_session_store
from dotest.models import AnswerRequest, SessionStartRequest
from dotest.serialization import (
    serialize_feedback_result,
    serialize_report,
    serialize_session,
    serialize_session_question,
)
from dotest.services import result_service, session_service
from dotest.services.content_service import SqlContentRepository
from dotest.services.session_service import SessionStore
from dotest.services.shuffler import RandomSource
from dotest.utils import validate_id

router = APIRouter(prefix="/api/sessions", tags=["sessions"])


def _record_result(db: DbSession, store: SessionStore, session_id: str) -> None:
    with store.locked(session_id) as session:
        result_service.record_result(db, session)


@router.post("")
def start_session(
    payload: SessionStartRequest,
    store: Annotated[SessionStore, Depends(get_session_store)],
    repository: Annotated[SqlContentRepository, Depends(get_repository)],
    rng: Annotated[RandomSource, Depends(get_rng)],
) -> dict[str, object]:
    """Sample a question set for a chapter and start a session on it."""
    book_id = validate_id("bookId", payload.bookId)
    chapter_id = validate_id("chapterId", payload.chapterId)
    set_id = validate_id("setId", payload.setId) if payload.setId else None

    session = session_service.start_session(
        store,
        repository,
        rng,
        book_id,
        chapter_id,
        set_id=set_id,
        client_id=payload.clientId,
    )
    with store.locked(session.session_id) as locked_session:
        return serialize_session(locked_session)


@router.get("/{session_id}")
def get_session(
    session_id: str,
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> dict[str, object]:
    """Current state of a session, without answer keys."""
    with store.locked(session_id) as session:
        return serialize_session(session)


@router.post("/{session_id}/answers")
def answer_question(
    session_id: str,
    payload: AnswerRequest,
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> dict[str, object]:
    """Answer one question. Only the first answer per question counts."""
    feedback = session_service.answer_question(
        store, session_id, payload.questionId, payload.selected
    )
    return serialize_feedback_result(feedback)


@router.post("/{session_id}/advance")
def advance(
    session_id: str,
    store: Annotated[SessionStore, Depends(get_session_store)],
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    """Move to the next question, completing the session after the last one."""
    result = session_service.advance(store, session_id)
    if result.completed:
        _record_result(db, store, session_id)
        return {"completed": True, "report": serialize_report(result.report)}
    return {
        "completed": False,
        "question": serialize_session_question(result.question, result.index),
    }


@router.post("/{session_id}/flags/{question_id}")
def toggle_flag(
    session_id: str,
    question_id: str,
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> dict[str, object]:
    """Mark or unmark a question for review."""
    flagged = session_service.toggle_flag(store, session_id, question_id)
    return {"questionId": question_id, "flagged": flagged}


@router.post("/{session_id}/finalize")
def finalize(
    session_id: str,
    store: Annotated[SessionStore, Depends(get_session_store)],
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    """Complete the session now; unanswered questions are graded as such."""
    report = session_service.finalize(store, session_id)
    _record_result(db, store, session_id)
    return serialize_report(report)


@router.get("/{session_id}/report")
def get_report(
    session_id: str,
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> dict[str, object]:
    """Score report of a completed session."""
    return serialize_report(session_service.get_report(store, session_id))


@router.delete("/{session_id}")
def abandon(
    session_id: str,
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> dict[str, str]:
    """Discard a session without grading it."""
    session_service.abandon(store, session_id)
    return {"status": "abandoned"}
