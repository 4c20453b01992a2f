"""Subject endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session as DbSession

from dotest.database import get_db
from dotest.services import content_service

router = APIRouter(prefix="/api/subjects", tags=["subjects"])


@router.get("")
def list_subjects(
    db: Annotated[DbSession, Depends(get_db)],
) -> list[dict[str, object]]:
    """List subjects that have textbooks."""
    return content_service.get_subjects(db)


@router.get("/{subject}")
def subject_dashboard(
    subject: str,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    """Textbooks, chapters and question counts for one subject."""
    return content_service.get_subject_dashboard(db, subject)
