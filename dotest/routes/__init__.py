"""API route modules."""
from dotest.routes import (
    admin,
    chapter_items,
    chapters,
    feedback,
    questions,
    saved_tests,
    sessions,
    subjects,
    test_results,
    textbooks,
)

__all__ = [
    "admin",
    "chapter_items",
    "chapters",
    "feedback",
    "questions",
    "saved_tests",
    "sessions",
    "subjects",
    "test_results",
    "textbooks",
]
