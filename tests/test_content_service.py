import pytest
from sqlalchemy import select
from sqlalchemy.orm import Session as DbSession

from dotest.errors import NotFoundError
from dotest.models.db import Chapter, ChapterItem, Feedback, FeedbackStatus, Question
from dotest.services import (
    content_service,
    feedback_service,
    page_service,
    set_id_service,
)
from dotest.services.cache_service import ContentCache


def test_repository_returns_domain_questions(db: DbSession, answers: dict[str, str]) -> None:
    repository = content_service.SqlContentRepository(db)
    questions = repository.get_questions_by_chapter("E01-C00")

    assert len(questions) == len(answers)
    first = questions[0]
    assert first.question_id == "E01-C00-01-001"
    assert dict(first.options())[first.correct_answer] == answers[first.question_id]


def test_repository_raises_for_empty_chapter(db: DbSession, answers: dict[str, str]) -> None:
    repository = content_service.SqlContentRepository(db)
    with pytest.raises(NotFoundError):
        repository.get_questions_by_chapter("E01-C01")


def test_question_rows_filtered_by_set(db: DbSession, answers: dict[str, str]) -> None:
    rows = content_service.get_question_rows(db, ["E01-C00"], "02")
    assert [row.question_id for row in rows] == [f"E01-C00-02-{i:03d}" for i in range(1, 5)]
    assert len(content_service.get_question_rows(db, [])) == len(answers)


def test_subjects_and_dashboard(db: DbSession, answers: dict[str, str]) -> None:
    assert content_service.get_subjects(db) == [
        {"id": "英語", "name": "英語", "textbookCount": 1}
    ]
    dashboard = content_service.get_subject_dashboard(db, "英語")
    assert dashboard["stats"] == {
        "textbookCount": 1,
        "chapterCount": 2,
        "questionCount": len(answers),
    }
    with pytest.raises(NotFoundError):
        content_service.get_subject_dashboard(db, "数学")


def test_textbook_listing_is_cached_and_invalidated(
    db: DbSession, answers: dict[str, str], content_cache: ContentCache
) -> None:
    listed = content_service.list_textbooks_cached(db, content_cache)
    assert [t["bookId"] for t in listed] == ["E01"]
    assert "textbooks:all" in content_cache

    content_service.create_textbook(
        db,
        content_cache,
        book_id="M01",
        title="Algebra",
        subject="数学",
        publisher="Sample Press",
    )
    assert "textbooks:all" not in content_cache
    listed = content_service.list_textbooks_cached(db, content_cache)
    assert [t["bookId"] for t in listed] == ["E01", "M01"]


def test_chapter_listing_cache(db: DbSession, answers: dict[str, str], content_cache: ContentCache) -> None:
    chapters = content_service.list_chapters_cached(db, content_cache, ["E01"])
    assert [c["chapterId"] for c in chapters] == ["E01-C00", "E01-C01"]
    assert "chapters:book_E01" in content_cache

    everything = content_service.list_chapters_cached(db, content_cache, [])
    assert len(everything) == 2


def test_delete_textbook_cascades(
    db: DbSession, answers: dict[str, str], content_cache: ContentCache
) -> None:
    content_service.list_textbooks_cached(db, content_cache)
    summary = content_service.delete_textbook(db, content_cache, "E01")

    assert summary["deletedTextbook"]["bookId"] == "E01"
    assert summary["chaptersDeleted"] == 2
    assert summary["itemsDeleted"] == 3
    assert summary["questionsDeleted"] == len(answers)
    assert db.execute(select(Question)).first() is None
    assert db.execute(select(Chapter)).first() is None
    assert db.execute(select(ChapterItem)).first() is None
    assert "textbooks:all" not in content_cache

    with pytest.raises(NotFoundError):
        content_service.delete_textbook(db, content_cache, "E01")


@pytest.mark.parametrize(
    "page_ref,expected",
    [
        ("P12", ["E01-C00-I01"]),
        ("P13", ["E01-C00-I02"]),
        ("P14", ["E01-C00-I02"]),
        ("P16-P18", ["E01-C00-I03"]),
        ("P12-P13", ["E01-C00-I01", "E01-C00-I02"]),
        ("P99", []),
    ],
)
def test_lookup_pages(
    db: DbSession, answers: dict[str, str], page_ref: str, expected: list[str]
) -> None:
    result = page_service.lookup_pages(db, page_ref, "E01")
    assert result["pageReference"] == page_ref
    assert [item["itemId"] for item in result["items"]] == expected


def test_lookup_pages_scoped_to_book(db: DbSession, answers: dict[str, str]) -> None:
    assert page_service.lookup_pages(db, "P12", "M01")["items"] == []


def test_lookup_pages_without_numbers(db: DbSession, answers: dict[str, str]) -> None:
    with pytest.raises(ValueError):
        page_service.lookup_pages(db, "page twelve")


def test_chapter_item_full_text_is_unescaped(db: DbSession, answers: dict[str, str]) -> None:
    result = page_service.lookup_pages(db, "P12")
    assert result["items"][0]["fullText"] == "Nouns name things.\nThey can be counted."


def test_update_set_ids(db: DbSession, answers: dict[str, str]) -> None:
    db.add(
        Question(
            question_id="legacy",
            book_id="E01",
            chapter_id="E01-C00",
            question_text="Old question",
            option_a="a",
            option_b="b",
            option_c="c",
            option_d="d",
            correct_answer="A",
        )
    )
    db.commit()

    summary = set_id_service.update_set_ids(db)

    assert summary == {"success": len(answers), "failed": 1, "total": len(answers) + 1}
    row = db.execute(
        select(Question).where(Question.question_id == "E01-C00-02-001")
    ).scalar_one()
    assert row.set_id == "02"


def test_feedback_lifecycle(db: DbSession) -> None:
    entry = feedback_service.create_feedback(
        db,
        feedback_type="question_error",
        categories=["wrong_answer", "typo"],
        content="Option C looks wrong",
        question_id="E01-C00-01-001",
    )
    assert entry.status == FeedbackStatus.PENDING.value
    assert entry.feedback_categories == ["wrong_answer", "typo"]

    pending = feedback_service.list_feedback(db, FeedbackStatus.PENDING)
    assert [f.id for f in pending] == [entry.id]

    updated = feedback_service.update_feedback_status(db, entry.id, FeedbackStatus.RESOLVED)
    assert updated.status == "resolved"
    assert feedback_service.list_feedback(db, FeedbackStatus.PENDING) == []

    with pytest.raises(NotFoundError):
        feedback_service.update_feedback_status(db, 9999, FeedbackStatus.RESOLVED)


def test_feedback_categories_tolerate_bad_json(db: DbSession) -> None:
    entry = Feedback(feedback_type="other", feedback_categories_json="{not json")
    assert entry.feedback_categories == []
