from __future__ import annotations

from typing import Any

from dotest.models.db import (
    Chapter,
    ChapterItem,
    Feedback,
    SavedTest,
    TestResult,
    Textbook,
)
from dotest.models.db import Question as QuestionRow
from dotest.models.domain import (
    AnswerFeedback,
    Question,
    QuestionResult,
    ScoreReport,
    SessionQuestion,
)
from dotest.services.grader import TestSession
from dotest.utils.page_refs import extract_page_references
from dotest.utils.time_utils import isoformat


def serialize_textbook(textbook: Textbook) -> dict[str, Any]:
    return {
        "bookId": textbook.book_id,
        "title": textbook.title,
        "subject": textbook.subject,
        "publisher": textbook.publisher,
        "chapterCount": textbook.chapter_count,
        "questionCount": textbook.question_count,
    }


def serialize_chapter(chapter: Chapter) -> dict[str, Any]:
    return {
        "chapterId": chapter.chapter_id,
        "bookId": chapter.book_id,
        "title": chapter.title,
        "order": chapter.order,
        "questionCount": chapter.question_count,
        "description": chapter.description,
    }


def normalize_full_text(text: str | None) -> str:
    """Turn escaped newline sequences into real ones and drop carriage returns."""
    if not text:
        return ""
    return (
        text.replace("\\\\n", "\n")
        .replace("\\n", "\n")
        .replace("\r\n", "\n")
        .replace("\r", "")
    )


def serialize_chapter_item(item: ChapterItem) -> dict[str, Any]:
    return {
        "itemId": item.item_id,
        "chapterId": item.chapter_id,
        "bookId": item.book_id,
        "title": item.title,
        "order": item.order,
        "keyPoints": item.key_points,
        "fullText": normalize_full_text(item.full_text),
        "pageReference": item.page_reference,
    }


def serialize_question_row(row: QuestionRow) -> dict[str, Any]:
    """Stored question including its answer key (admin/content listing)."""
    return {
        "questionId": row.question_id,
        "bookId": row.book_id,
        "chapterId": row.chapter_id,
        "setId": row.set_id,
        "questionText": row.question_text,
        "optionA": row.option_a,
        "optionB": row.option_b,
        "optionC": row.option_c,
        "optionD": row.option_d,
        "correctAnswer": row.correct_answer,
        "explanation": row.explanation,
        "difficulty": row.difficulty,
        "questionType": row.question_type,
    }


def serialize_session_question(
    session_question: SessionQuestion, index: int | None = None
) -> dict[str, Any]:
    """Question as shown during a session. Carries no answer key."""
    question = session_question.question
    payload: dict[str, Any] = {
        "questionId": question.question_id,
        "questionText": question.question_text,
        "difficulty": question.difficulty,
        "choices": [
            {"label": label, "text": text}
            for label, text in zip(
                session_question.labels, session_question.shuffled_options
            )
        ],
    }
    if index is not None:
        payload["index"] = index
    return payload


def serialize_shuffled_question(session_question: SessionQuestion) -> dict[str, Any]:
    """Shuffled question with its answer key, for test previews."""
    question: Question = session_question.question
    return {
        "questionId": question.question_id,
        "bookId": question.book_id,
        "chapterId": question.chapter_id,
        "setId": question.set_id,
        "questionText": question.question_text,
        "optionA": question.option_a,
        "optionB": question.option_b,
        "optionC": question.option_c,
        "optionD": question.option_d,
        "explanation": question.explanation,
        "difficulty": question.difficulty,
        "shuffledChoices": list(session_question.shuffled_options),
        "correctAnswer": session_question.shuffled_correct_label,
        "originalCorrectAnswer": session_question.original_correct_label,
        "originalCorrectText": session_question.original_correct_text,
        "pageReferences": list(extract_page_references(question.explanation)),
    }


def serialize_feedback_result(feedback: AnswerFeedback) -> dict[str, Any]:
    return {
        "questionId": feedback.question_id,
        "selected": feedback.selected,
        "isCorrect": feedback.is_correct,
        "correctText": feedback.correct_text,
        "explanation": feedback.explanation,
        "pageReferences": list(feedback.page_references),
        "recorded": feedback.recorded,
    }


def _serialize_result(result: QuestionResult) -> dict[str, Any]:
    return {
        "questionId": result.question_id,
        "questionText": result.question_text,
        "userAnswer": result.user_answer,
        "isCorrect": result.is_correct,
        "outcome": result.outcome.value,
        "correctText": result.correct_text,
        "explanation": result.explanation,
        "pageReferences": list(result.page_references),
    }


def serialize_report(report: ScoreReport) -> dict[str, Any]:
    return {
        "correct": report.correct_count,
        "total": report.total,
        "percentage": report.percentage,
        "answered": report.answered_count,
        "unanswered": report.unanswered_count,
        "passed": report.passed,
        "results": [_serialize_result(r) for r in report.results],
    }


def serialize_session(session: TestSession) -> dict[str, Any]:
    current = session.current_question
    return {
        "sessionId": session.session_id,
        "bookId": session.book_id,
        "chapterId": session.chapter_id,
        "setId": session.set_id,
        "state": session.state.value,
        "total": session.total,
        "currentIndex": session.current_index,
        "answered": sorted(session.answers),
        "flagged": sorted(session.flagged),
        "question": (
            serialize_session_question(current, session.current_index)
            if current is not None
            else None
        ),
        "startedAt": isoformat(session.started_at),
        "completedAt": isoformat(session.completed_at),
    }


def serialize_test_result(result: TestResult) -> dict[str, Any]:
    return {
        "id": result.id,
        "sessionId": result.session_id,
        "clientId": result.client_id,
        "bookId": result.book_id,
        "chapterId": result.chapter_id,
        "setId": result.set_id,
        "score": result.score,
        "totalQuestions": result.total_questions,
        "percentage": result.percentage,
        "completedAt": isoformat(result.completed_at),
    }


def serialize_feedback(entry: Feedback) -> dict[str, Any]:
    return {
        "id": entry.id,
        "clientId": entry.client_id,
        "bookId": entry.book_id,
        "chapterId": entry.chapter_id,
        "questionId": entry.question_id,
        "feedbackType": entry.feedback_type,
        "feedbackCategories": entry.feedback_categories,
        "feedbackContent": entry.feedback_content,
        "status": entry.status,
        "createdAt": isoformat(entry.created_at),
    }




def serialize_saved_test(
    saved: SavedTest, questions: list[QuestionRow] | None = None
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "testId": saved.test_id,
        "creatorId": saved.creator_id,
        "title": saved.title,
        "description": saved.description,
        "bookIds": saved.book_ids,
        "chapterIds": saved.chapter_ids,
        "questionIds": saved.question_ids,
        "studentNameField": saved.student_name_field,
        "classField": saved.class_field,
        "dateField": saved.date_field,
        "scoreField": saved.score_field,
        "shuffleQuestions": saved.shuffle_questions,
        "shuffleOptions": saved.shuffle_options,
        "showAnswers": saved.show_answers,
        "createdAt": isoformat(saved.created_at),
    }
    if questions is not None:
        payload["questions"] = [serialize_question_row(row) for row in questions]
    return payload
