"""
Test session state machine and grading.

A session moves NOT_STARTED -> IN_PROGRESS -> COMPLETED and never back.
Each question accepts one answer; later answers to the same question are
no-ops. Grading compares the selected option text with the correct text
captured at shuffle time, so it is independent of the shuffled labels.
"""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence

from dotest.config import PASS_THRESHOLD_PERCENT
from dotest.errors import InvalidStateError
from dotest.models.domain import (
    AnswerFeedback,
    AnswerOutcome,
    QuestionResult,
    ScoreReport,
    SessionQuestion,
)
from dotest.utils.page_refs import extract_page_references
from dotest.utils.time_utils import utc_now


class SessionState(str, enum.Enum):
    """Lifecycle state of a test session."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


def percentage_of(correct: int, total: int) -> int:
    """Rounded percentage, halves rounded up. Zero when total is zero."""
    if total <= 0:
        return 0
    return (200 * correct + total) // (2 * total)


@dataclass
class TestSession:
    """One user's attempt at a sampled question set."""

    __test__ = False  # not a pytest test class

    session_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    book_id: Optional[str] = None
    chapter_id: Optional[str] = None
    set_id: Optional[str] = None
    client_id: Optional[str] = None
    pass_threshold: int = PASS_THRESHOLD_PERCENT

    state: SessionState = SessionState.NOT_STARTED
    questions: list[SessionQuestion] = field(default_factory=list)
    answers: dict[str, str] = field(default_factory=dict)
    feedback: dict[str, AnswerFeedback] = field(default_factory=dict)
    flagged: set[str] = field(default_factory=set)
    current_index: int = 0
    correct_count: int = 0

    started_at: Optional[datetime] = None
    last_activity_at: datetime = field(default_factory=utc_now)
    completed_at: Optional[datetime] = None
    _report: Optional[ScoreReport] = field(default=None, repr=False)

    # -- transitions -----------------------------------------------------

    def start(self, questions: Sequence[SessionQuestion]) -> None:
        if self.state is not SessionState.NOT_STARTED:
            raise InvalidStateError(f"Session {self.session_id} already started")
        if not questions:
            raise ValueError("A session needs at least one question")

        self.questions = list(questions)
        self.answers = {}
        self.feedback = {}
        self.flagged = set()
        self.current_index = 0
        self.correct_count = 0
        self.state = SessionState.IN_PROGRESS
        self.started_at = utc_now()
        self.touch()

    def answer_question(self, question_id: str, selected: str) -> AnswerFeedback:
        """Record the answer for a question and return instant feedback.

        Only the first answer per question counts. Repeated calls return the
        stored feedback with `recorded=False`.
        """
        self._require(SessionState.IN_PROGRESS, "answer a question")
        session_question = self._find(question_id)
        self.touch()

        if question_id in self.answers:
            first = self.feedback[question_id]
            return AnswerFeedback(
                question_id=first.question_id,
                selected=first.selected,
                is_correct=first.is_correct,
                correct_text=first.correct_text,
                explanation=first.explanation,
                page_references=first.page_references,
                recorded=False,
            )

        selected_text = self._resolve_selection(session_question, selected)
        is_correct = selected_text == session_question.original_correct_text
        self.answers[question_id] = selected_text
        if is_correct:
            self.correct_count += 1

        result = AnswerFeedback(
            question_id=question_id,
            selected=selected_text,
            is_correct=is_correct,
            correct_text=session_question.original_correct_text,
            explanation=session_question.explanation,
            page_references=extract_page_references(session_question.explanation),
        )
        self.feedback[question_id] = result
        return result

    def advance(self) -> Optional[SessionQuestion]:
        """Move to the next question. Returns None once the session completes."""
        self._require(SessionState.IN_PROGRESS, "advance")
        self.touch()
        if self.current_index >= len(self.questions) - 1:
            self.finalize()
            return None
        self.current_index += 1
        return self.questions[self.current_index]

    def toggle_flag(self, question_id: str) -> bool:
        self._require(SessionState.IN_PROGRESS, "flag a question")
        self._find(question_id)
        self.touch()
        if question_id in self.flagged:
            self.flagged.discard(question_id)
            return False
        self.flagged.add(question_id)
        return True

    def finalize(self) -> ScoreReport:
        """Complete the session and grade it. Unanswered questions score zero."""
        if self.state is SessionState.COMPLETED and self._report is not None:
            return self._report
        self._require(SessionState.IN_PROGRESS, "finalize")

        results = tuple(self._grade(sq) for sq in self.questions)
        correct = sum(1 for r in results if r.outcome is AnswerOutcome.CORRECT)
        answered = sum(1 for r in results if r.outcome is not AnswerOutcome.UNANSWERED)
        total = len(results)
        percentage = percentage_of(correct, total)

        self._report = ScoreReport(
            correct_count=correct,
            total=total,
            percentage=percentage,
            answered_count=answered,
            passed=percentage >= self.pass_threshold,
            results=results,
        )
        self.state = SessionState.COMPLETED
        self.completed_at = utc_now()
        self.touch()
        return self._report

    # -- queries ---------------------------------------------------------

    @property
    def report(self) -> ScoreReport:
        if self.state is not SessionState.COMPLETED or self._report is None:
            raise InvalidStateError(
                f"Session {self.session_id} has no report until it is completed"
            )
        return self._report

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def current_question(self) -> Optional[SessionQuestion]:
        if self.state is not SessionState.IN_PROGRESS:
            return None
        return self.questions[self.current_index]

    def is_answered(self, question_id: str) -> bool:
        return question_id in self.answers

    def touch(self) -> None:
        self.last_activity_at = utc_now()

    # -- internals -------------------------------------------------------

    def _require(self, state: SessionState, action: str) -> None:
        if self.state is not state:
            raise InvalidStateError(
                f"Cannot {action} while session {self.session_id} is {self.state.value}"
            )

    def _find(self, question_id: str) -> SessionQuestion:
        for session_question in self.questions:
            if session_question.question_id == question_id:
                return session_question
        raise InvalidStateError(
            f"Question {question_id} is not part of session {self.session_id}"
        )

    @staticmethod
    def _resolve_selection(session_question: SessionQuestion, selected: str) -> str:
        # Option text wins; a bare label is accepted as shorthand.
        if selected in session_question.shuffled_options:
            return selected
        by_label = session_question.option_for_label(selected)
        return by_label if by_label is not None else selected

    def _grade(self, session_question: SessionQuestion) -> QuestionResult:
        question = session_question.question
        user_answer = self.answers.get(question.question_id)
        if user_answer is None:
            outcome = AnswerOutcome.UNANSWERED
        elif user_answer == session_question.original_correct_text:
            outcome = AnswerOutcome.CORRECT
        else:
            outcome = AnswerOutcome.INCORRECT
        return QuestionResult(
            question_id=question.question_id,
            question_text=question.question_text,
            user_answer=user_answer,
            is_correct=outcome is AnswerOutcome.CORRECT,
            outcome=outcome,
            correct_text=session_question.original_correct_text,
            explanation=question.explanation,
            page_references=extract_page_references(question.explanation),
        )
