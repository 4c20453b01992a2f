from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Tuple

OPTION_LABELS: Tuple[str, ...] = ("A", "B", "C", "D")


@dataclass(frozen=True)
class Question:
    """Immutable content record as read from the content store."""

    question_id: str
    book_id: str
    chapter_id: str
    question_text: str
    option_a: str = ""
    option_b: str = ""
    option_c: str = ""
    option_d: str = ""
    correct_answer: str = ""
    explanation: Optional[str] = None
    difficulty: int = 1
    set_id: Optional[str] = None
    question_type: str = "multiple_choice"

    def options(self) -> list[tuple[str, str]]:
        """Labelled options in authored order, empty ones dropped."""
        texts = (self.option_a, self.option_b, self.option_c, self.option_d)
        return [
            (label, text)
            for label, text in zip(OPTION_LABELS, texts)
            if text is not None and str(text).strip()
        ]


@dataclass(frozen=True)
class SessionQuestion:
    """A question with its options in the order shown for one session."""

    question: Question
    shuffled_options: Tuple[str, ...]
    shuffled_correct_label: str
    original_correct_text: str
    original_correct_label: str

    @property
    def question_id(self) -> str:
        return self.question.question_id

    @property
    def explanation(self) -> Optional[str]:
        return self.question.explanation

    @property
    def labels(self) -> Tuple[str, ...]:
        return OPTION_LABELS[: len(self.shuffled_options)]

    def option_for_label(self, label: str) -> Optional[str]:
        normalized = label.strip().upper()
        if normalized in self.labels:
            return self.shuffled_options[self.labels.index(normalized)]
        return None


class AnswerOutcome(str, enum.Enum):
    """Per-question outcome in a score report."""

    CORRECT = "correct"
    INCORRECT = "incorrect"
    UNANSWERED = "unanswered"


@dataclass(frozen=True)
class AnswerFeedback:
    """Immediate result of answering one question."""

    question_id: str
    selected: str
    is_correct: bool
    correct_text: str
    explanation: Optional[str]
    page_references: Tuple[str, ...] = ()
    # False when the question had already been answered and the call was a no-op
    recorded: bool = True


@dataclass(frozen=True)
class QuestionResult:
    question_id: str
    question_text: str
    user_answer: Optional[str]
    is_correct: bool
    outcome: AnswerOutcome
    correct_text: str
    explanation: Optional[str]
    page_references: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ScoreReport:
    """Terminal summary of a completed session."""

    correct_count: int
    total: int
    percentage: int
    answered_count: int
    passed: bool
    results: Tuple[QuestionResult, ...] = field(default_factory=tuple)

    @property
    def unanswered_count(self) -> int:
        return self.total - self.answered_count
