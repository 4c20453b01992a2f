"""Option shuffling for session questions."""
from __future__ import annotations

import logging
from typing import Any, MutableSequence, Protocol, Sequence, TypeVar

from dotest.errors import DataIntegrityError
from dotest.models.domain import OPTION_LABELS, Question, SessionQuestion

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RandomSource(Protocol):
    """The subset of `random.Random` the session pipeline relies on."""

    def shuffle(self, x: MutableSequence[Any]) -> None: ...

    def sample(self, population: Sequence[T], k: int) -> list[T]: ...

    def choice(self, seq: Sequence[T]) -> T: ...


def resolve_correct_option(question: Question) -> tuple[str, str]:
    """Return (label, text) of the correct option.

    Raises:
        DataIntegrityError: the label is missing or names an empty option.
    """
    label = (question.correct_answer or "").strip().upper()
    for option_label, text in question.options():
        if option_label == label:
            return option_label, text
    raise DataIntegrityError(question.question_id, question.correct_answer)


def is_well_formed(question: Question) -> bool:
    """True if the correct-answer label names a populated option."""
    try:
        resolve_correct_option(question)
    except DataIntegrityError as exc:
        logger.warning("Skipping question: %s", exc)
        return False
    return True


def shuffle_options(question: Question, rng: RandomSource) -> SessionQuestion:
    """Shuffle a question's options and re-derive the correct label."""
    correct_label, correct_text = resolve_correct_option(question)
    return _build(question, rng, correct_label, correct_text)


def shuffle_options_with_fallback(
    question: Question, rng: RandomSource
) -> SessionQuestion:
    """Like `shuffle_options`, but a malformed answer key falls back to the
    first populated option instead of failing.
    """
    try:
        return shuffle_options(question, rng)
    except DataIntegrityError as exc:
        options = question.options()
        if not options:
            raise
        fallback_label, fallback_text = options[0]
        logger.warning(
            "%s; treating option %s as correct", exc, fallback_label
        )
        return _build(question, rng, fallback_label, fallback_text)


def _build(
    question: Question,
    rng: RandomSource,
    correct_label: str,
    correct_text: str,
) -> SessionQuestion:
    texts = [text for _, text in question.options()]
    rng.shuffle(texts)
    new_index = texts.index(correct_text)
    return SessionQuestion(
        question=question,
        shuffled_options=tuple(texts),
        shuffled_correct_label=OPTION_LABELS[new_index],
        original_correct_text=correct_text,
        original_correct_label=correct_label,
    )
