"""Domain errors raised by the content and test-session services."""


class DoTestError(Exception):
    """Base class for errors raised by this package."""


class NotFoundError(DoTestError):
    """Requested content does not exist (no questions for a chapter or set)."""


class SessionNotFoundError(NotFoundError):
    """No active test session is registered under the given handle."""

    def __init__(self, session_id: str):
        super().__init__(f"Test session not found: {session_id}")
        self.session_id = session_id


class DataIntegrityError(DoTestError):
    """A question's correct-answer label does not point at a populated option."""

    def __init__(self, question_id: str, label: str | None):
        super().__init__(
            f"Question {question_id}: correct answer {label!r} "
            "does not match any populated option"
        )
        self.question_id = question_id
        self.label = label


class InvalidStateError(DoTestError):
    """An operation was called in a session state that does not allow it."""
