from typing import Optional


class QuizError(Exception):
    """Base exception for quiz building and session errors."""

    pass


class GenerationServiceError(QuizError):
    """Generation service unreachable, failed, or returned a malformed envelope."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class MalformedDocumentError(QuizError):
    """Generated text is not a well-formed question document."""

    pass


class EmptyGenerationError(QuizError):
    """No usable questions were produced."""

    pass


class InvalidStateError(QuizError):
    """A session operation was called in the wrong state."""

    pass
