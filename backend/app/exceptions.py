"""Custom exceptions for topic services."""


class TopicServiceError(Exception):
    """Base exception for topic service errors."""

    code = "TOPIC_SERVICE_ERROR"
    message = "Topic service error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(TopicServiceError):
    """Raised when one or more input fields fail validation.

    ``errors`` maps every failing field to its message, so callers can
    report all problems at once.
    """

    code = "FIELD_VERIFY_FAILED"
    message = "Field validation failed"

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        super().__init__()


class NotFoundError(TopicServiceError):
    """Raised when a topic id does not exist."""

    code = "TOPIC_NOT_FOUND"
    message = "Topic not found"
