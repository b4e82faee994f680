"""
Error kinds raised by the services, each with its HTTP status
"""


class InterviewError(Exception):
    status_code = 400

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    @property
    def kind(self) -> str:
        return type(self).__name__


class Unauthorized(InterviewError):
    status_code = 401


class NotFound(InterviewError):
    status_code = 404


class InvalidTransition(InterviewError):
    status_code = 409


class NoResponses(InterviewError):
    """Feedback was requested for a session nobody has answered yet."""

    status_code = 400


class UpstreamFailure(InterviewError):
    """The generation endpoint or the voice SDK reported an error."""

    status_code = 502


class MalformedResponse(InterviewError):
    """No JSON value could be recovered from the model output."""

    status_code = 502


class InvalidShape(InterviewError):
    """JSON was recovered but does not have the requested shape."""

    status_code = 502


class PersistenceFailure(InterviewError):
    status_code = 500
