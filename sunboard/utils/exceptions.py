"""Exception hierarchy shared by the service layer, the API and the client."""


class SunboardError(Exception):
    """Base class for all Sunboard errors."""


class NotFoundError(SunboardError):
    """A referenced record does not exist."""

    resource = "Record"

    def __init__(self, identifier: object, message: str | None = None) -> None:
        self.identifier = identifier
        super().__init__(message or f"{self.resource} {identifier} not found")


class ProjectNotFoundError(NotFoundError):
    resource = "Project"


class TaskNotFoundError(NotFoundError):
    resource = "Task"


class TeamNotFoundError(NotFoundError):
    resource = "Team"


class PillarNotFoundError(NotFoundError):
    resource = "Pillar"


class ReviewSessionNotFoundError(NotFoundError):
    resource = "Review session"


class FeedbackNotFoundError(NotFoundError):
    resource = "Feedback"


class ValidationError(SunboardError):
    """Input uses a value outside the known vocabulary."""


class InvalidSortKeyError(ValidationError):
    """Unknown sort key or direction passed to the query engine."""


class InvalidAnswerError(ValidationError):
    """A review answer does not fit its question."""


class ConflictError(SunboardError):
    """The write would violate a uniqueness rule (e.g. a duplicate slug)."""


class TransientIOError(SunboardError):
    """Network failure talking to the Sunboard API."""


class SunboardAPIError(TransientIOError):
    """Structured error from the Sunboard API.

    Carries the endpoint, HTTP status and a truncated response body.
    A status code of 0 means the request never got a response.
    """

    def __init__(
        self,
        message: str,
        *,
        endpoint: str = "",
        status_code: int = 0,
        body: str = "",
    ) -> None:
        self.endpoint = endpoint
        self.status_code = status_code
        self.body = body
        super().__init__(message)

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404
