"""
Failure Classification — Known, Explainable Errors.

Every error that can reach a client is classified by a FailureKind and
carries the HTTP status the transport layer should use.

INVARIANT: Legality failures are NOT errors. An illegal deck is a normal
verdict (`legal: false`). Only malformed input and unavailable
collaborators raise.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"
    INVALID_DECK_FORMAT = "invalid_deck_format"
    INVALID_QUANTITY = "invalid_quantity"

    # Collaborator failures
    SERVICE_UNAVAILABLE = "service_unavailable"
    EXTERNAL_API_ERROR = "external_api_error"
    CONFIGURATION_ERROR = "configuration_error"

    # Unknown
    UNKNOWN = "unknown"


class FailureDetail(BaseModel):
    """Wire shape of a classified failure."""

    error: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> FailureDetail:
        """Convert to the failure wire shape."""
        return FailureDetail(error=self.message, kind=self.kind, detail=self.detail)


class UnknownFailure(FailureDetail):
    """Failure body used when the cause is not classified."""

    @classmethod
    def from_exception(cls, exception: Exception) -> "UnknownFailure":
        """
        Build the fixed unknown-failure body.

        Only the exception type is exposed, never its message.
        """
        return cls(
            error="Unexpected error while checking the deck. Try again later.",
            kind=FailureKind.UNKNOWN,
            detail=type(exception).__name__,
        )
