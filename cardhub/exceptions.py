"""
Exception classes for CardHub.

Issuance errors propagate to the caller; the HTTP layer maps them to status
codes through `http_status`. Verification converts them into a
`VerificationResult` instead of raising.
"""

from typing import Optional, Any


class CardHubError(Exception):
    """
    Base exception for all CardHub errors.

    All custom exceptions should inherit from this class.
    """

    http_status: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(CardHubError):
    """Template, subject or credential not found."""

    http_status = 404


class InvalidStateError(CardHubError):
    """Template is not in a state that allows rendering."""

    http_status = 400


class TypeMismatchError(CardHubError):
    """Subject has no sub-profile matching the template type."""

    http_status = 400


class ValidationError(CardHubError):
    """Input validation failed."""

    http_status = 422


class InvalidFormatError(CardHubError):
    """QR text is not a parseable verification URL."""

    http_status = 400

    def __init__(self, message: str = "Invalid QR code format", details: Optional[dict[str, Any]] = None):
        super().__init__(message, details=details)


class UnknownSubjectTypeError(CardHubError):
    """Decoded subject type is not one of the known verification branches."""

    http_status = 400

    def __init__(self, subject_type: str):
        super().__init__(
            "Unknown user type in QR code",
            details={"subject_type": subject_type},
        )
        self.subject_type = subject_type


class SubjectNotFoundError(CardHubError):
    """A subject-type specific verification lookup found nothing."""

    http_status = 404

    def __init__(self, subject_type: str, identifier: str):
        super().__init__(
            f"{subject_type.capitalize()} not found",
            details={"subject_type": subject_type, "identifier": identifier},
        )
        self.subject_type = subject_type
        self.identifier = identifier
