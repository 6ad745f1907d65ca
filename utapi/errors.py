"""Exceptions raised by the UploadThing client.

Every failure is surfaced to the caller as-is: there is no retry and no
recovery. The underlying httpx or pydantic exception stays reachable through
``__cause__``.

Tests:
    - tests/unit/test_errors.py
"""

__all__ = [
    "APIError",
    "ConfigurationError",
    "ResponseDecodeError",
    "TransportError",
    "UploadError",
    "UploadThingError",
]


class UploadThingError(Exception):
    """Base exception for client errors.

    Attributes:
        message: Error message
        status_code: HTTP status code (if applicable)
        body: Raw response body (if applicable)
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        return self.message


class ConfigurationError(UploadThingError):
    """Required configuration is missing or invalid."""


class APIError(UploadThingError):
    """The UploadThing API answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(
            f"UploadThing: error {status_code}: {body}",
            status_code=status_code,
            body=body,
        )


class UploadError(UploadThingError):
    """A direct upload to a presigned URL failed."""

    @classmethod
    def from_status(cls, status_code: int, body: str) -> "UploadError":
        return cls(
            f"File upload error: {status_code}: {body}",
            status_code=status_code,
            body=body,
        )


class TransportError(UploadThingError):
    """The HTTP request could not be completed."""


class ResponseDecodeError(UploadThingError):
    """The response body did not decode into the expected structure."""
