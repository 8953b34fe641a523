from __future__ import annotations


class UpstreamError(Exception):
    """Base exception for a failed upstream lookup."""

    def __init__(
        self,
        message: str,
        *,
        resource: str = "",
        key: str = "",
        status_code: int | None = None,
    ) -> None:
        self.resource = resource
        self.key = key
        self.status_code = status_code
        super().__init__(message)


class UpstreamUnavailable(UpstreamError):
    """Raised when the remote call fails or answers with an error status."""


class UpstreamNotFound(UpstreamUnavailable):
    """Raised when the upstream reports the requested id does not exist (404)."""


class DecodeFailure(UpstreamError):
    """Raised when a response body does not match the expected payload shape."""
