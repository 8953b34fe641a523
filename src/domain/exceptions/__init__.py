from .upstream import (
    DecodeFailure,
    UpstreamError,
    UpstreamNotFound,
    UpstreamUnavailable,
)

__all__ = [
    "DecodeFailure",
    "UpstreamError",
    "UpstreamNotFound",
    "UpstreamUnavailable",
]
