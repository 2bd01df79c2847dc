"""Central error types used across the client."""

from __future__ import annotations

from typing import Dict


class SpeedrunAPIError(RuntimeError):
    """Base error for speedrun.com API failures."""


class SpeedrunNetworkError(SpeedrunAPIError):
    """Raised when no HTTP response was received (DNS, refused, timeout)."""


class SpeedrunRateLimitError(SpeedrunAPIError):
    """Raised when the service kept answering 420 past the retry cap."""


class SpeedrunRemoteError(SpeedrunAPIError):
    """Raised for an HTTP error status; carries the service's error message."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SpeedrunDecodeError(SpeedrunAPIError):
    """Raised when a response body is not JSON or does not match the schema."""


class SpeedrunNotFoundError(SpeedrunAPIError):
    """Raised when a single-result lookup matched no records."""


class SpeedrunPaginationError(SpeedrunAPIError):
    """Raised when more than one page of a paginated request failed.

    ``errors`` maps each failed page offset to the exception it raised.
    """

    def __init__(self, errors: Dict[int, SpeedrunAPIError]) -> None:
        offsets = ", ".join(str(offset) for offset in sorted(errors))
        super().__init__(f"{len(errors)} page requests failed (offsets {offsets})")
        self.errors = dict(errors)


__all__ = [
    "SpeedrunAPIError",
    "SpeedrunNetworkError",
    "SpeedrunRateLimitError",
    "SpeedrunRemoteError",
    "SpeedrunDecodeError",
    "SpeedrunNotFoundError",
    "SpeedrunPaginationError",
]
