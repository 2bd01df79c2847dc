"""Retry policy for speedrun.com's 420 rate-limit signal."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable

from ..config import (
    RATE_LIMIT_BACKOFF_SECONDS,
    RATE_LIMIT_MAX_RETRIES,
    RATE_LIMIT_STATUS,
)

__all__ = ["RateLimitPolicy"]


@dataclass(frozen=True)
class RateLimitPolicy:
    """Fixed-backoff retry budget applied to one request at a time.

    The policy holds no mutable state; every ``Transport.fetch`` call keeps
    its own retry counter.
    """

    status_code: int = RATE_LIMIT_STATUS
    backoff_seconds: float = RATE_LIMIT_BACKOFF_SECONDS
    max_retries: int = RATE_LIMIT_MAX_RETRIES
    sleep: Callable[[float], None] = field(default=time.sleep, compare=False)

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.backoff_seconds < 0:
            raise ValueError("backoff_seconds must be >= 0")

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def is_rate_limited(self, status_code: int) -> bool:
        return status_code == self.status_code

    def backoff(self) -> None:
        self.sleep(self.backoff_seconds)
