"""Single-request GET transport with rate-limit retry."""

from __future__ import annotations

import logging
from typing import Mapping, Optional

import requests

from .. import config
from ..errors import SpeedrunNetworkError, SpeedrunRateLimitError
from .base import request_headers
from .rate_limit import RateLimitPolicy
from .response_handling import remote_error
from .session import get_default_session

LOGGER = logging.getLogger(__name__)

__all__ = ["Transport"]


class Transport:
    """Issues one GET against the API and returns the raw response body.

    Only the 420 rate-limit status is retried. Transport failures, error
    statuses and exhausted retries are raised as ``SpeedrunAPIError``
    subclasses.
    """

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        base_url: str = config.SPEEDRUN_BASE_URL,
        api_key: str | None = None,
        timeout: float = config.REQUEST_TIMEOUT,
        rate_limit: RateLimitPolicy | None = None,
    ) -> None:
        self._session = session or get_default_session()
        self._base_url = base_url.rstrip("/")
        self._api_key = config.SPEEDRUN_API_KEY if api_key is None else api_key
        self._timeout = timeout
        self._rate_limit = rate_limit or RateLimitPolicy()

    @property
    def base_url(self) -> str:
        return self._base_url

    def fetch(
        self, endpoint: str, headers: Optional[Mapping[str, str]] = None
    ) -> bytes:
        """GET ``base_url + endpoint`` and return the body bytes."""

        url = self._base_url + endpoint
        merged_headers = request_headers(self._api_key, headers)
        policy = self._rate_limit

        for attempt in range(1, policy.max_attempts + 1):
            LOGGER.debug("GET %s attempt=%s", url, attempt)
            try:
                response = self._session.get(
                    url, headers=merged_headers, timeout=self._timeout
                )
            except requests.RequestException as exc:
                raise SpeedrunNetworkError(
                    f"GET {url} failed: {exc.__class__.__name__}: {exc}"
                ) from exc

            if policy.is_rate_limited(response.status_code):
                if attempt < policy.max_attempts:
                    LOGGER.warning(
                        "Rate limited (%s) on %s attempt=%s; sleeping %.1fs",
                        response.status_code,
                        endpoint,
                        attempt,
                        policy.backoff_seconds,
                    )
                    policy.backoff()
                continue

            if response.status_code >= 400:
                raise remote_error(response)

            return response.content

        raise SpeedrunRateLimitError(
            f"Request failed (too many rate limits): GET {url} "
            f"after {policy.max_attempts} attempts"
        )
