"""Shared HTTP response helpers for speedrun.com API interactions."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import requests

from ..errors import SpeedrunRemoteError

__all__ = ["remote_error", "extract_error_message"]

LOGGER = logging.getLogger(__name__)


def remote_error(response: requests.Response) -> SpeedrunRemoteError:
    """Build the error for a non-success status from its ``{"message"}`` body."""

    return SpeedrunRemoteError(
        extract_error_message(response), status_code=response.status_code
    )


def extract_error_message(response: requests.Response) -> str:
    """Return the service's error message, or ``""`` when the body has none."""

    data = _safe_json(response)
    if not isinstance(data, dict):
        return ""
    message = data.get("message")
    return message if isinstance(message, str) else ""


def _safe_json(response: requests.Response) -> Optional[Any]:
    """Safely parse JSON; return None if parsing fails."""

    try:
        return json.loads(response.content)
    except ValueError as exc:
        LOGGER.debug(
            "Failed to decode error body from %s: %s",
            getattr(response, "url", "?"),
            exc,
        )
        return None
