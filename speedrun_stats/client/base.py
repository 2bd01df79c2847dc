"""Shared request headers for speedrun.com calls."""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from .. import config


def default_headers() -> Dict[str, str]:
    """Headers installed on the default session."""

    return {
        "Accept-Encoding": "gzip, deflate",
        "Accept": "application/json",
        "User-Agent": config.USER_AGENT,
    }


def request_headers(
    api_key: str, extra: Optional[Mapping[str, str]] = None
) -> Dict[str, str]:
    """Per-request headers: ``X-API-Key`` when a key is set, then ``extra``."""

    headers: Dict[str, str] = {}
    if api_key:
        headers["X-API-Key"] = api_key
    if extra:
        headers.update(extra)
    return headers
