"""Endpoint builders turning filter dataclasses into path + query string."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple
from urllib.parse import quote

from ..models import PBFilter, UserFilter

QueryParams = Sequence[Tuple[str, object]]

__all__ = ["build_endpoint", "users_endpoint", "user_endpoint", "personal_bests_endpoint"]


def build_endpoint(path: str, params: QueryParams) -> str:
    """Join ``path`` with ``key=value`` pairs, skipping empty/zero values."""

    parts: List[str] = []
    for key, value in params:
        if value is None or value == "" or value == 0:
            continue
        parts.append(f"{key}={quote(str(value), safe=',')}")
    if not parts:
        return path
    return f"{path}?{'&'.join(parts)}"


def user_endpoint(user_id: str) -> str:
    return f"/users/{quote(user_id, safe='')}"


def users_endpoint(user_filter: UserFilter) -> str:
    """``/users`` search endpoint for everything in ``user_filter`` but ``id``."""

    return build_endpoint(
        "/users",
        [
            ("lookup", user_filter.lookup),
            ("name", user_filter.name),
            ("twitch", user_filter.twitch),
            ("hitbox", user_filter.hitbox),
            ("twitter", user_filter.twitter),
            ("speedrunslive", user_filter.speedrunslive),
            ("max", user_filter.max),
            ("orderby", user_filter.order_by.value if user_filter.order_by else None),
            ("direction", user_filter.direction.value if user_filter.direction else None),
        ],
    )


def personal_bests_endpoint(user_id: str, pb_filter: Optional[PBFilter] = None) -> str:
    pb_filter = pb_filter or PBFilter()
    return build_endpoint(
        f"{user_endpoint(user_id)}/personal-bests",
        [
            ("game", pb_filter.game),
            ("series", pb_filter.series),
            ("top", pb_filter.top),
            ("embed", pb_filter.embeds),
        ],
    )
