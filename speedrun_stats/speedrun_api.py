"""speedrun.com API client: users, personal bests and single-resource lookups.

Public surface:
- SpeedrunClient(session=None, api_key=None, ...)
- fetch_users(user_filter) / fetch_user(name)
- personal_bests(user_id, pb_filter=None) / world_records(user_id) / podiums(user_id)
- fetch_run / fetch_game / fetch_category / fetch_level / fetch_region / fetch_platform
- get_default_client()

Module-level functions delegate to a lazily created default client.
"""

from __future__ import annotations

import threading
from typing import List, Optional

import requests

from .config import MAX_PAGE_SIZE, MAX_WORKERS, REQUEST_TIMEOUT, SPEEDRUN_BASE_URL
from .client.pagination import Paginator
from .client.rate_limit import RateLimitPolicy
from .client.resources import ResourceAPI
from .client.transport import Transport
from .client.users import UsersAPI
from .models import (
    Category,
    Game,
    Level,
    PBFilter,
    PersonalBest,
    Platform,
    Region,
    Run,
    User,
    UserFilter,
)

__all__ = [
    "SpeedrunClient",
    "get_default_client",
    "fetch_users",
    "fetch_user",
    "personal_bests",
    "world_records",
    "podiums",
    "fetch_run",
    "fetch_game",
    "fetch_category",
    "fetch_level",
    "fetch_region",
    "fetch_platform",
]


class SpeedrunClient:
    """Bundles the transport, paginator and accessors around one session."""

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        base_url: str = SPEEDRUN_BASE_URL,
        api_key: str | None = None,
        timeout: float = REQUEST_TIMEOUT,
        rate_limit: RateLimitPolicy | None = None,
        page_size: int = MAX_PAGE_SIZE,
        max_workers: int = MAX_WORKERS,
    ) -> None:
        self.transport = Transport(
            session=session,
            base_url=base_url,
            api_key=api_key,
            timeout=timeout,
            rate_limit=rate_limit,
        )
        self.paginator = Paginator(
            self.transport, page_size=page_size, max_workers=max_workers
        )
        self._resources = ResourceAPI(self.transport)
        self._users = UsersAPI(self._resources, self.paginator)

    # --- Users ----------------------------------------------------------
    def fetch_users(self, user_filter: UserFilter) -> List[User]:
        return self._users.fetch_users(user_filter)

    def fetch_user(self, name: str) -> User:
        return self._users.fetch_user(name)

    def personal_bests(
        self, user_id: str, pb_filter: Optional[PBFilter] = None
    ) -> List[PersonalBest]:
        return self._users.personal_bests(user_id, pb_filter)

    def world_records(self, user_id: str) -> List[PersonalBest]:
        return self._users.world_records(user_id)

    def podiums(self, user_id: str) -> List[PersonalBest]:
        return self._users.podiums(user_id)

    # --- Single resources -----------------------------------------------
    def fetch_run(self, run_id: str) -> Run:
        return self._resources.fetch_run(run_id)

    def fetch_game(self, game: str) -> Game:
        return self._resources.fetch_game(game)

    def fetch_category(self, category_id: str) -> Category:
        return self._resources.fetch_category(category_id)

    def fetch_level(self, level_id: str) -> Level:
        return self._resources.fetch_level(level_id)

    def fetch_region(self, region_id: str) -> Region:
        return self._resources.fetch_region(region_id)

    def fetch_platform(self, platform_id: str) -> Platform:
        return self._resources.fetch_platform(platform_id)


_default_client: SpeedrunClient | None = None
_default_client_lock = threading.Lock()


def get_default_client() -> SpeedrunClient:
    global _default_client
    with _default_client_lock:
        if _default_client is None:
            _default_client = SpeedrunClient()
        return _default_client


def fetch_users(user_filter: UserFilter) -> List[User]:
    """Return the users matching ``user_filter``."""

    return get_default_client().fetch_users(user_filter)


def fetch_user(name: str) -> User:
    """Return the single user matching ``name`` exactly.

    Raises ``SpeedrunNotFoundError`` when nobody matches.
    """

    return get_default_client().fetch_user(name)


def personal_bests(
    user_id: str, pb_filter: Optional[PBFilter] = None
) -> List[PersonalBest]:
    return get_default_client().personal_bests(user_id, pb_filter)


def world_records(user_id: str) -> List[PersonalBest]:
    return get_default_client().world_records(user_id)


def podiums(user_id: str) -> List[PersonalBest]:
    return get_default_client().podiums(user_id)


def fetch_run(run_id: str) -> Run:
    return get_default_client().fetch_run(run_id)


def fetch_game(game: str) -> Game:
    return get_default_client().fetch_game(game)


def fetch_category(category_id: str) -> Category:
    return get_default_client().fetch_category(category_id)


def fetch_level(level_id: str) -> Level:
    return get_default_client().fetch_level(level_id)


def fetch_region(region_id: str) -> Region:
    return get_default_client().fetch_region(region_id)


def fetch_platform(platform_id: str) -> Platform:
    return get_default_client().fetch_platform(platform_id)
