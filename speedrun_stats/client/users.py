"""User search and personal-best accessors."""

from __future__ import annotations

import dataclasses
import logging
from typing import List, Optional

from ..errors import SpeedrunNotFoundError
from ..models import PBFilter, PersonalBest, User, UserFilter
from .pagination import Paginator
from .query import personal_bests_endpoint, user_endpoint, users_endpoint
from .resources import ResourceAPI

LOGGER = logging.getLogger(__name__)


class UsersAPI:
    def __init__(self, resources: ResourceAPI, paginator: Paginator) -> None:
        self._resources = resources
        self._paginator = paginator

    def fetch_users(self, user_filter: UserFilter) -> List[User]:
        """Return users matching ``user_filter``.

        An ``id`` filter is a direct lookup of one user and ignores the other
        fields. Otherwise up to ``user_filter.max`` users are searched for,
        split across concurrent page requests above the page cap.
        """

        if user_filter.id:
            return [self._resources.fetch_one(user_endpoint(user_filter.id), User.from_dict)]

        # The service rejects max above its page cap; larger requests are
        # covered by offset pages.
        per_request = dataclasses.replace(
            user_filter, max=min(user_filter.max, self._paginator.page_size)
        )
        return self._paginator.paginate(
            users_endpoint(per_request), user_filter.max, User.from_dict
        )

    def fetch_user(self, name: str) -> User:
        """Return the user whose name, URL or social profile is exactly ``name``."""

        users = self.fetch_users(UserFilter(lookup=name))
        if not users:
            raise SpeedrunNotFoundError(f"No user matches lookup {name!r}")
        if len(users) > 1:
            LOGGER.debug("Lookup %r matched %s users; using the first", name, len(users))
        return users[0]

    def personal_bests(
        self, user_id: str, pb_filter: Optional[PBFilter] = None
    ) -> List[PersonalBest]:
        """Return the user's personal bests; the endpoint is not paginated."""

        endpoint = personal_bests_endpoint(user_id, pb_filter)
        return self._resources.fetch_list(endpoint, PersonalBest.from_dict)

    def world_records(self, user_id: str) -> List[PersonalBest]:
        return self.personal_bests(user_id, PBFilter(top=1))

    def podiums(self, user_id: str) -> List[PersonalBest]:
        """Personal bests placed in the top three."""

        return self.personal_bests(user_id, PBFilter(top=3))
