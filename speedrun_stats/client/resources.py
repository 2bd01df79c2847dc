"""Single-resource lookups (``/runs/{id}``, ``/games/{id}``, ...)."""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional, TypeVar
from urllib.parse import quote

from ..models import Category, Game, Level, Platform, Region, Run
from .decoding import Decoder, data_envelope, decode, page_envelope
from .transport import Transport

T = TypeVar("T")

LOGGER = logging.getLogger(__name__)


class ResourceAPI:
    """Fetches records that need exactly one request."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def fetch_one(
        self,
        endpoint: str,
        decoder: Decoder[T],
        headers: Optional[Mapping[str, str]] = None,
    ) -> T:
        body = self._transport.fetch(endpoint, headers)
        return decode(body, data_envelope(decoder))

    def fetch_list(
        self,
        endpoint: str,
        decoder: Decoder[T],
        headers: Optional[Mapping[str, str]] = None,
    ) -> List[T]:
        """Fetch an unpaginated ``{"data": [...]}`` list."""

        body = self._transport.fetch(endpoint, headers)
        return decode(body, page_envelope(decoder)).records

    def _by_id(self, collection: str, resource_id: str, decoder: Decoder[T]) -> T:
        endpoint = f"/{collection}/{quote(resource_id, safe='')}"
        LOGGER.debug("Fetching %s", endpoint)
        return self.fetch_one(endpoint, decoder)

    def fetch_run(self, run_id: str) -> Run:
        return self._by_id("runs", run_id, Run.from_dict)

    def fetch_game(self, game: str) -> Game:
        """``game`` may be the game ID or its abbreviation."""

        return self._by_id("games", game, Game.from_dict)

    def fetch_category(self, category_id: str) -> Category:
        return self._by_id("categories", category_id, Category.from_dict)

    def fetch_level(self, level_id: str) -> Level:
        return self._by_id("levels", level_id, Level.from_dict)

    def fetch_region(self, region_id: str) -> Region:
        return self._by_id("regions", region_id, Region.from_dict)

    def fetch_platform(self, platform_id: str) -> Platform:
        return self._by_id("platforms", platform_id, Platform.from_dict)
