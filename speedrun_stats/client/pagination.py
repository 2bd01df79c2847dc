"""Offset pagination for speedrun.com list endpoints.

Requests for at most ``MAX_PAGE_SIZE`` records go out as a single call.
Larger requests are split into one call per page, issued concurrently by
offset, merged into a shared list and truncated to the requested count.
Pages arrive in completion order; callers needing a stable order must sort.
"""

from __future__ import annotations

import logging
import math
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, TypeVar

from ..config import MAX_PAGE_SIZE, MAX_WORKERS
from ..errors import SpeedrunAPIError, SpeedrunPaginationError
from .decoding import Decoder, decode, page_envelope
from .transport import Transport

T = TypeVar("T")

LOGGER = logging.getLogger(__name__)

__all__ = ["Paginator", "with_offset"]


def with_offset(endpoint: str, offset: int) -> str:
    """Append ``offset=<n>`` to ``endpoint``'s query string."""

    separator = "&" if "?" in endpoint else "?"
    return f"{endpoint}{separator}offset={offset}"


class Paginator:
    """Fans a list request out across concurrent page requests."""

    def __init__(
        self,
        transport: Transport,
        *,
        page_size: int = MAX_PAGE_SIZE,
        max_workers: int = MAX_WORKERS,
    ) -> None:
        if page_size < 1:
            raise ValueError("page_size must be >= 1")
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        self._transport = transport
        self._page_size = page_size
        self._max_workers = max_workers

    @property
    def page_size(self) -> int:
        return self._page_size

    def page_count(self, requested_max: int) -> int:
        if requested_max <= self._page_size:
            return 1
        return math.ceil(requested_max / self._page_size)

    def paginate(
        self, endpoint: str, requested_max: int, decoder: Decoder[T]
    ) -> List[T]:
        """Return up to ``requested_max`` records decoded with ``decoder``.

        ``decoder`` decodes one record; the ``{"data": [...]}`` envelope is
        handled here. Fewer records come back when the remote collection is
        smaller than ``requested_max``.
        """

        envelope = page_envelope(decoder)

        # One request already respects the page cap; the service applies max.
        if requested_max <= self._page_size:
            page = decode(self._transport.fetch(endpoint), envelope)
            LOGGER.debug("Fetched %s records from %s", len(page.records), endpoint)
            return page.records

        count = self.page_count(requested_max)
        offsets = [index * self._page_size for index in range(count)]
        records: List[T] = []
        errors: Dict[int, SpeedrunAPIError] = {}
        lock = threading.Lock()

        def fetch_page(offset: int) -> None:
            try:
                body = self._transport.fetch(with_offset(endpoint, offset))
                page = decode(body, envelope)
            except SpeedrunAPIError as exc:
                with lock:
                    errors[offset] = exc
                return
            LOGGER.debug(
                "Page offset=%s returned %s records (size=%s)",
                offset,
                len(page.records),
                page.size,
            )
            with lock:
                records.extend(page.records)

        LOGGER.debug(
            "Paginating %s: max=%s pages=%s", endpoint, requested_max, count
        )
        with ThreadPoolExecutor(max_workers=min(count, self._max_workers)) as executor:
            futures = [executor.submit(fetch_page, offset) for offset in offsets]
        # Surface anything fetch_page did not catch.
        for future in futures:
            future.result()

        if errors:
            if len(errors) == 1:
                raise next(iter(errors.values()))
            first = errors[min(errors)]
            raise SpeedrunPaginationError(errors) from first

        return records[:requested_max]
