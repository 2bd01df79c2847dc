import json
import threading

import pytest

from speedrun_stats.client.pagination import Paginator, with_offset
from speedrun_stats.errors import (
    SpeedrunDecodeError,
    SpeedrunPaginationError,
    SpeedrunRemoteError,
)

from conftest import query_of


def _record(item):
    return item["id"]


class FakeTransport:
    """Serves a remote collection of ``total`` records honouring offset/max."""

    def __init__(self, total, failures=None, on_fetch=None):
        self.total = total
        self.failures = failures or {}
        self.on_fetch = on_fetch
        self.endpoints = []
        self._lock = threading.Lock()

    def fetch(self, endpoint, headers=None):
        with self._lock:
            self.endpoints.append(endpoint)
        if self.on_fetch is not None:
            self.on_fetch(endpoint)
        query = query_of("http://x" + endpoint)
        offset = int(query.get("offset", 0))
        if offset in self.failures:
            raise self.failures[offset]
        page_max = min(int(query.get("max", 20)), 200)
        ids = list(range(offset, min(offset + page_max, self.total)))
        payload = {
            "data": [{"id": i} for i in ids],
            "pagination": {"offset": offset, "max": page_max, "size": len(ids)},
        }
        return json.dumps(payload).encode()

    @property
    def offsets(self):
        return sorted(int(query_of("http://x" + e).get("offset", 0)) for e in self.endpoints)


def test_small_request_issues_single_call():
    transport = FakeTransport(total=1000)
    records = Paginator(transport).paginate("/users?max=150", 150, _record)

    assert transport.endpoints == ["/users?max=150"]
    assert records == list(range(150))


def test_small_request_against_short_collection():
    transport = FakeTransport(total=40)
    records = Paginator(transport).paginate("/users?max=200", 200, _record)

    assert len(transport.endpoints) == 1
    assert len(records) == 40


def test_zero_max_leaves_page_size_to_service():
    transport = FakeTransport(total=1000)
    records = Paginator(transport).paginate("/users", 0, _record)

    assert transport.endpoints == ["/users"]
    assert len(records) == 20


def test_large_request_fans_out_by_offset_and_truncates():
    transport = FakeTransport(total=1000)
    records = Paginator(transport).paginate("/users?max=200", 450, _record)

    assert transport.offsets == [0, 200, 400]
    assert len(records) == 450
    assert len(set(records)) == 450
    assert set(records) <= set(range(600))


def test_every_page_is_merged_exactly_once():
    transport = FakeTransport(total=1000)
    records = Paginator(transport).paginate("/users?max=200", 600, _record)

    assert transport.offsets == [0, 200, 400]
    assert sorted(records) == list(range(600))


def test_short_collection_is_not_an_error():
    transport = FakeTransport(total=300)
    records = Paginator(transport).paginate("/users?max=200", 450, _record)

    assert len(transport.endpoints) == 3
    assert sorted(records) == list(range(300))


@pytest.mark.parametrize(
    "requested, expected_pages",
    [(0, 1), (1, 1), (200, 1), (201, 2), (400, 2), (401, 3), (1000, 5)],
)
def test_page_count(requested, expected_pages):
    assert Paginator(FakeTransport(total=0)).page_count(requested) == expected_pages


def test_pages_are_requested_concurrently():
    barrier = threading.Barrier(3, timeout=5)
    transport = FakeTransport(total=1000, on_fetch=lambda _endpoint: barrier.wait())

    records = Paginator(transport, max_workers=3).paginate("/users?max=200", 500, _record)

    assert len(records) == 500


def test_offset_added_to_bare_endpoint():
    transport = FakeTransport(total=1000)
    Paginator(transport).paginate("/users", 250, _record)

    assert sorted(transport.endpoints) == ["/users?offset=0", "/users?offset=200"]


def test_with_offset():
    assert with_offset("/users?name=a", 400) == "/users?name=a&offset=400"
    assert with_offset("/users", 0) == "/users?offset=0"


def test_single_failed_page_raises_its_error():
    failure = SpeedrunRemoteError("Server error", status_code=503)
    transport = FakeTransport(total=1000, failures={200: failure})

    with pytest.raises(SpeedrunRemoteError) as excinfo:
        Paginator(transport).paginate("/users?max=200", 450, _record)

    assert excinfo.value is failure
    # Remaining pages still ran to completion.
    assert transport.offsets == [0, 200, 400]


def test_multiple_failed_pages_are_aggregated():
    first = SpeedrunRemoteError("a", status_code=500)
    second = SpeedrunRemoteError("b", status_code=502)
    transport = FakeTransport(total=1000, failures={200: first, 400: second})

    with pytest.raises(SpeedrunPaginationError) as excinfo:
        Paginator(transport).paginate("/users?max=200", 450, _record)

    assert excinfo.value.errors == {200: first, 400: second}
    assert excinfo.value.__cause__ is first


def test_decode_failure_in_a_page_fails_the_call():
    class BrokenPage(FakeTransport):
        def fetch(self, endpoint, headers=None):
            if endpoint.endswith("offset=200"):
                super().fetch(endpoint, headers)
                return b'{"data": {"id": 1}}'
            return super().fetch(endpoint, headers)

    with pytest.raises(SpeedrunDecodeError):
        Paginator(BrokenPage(total=1000)).paginate("/users?max=200", 300, _record)


def test_paginator_rejects_bad_settings():
    with pytest.raises(ValueError):
        Paginator(FakeTransport(total=0), page_size=0)
    with pytest.raises(ValueError):
        Paginator(FakeTransport(total=0), max_workers=0)
