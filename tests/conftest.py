"""Global pytest fixtures & helpers.

Adds project root to path and provides fake HTTP plumbing plus payload
factories shaped like speedrun.com responses, so no test touches the network.
"""
from __future__ import annotations

import json
import os
import sys
import threading
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import parse_qs, urlsplit

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from speedrun_stats.client.rate_limit import RateLimitPolicy


class FakeResp:
    """Minimal fake response matching needed parts of requests.Response."""

    def __init__(self, status_code=200, data=None, body=None, url=""):
        self.status_code = status_code
        self.url = url
        if body is not None:
            self.content = body if isinstance(body, bytes) else body.encode()
        else:
            self.content = json.dumps(data if data is not None else {}).encode()

    @property
    def text(self):
        return self.content.decode()


class FakeSession:
    """Records GET calls and answers them from ``handler`` (or a script)."""

    def __init__(self, handler: Callable[..., FakeResp] | None = None, script=None):
        self._handler = handler
        self._script = list(script or [])
        self._lock = threading.Lock()
        self.calls: List[Dict[str, Any]] = []

    def get(self, url, headers=None, params=None, timeout=None):
        with self._lock:
            self.calls.append({"url": url, "headers": dict(headers or {}), "timeout": timeout})
            if self._handler is None:
                item = self._script.pop(0)
                if isinstance(item, Exception):
                    raise item
                return item
        return self._handler(url)

    @property
    def urls(self) -> List[str]:
        return [call["url"] for call in self.calls]


def query_of(url: str) -> Dict[str, str]:
    """Flatten a URL's query string into a dict (last value wins)."""

    return {key: values[-1] for key, values in parse_qs(urlsplit(url).query).items()}


# --- Factory helpers -------------------------------------------------
def make_user(user_id: str, name: str | None = None) -> Dict[str, Any]:
    name = name or f"runner-{user_id}"
    return {
        "id": user_id,
        "names": {"international": name, "japanese": None},
        "pronouns": "they/them",
        "weblink": f"https://www.speedrun.com/user/{name}",
        "name-style": {
            "style": "gradient",
            "color-from": {"light": "#FFB3F3", "dark": "#FFB3F3"},
            "color-to": {"light": "#E44141", "dark": "#E44141"},
        },
        "role": "user",
        "signup": "2017-05-04T18:09:16Z",
        "location": {
            "country": {"code": "se", "names": {"international": "Sweden", "japanese": None}},
            "region": None,
        },
        "twitch": {"uri": f"https://www.twitch.tv/{name}"},
        "hitbox": None,
        "youtube": None,
        "twitter": None,
        "speedrunslive": None,
        "assets": {"icon": {"uri": None}, "image": {"uri": "https://example.invalid/img.png"}},
        "links": [{"rel": "self", "uri": f"https://www.speedrun.com/api/v1/users/{user_id}"}],
    }


def make_run(run_id: str = "run1", level: str | None = None) -> Dict[str, Any]:
    return {
        "id": run_id,
        "weblink": f"https://www.speedrun.com/run/{run_id}",
        "game": "o1y9wo6q",
        "level": level,
        "category": "wkpoo02r",
        "videos": {"links": [{"uri": "https://youtu.be/abc"}]},
        "comment": None,
        "status": {
            "status": "verified",
            "examiner": "mod1",
            "verify-date": "2021-03-02T10:00:00Z",
        },
        "players": [{"rel": "user", "id": "u1", "uri": "https://www.speedrun.com/api/v1/users/u1"}],
        "date": "2021-03-01",
        "submitted": "2021-03-01T21:14:03Z",
        "times": {
            "primary": "PT1H2M3S",
            "primary_t": 3723,
            "realtime": "PT1H2M3S",
            "realtime_t": 3723,
            "realtime_noloads": None,
            "realtime_noloads_t": 0,
            "ingame": None,
            "ingame_t": 0,
        },
        "system": {"platform": "w89rwelk", "emulated": False, "region": None},
        "splits": None,
        "values": {"68km3w4l": "zqoyz021"},
        "links": [],
    }


def make_game(game_id: str = "o1y9wo6q") -> Dict[str, Any]:
    return {
        "id": game_id,
        "names": {"international": "Super Mario 64", "japanese": None, "twitch": "Super Mario 64"},
        "abbreviation": "sm64",
        "weblink": "https://www.speedrun.com/sm64",
        "released": 1996,
        "release-date": "1996-06-23",
        "ruleset": {
            "show-milliseconds": False,
            "require-verification": True,
            "require-video": False,
            "run-times": ["realtime"],
            "default-time": "realtime",
            "emulators-allowed": False,
        },
        "romhack": False,
        "gametypes": [],
        "platforms": ["w89rwelk"],
        "regions": ["o316x197"],
        "genres": [],
        "engines": [],
        "developers": ["xv6dvx62"],
        "publishers": ["pe5t3ovg"],
        "moderators": {"u1": "super-moderator"},
        "created": None,
        "assets": {
            "logo": {"uri": "https://example.invalid/logo.png"},
            "cover-tiny": {"uri": "https://example.invalid/tiny.png"},
            "trophy-4th": None,
        },
        "links": [],
    }


def make_category(category_id: str = "wkpoo02r") -> Dict[str, Any]:
    return {
        "id": category_id,
        "name": "120 Star",
        "weblink": "https://www.speedrun.com/sm64#120_Star",
        "type": "per-game",
        "rules": "Collect all stars.",
        "players": {"type": "exactly", "value": 1},
        "miscellaneous": False,
        "links": [],
    }


def make_personal_best(place: int, run_id: str, **embeds: Any) -> Dict[str, Any]:
    entry: Dict[str, Any] = {"place": place, "run": make_run(run_id)}
    for key, value in embeds.items():
        entry[key] = {"data": value}
    return entry


def envelope(data: Any, size: Optional[int] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"data": data}
    if size is not None:
        payload["pagination"] = {"offset": 0, "max": size, "size": size, "links": []}
    return payload


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def sleeps() -> List[float]:
    return []


@pytest.fixture
def rate_limit(sleeps) -> RateLimitPolicy:
    """Default 420/10-retry policy that records sleeps instead of sleeping."""

    return RateLimitPolicy(sleep=sleeps.append)


@pytest.fixture(autouse=True)
def reset_default_client(monkeypatch):
    """Keep module-level wrappers from building a real default client."""

    from speedrun_stats import speedrun_api

    monkeypatch.setattr(speedrun_api, "_default_client", None)
