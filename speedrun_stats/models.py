"""Typed records mirroring the speedrun.com v1 JSON schema, plus query filters.

Each record exposes ``from_dict`` which maps the service's field names
(often hyphenated, e.g. ``name-style``) onto attributes. Optional fields fall
back to empty values; a field of the wrong JSON type raises
:class:`~speedrun_stats.errors.SpeedrunDecodeError`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from .client.decoding import (
    embedded,
    get_bool,
    get_datetime,
    get_dict,
    get_float,
    get_int,
    get_list,
    get_str,
    get_str_list,
    get_str_map,
    require_dict,
)


def _uri(payload: Dict[str, Any], key: str) -> str:
    """Return ``payload[key]["uri"]`` (the service nests most links this way)."""

    return get_str(get_dict(payload, key), "uri")


# ---------------------------------------------------------------------------
# Shared pieces
# ---------------------------------------------------------------------------
@dataclass
class Link:
    rel: str = ""
    uri: str = ""

    @classmethod
    def from_dict(cls, payload: Any) -> "Link":
        data = require_dict(payload, "link")
        return cls(rel=get_str(data, "rel"), uri=get_str(data, "uri"))


def _links(payload: Dict[str, Any]) -> List[Link]:
    return [Link.from_dict(item) for item in get_list(payload, "links")]


@dataclass
class Names:
    international: str = ""
    # Deprecated by the service but still returned.
    japanese: str = ""
    twitch: str = ""

    @classmethod
    def from_dict(cls, payload: Any) -> "Names":
        data = require_dict(payload, "names")
        return cls(
            international=get_str(data, "international"),
            japanese=get_str(data, "japanese"),
            twitch=get_str(data, "twitch"),
        )


@dataclass
class ColorPair:
    light: str = ""
    dark: str = ""

    @classmethod
    def from_dict(cls, payload: Any) -> "ColorPair":
        data = require_dict(payload, "color")
        return cls(light=get_str(data, "light"), dark=get_str(data, "dark"))


@dataclass
class NameStyle:
    """How a user's name is rendered: ``solid`` uses ``color``, ``gradient``
    uses ``color_from`` and ``color_to``."""

    style: str = ""
    color: ColorPair = field(default_factory=ColorPair)
    color_from: ColorPair = field(default_factory=ColorPair)
    color_to: ColorPair = field(default_factory=ColorPair)

    @classmethod
    def from_dict(cls, payload: Any) -> "NameStyle":
        data = require_dict(payload, "name-style")
        return cls(
            style=get_str(data, "style"),
            color=ColorPair.from_dict(get_dict(data, "color")),
            color_from=ColorPair.from_dict(get_dict(data, "color-from")),
            color_to=ColorPair.from_dict(get_dict(data, "color-to")),
        )


@dataclass
class Place:
    """A country or region; ``code`` is ISO 3166-1 alpha-2 (region codes are
    prefixed with the country code)."""

    code: str = ""
    names: Names = field(default_factory=Names)

    @classmethod
    def from_dict(cls, payload: Any) -> "Place":
        data = require_dict(payload, "place")
        return cls(
            code=get_str(data, "code"),
            names=Names.from_dict(get_dict(data, "names")),
        )


@dataclass
class Location:
    country: Place = field(default_factory=Place)
    region: Place = field(default_factory=Place)

    @classmethod
    def from_dict(cls, payload: Any) -> "Location":
        data = require_dict(payload, "location")
        return cls(
            country=Place.from_dict(get_dict(data, "country")),
            region=Place.from_dict(get_dict(data, "region")),
        )


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------
@dataclass
class User:
    id: str
    names: Names = field(default_factory=Names)
    pronouns: str = ""
    weblink: str = ""
    name_style: NameStyle = field(default_factory=NameStyle)
    role: str = ""
    signup: Optional[datetime] = None
    location: Location = field(default_factory=Location)
    twitch: str = ""
    hitbox: str = ""
    youtube: str = ""
    twitter: str = ""
    speedrunslive: str = ""
    icon: str = ""
    image: str = ""
    links: List[Link] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Any) -> "User":
        data = require_dict(payload, "user")
        assets = get_dict(data, "assets")
        return cls(
            id=get_str(data, "id"),
            names=Names.from_dict(get_dict(data, "names")),
            pronouns=get_str(data, "pronouns"),
            weblink=get_str(data, "weblink"),
            name_style=NameStyle.from_dict(get_dict(data, "name-style")),
            role=get_str(data, "role"),
            signup=get_datetime(data, "signup"),
            location=Location.from_dict(get_dict(data, "location")),
            twitch=_uri(data, "twitch"),
            hitbox=_uri(data, "hitbox"),
            youtube=_uri(data, "youtube"),
            twitter=_uri(data, "twitter"),
            speedrunslive=_uri(data, "speedrunslive"),
            icon=_uri(assets, "icon"),
            image=_uri(assets, "image"),
            links=_links(data),
        )

    # Convenience wrappers around the default client.
    def personal_bests(
        self, pb_filter: "PBFilter | None" = None
    ) -> List["PersonalBest"]:
        from .speedrun_api import get_default_client  # local import

        return get_default_client().personal_bests(self.id, pb_filter)

    def world_records(self) -> List["PersonalBest"]:
        from .speedrun_api import get_default_client  # local import

        return get_default_client().world_records(self.id)

    def podiums(self) -> List["PersonalBest"]:
        from .speedrun_api import get_default_client  # local import

        return get_default_client().podiums(self.id)


# ---------------------------------------------------------------------------
# Runs
# ---------------------------------------------------------------------------
@dataclass
class RunStatus:
    status: str = ""
    examiner: str = ""
    verify_date: Optional[datetime] = None

    @classmethod
    def from_dict(cls, payload: Any) -> "RunStatus":
        data = require_dict(payload, "status")
        return cls(
            status=get_str(data, "status"),
            examiner=get_str(data, "examiner"),
            verify_date=get_datetime(data, "verify-date"),
        )


@dataclass
class RunPlayer:
    """``rel`` is ``user`` (``id`` set) or ``guest`` (``name`` set)."""

    rel: str = ""
    id: str = ""
    name: str = ""
    uri: str = ""

    @classmethod
    def from_dict(cls, payload: Any) -> "RunPlayer":
        data = require_dict(payload, "player")
        return cls(
            rel=get_str(data, "rel"),
            id=get_str(data, "id"),
            name=get_str(data, "name"),
            uri=get_str(data, "uri"),
        )


@dataclass
class RunTimes:
    primary: str = ""
    primary_t: float = 0.0
    realtime: str = ""
    realtime_t: float = 0.0
    realtime_noloads: str = ""
    realtime_noloads_t: float = 0.0
    ingame: str = ""
    ingame_t: float = 0.0

    @classmethod
    def from_dict(cls, payload: Any) -> "RunTimes":
        data = require_dict(payload, "times")
        return cls(
            primary=get_str(data, "primary"),
            primary_t=get_float(data, "primary_t"),
            realtime=get_str(data, "realtime"),
            realtime_t=get_float(data, "realtime_t"),
            realtime_noloads=get_str(data, "realtime_noloads"),
            realtime_noloads_t=get_float(data, "realtime_noloads_t"),
            ingame=get_str(data, "ingame"),
            ingame_t=get_float(data, "ingame_t"),
        )


@dataclass
class RunSystem:
    platform: str = ""
    emulated: bool = False
    region: str = ""

    @classmethod
    def from_dict(cls, payload: Any) -> "RunSystem":
        data = require_dict(payload, "system")
        return cls(
            platform=get_str(data, "platform"),
            emulated=get_bool(data, "emulated"),
            region=get_str(data, "region"),
        )


@dataclass
class Run:
    id: str
    weblink: str = ""
    game: str = ""
    level: str = ""
    category: str = ""
    video_text: str = ""
    video_links: List[str] = field(default_factory=list)
    comment: str = ""
    status: RunStatus = field(default_factory=RunStatus)
    players: List[RunPlayer] = field(default_factory=list)
    # Calendar date of the run (YYYY-MM-DD) as entered by the runner.
    date: str = ""
    submitted: Optional[datetime] = None
    times: RunTimes = field(default_factory=RunTimes)
    system: RunSystem = field(default_factory=RunSystem)
    splits: Optional[Link] = None
    values: Dict[str, str] = field(default_factory=dict)
    links: List[Link] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Any) -> "Run":
        data = require_dict(payload, "run")
        videos = get_dict(data, "videos")
        splits = data.get("splits")
        return cls(
            id=get_str(data, "id"),
            weblink=get_str(data, "weblink"),
            game=get_str(data, "game"),
            level=get_str(data, "level"),
            category=get_str(data, "category"),
            video_text=get_str(videos, "text"),
            video_links=[
                get_str(require_dict(item, "videos.links[]"), "uri")
                for item in get_list(videos, "links")
            ],
            comment=get_str(data, "comment"),
            status=RunStatus.from_dict(get_dict(data, "status")),
            players=[RunPlayer.from_dict(item) for item in get_list(data, "players")],
            date=get_str(data, "date"),
            submitted=get_datetime(data, "submitted"),
            times=RunTimes.from_dict(get_dict(data, "times")),
            system=RunSystem.from_dict(get_dict(data, "system")),
            splits=Link.from_dict(splits) if splits is not None else None,
            values=get_str_map(data, "values"),
            links=_links(data),
        )


# ---------------------------------------------------------------------------
# Games and their sub-resources
# ---------------------------------------------------------------------------
@dataclass
class Ruleset:
    show_milliseconds: bool = False
    require_verification: bool = False
    require_video: bool = False
    run_times: List[str] = field(default_factory=list)
    default_time: str = ""
    emulators_allowed: bool = False

    @classmethod
    def from_dict(cls, payload: Any) -> "Ruleset":
        data = require_dict(payload, "ruleset")
        return cls(
            show_milliseconds=get_bool(data, "show-milliseconds"),
            require_verification=get_bool(data, "require-verification"),
            require_video=get_bool(data, "require-video"),
            run_times=get_str_list(data, "run-times"),
            default_time=get_str(data, "default-time"),
            emulators_allowed=get_bool(data, "emulators-allowed"),
        )


@dataclass
class Game:
    id: str
    names: Names = field(default_factory=Names)
    abbreviation: str = ""
    weblink: str = ""
    released: int = 0
    release_date: str = ""
    ruleset: Ruleset = field(default_factory=Ruleset)
    romhack: bool = False
    gametypes: List[str] = field(default_factory=list)
    platforms: List[str] = field(default_factory=list)
    regions: List[str] = field(default_factory=list)
    genres: List[str] = field(default_factory=list)
    engines: List[str] = field(default_factory=list)
    developers: List[str] = field(default_factory=list)
    publishers: List[str] = field(default_factory=list)
    # moderator user ID -> role (moderator / super-moderator)
    moderators: Dict[str, str] = field(default_factory=dict)
    created: Optional[datetime] = None
    # asset name (logo, cover-tiny, trophy-1st, ...) -> URI
    assets: Dict[str, str] = field(default_factory=dict)
    links: List[Link] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Any) -> "Game":
        data = require_dict(payload, "game")
        asset_payload = get_dict(data, "assets")
        assets = {
            name: _uri(asset_payload, name)
            for name, value in asset_payload.items()
            if value is not None
        }
        return cls(
            id=get_str(data, "id"),
            names=Names.from_dict(get_dict(data, "names")),
            abbreviation=get_str(data, "abbreviation"),
            weblink=get_str(data, "weblink"),
            released=get_int(data, "released"),
            release_date=get_str(data, "release-date"),
            ruleset=Ruleset.from_dict(get_dict(data, "ruleset")),
            romhack=get_bool(data, "romhack"),
            gametypes=get_str_list(data, "gametypes"),
            platforms=get_str_list(data, "platforms"),
            regions=get_str_list(data, "regions"),
            genres=get_str_list(data, "genres"),
            engines=get_str_list(data, "engines"),
            developers=get_str_list(data, "developers"),
            publishers=get_str_list(data, "publishers"),
            moderators=get_str_map(data, "moderators"),
            created=get_datetime(data, "created"),
            assets=assets,
            links=_links(data),
        )


@dataclass
class Category:
    id: str
    name: str = ""
    weblink: str = ""
    # per-game or per-level
    type: str = ""
    rules: str = ""
    players_type: str = ""
    players_value: int = 0
    miscellaneous: bool = False
    links: List[Link] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Any) -> "Category":
        data = require_dict(payload, "category")
        players = get_dict(data, "players")
        return cls(
            id=get_str(data, "id"),
            name=get_str(data, "name"),
            weblink=get_str(data, "weblink"),
            type=get_str(data, "type"),
            rules=get_str(data, "rules"),
            players_type=get_str(players, "type"),
            players_value=get_int(players, "value"),
            miscellaneous=get_bool(data, "miscellaneous"),
            links=_links(data),
        )


@dataclass
class Level:
    id: str
    name: str = ""
    weblink: str = ""
    rules: str = ""
    links: List[Link] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Any) -> "Level":
        data = require_dict(payload, "level")
        return cls(
            id=get_str(data, "id"),
            name=get_str(data, "name"),
            weblink=get_str(data, "weblink"),
            rules=get_str(data, "rules"),
            links=_links(data),
        )


@dataclass
class Region:
    id: str
    name: str = ""
    links: List[Link] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Any) -> "Region":
        data = require_dict(payload, "region")
        return cls(id=get_str(data, "id"), name=get_str(data, "name"), links=_links(data))


@dataclass
class Platform:
    id: str
    name: str = ""
    released: int = 0
    links: List[Link] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Any) -> "Platform":
        data = require_dict(payload, "platform")
        return cls(
            id=get_str(data, "id"),
            name=get_str(data, "name"),
            released=get_int(data, "released"),
            links=_links(data),
        )


@dataclass
class PersonalBest:
    """A user's best run in one game/category/level, with its leaderboard place.

    The sub-resources are only populated when requested through
    ``PBFilter.embeds``; otherwise ``run`` carries their IDs.
    """

    place: int
    run: Run
    game: Optional[Game] = None
    category: Optional[Category] = None
    level: Optional[Level] = None
    region: Optional[Region] = None
    platform: Optional[Platform] = None

    @classmethod
    def from_dict(cls, payload: Any) -> "PersonalBest":
        data = require_dict(payload, "personal best")
        return cls(
            place=get_int(data, "place"),
            run=Run.from_dict(data.get("run")),
            game=embedded(data, "game", Game.from_dict),
            category=embedded(data, "category", Category.from_dict),
            level=embedded(data, "level", Level.from_dict),
            region=embedded(data, "region", Region.from_dict),
            platform=embedded(data, "platform", Platform.from_dict),
        )


# ---------------------------------------------------------------------------
# Query filters
# ---------------------------------------------------------------------------
class UserOrder(Enum):
    """Sort keys accepted by ``/users`` (value is the ``orderby`` parameter)."""

    INTERNATIONAL_NAME = "name.int"
    # Japanese names are deprecated by the service.
    JAPANESE_NAME = "name.jap"
    SIGNUP_DATE = "signup"
    ROLE = "role"


class SortDirection(Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


@dataclass(frozen=True)
class UserFilter:
    """Search criteria for :func:`fetch_users`. Empty fields are not sent."""

    # Exact user ID; bypasses searching and pagination entirely.
    id: str = ""
    # Case-sensitive exact match on name, URLs or social profiles.
    lookup: str = ""
    # Case-insensitive substring of the name or URLs.
    name: str = ""
    twitch: str = ""
    hitbox: str = ""
    twitter: str = ""
    speedrunslive: str = ""
    # Maximum users to return; 0 leaves it to the service (20).
    max: int = 0
    order_by: Optional[UserOrder] = None
    direction: Optional[SortDirection] = None


@dataclass(frozen=True)
class PBFilter:
    """Filters for a user's personal bests. Empty fields are not sent."""

    # Only PBs placed at or better than this (1 = world records).
    top: int = 0
    # Series ID or abbreviation.
    series: str = ""
    # Game ID or abbreviation.
    game: str = ""
    # Comma separated embeds, e.g. "game,category,level".
    embeds: str = ""
