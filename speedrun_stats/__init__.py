"""Client library for the speedrun.com REST API."""

from .__version__ import __version__
from .errors import (
    SpeedrunAPIError,
    SpeedrunDecodeError,
    SpeedrunNetworkError,
    SpeedrunNotFoundError,
    SpeedrunPaginationError,
    SpeedrunRateLimitError,
    SpeedrunRemoteError,
)
from .models import (
    Category,
    Game,
    Level,
    PBFilter,
    PersonalBest,
    Platform,
    Region,
    Run,
    SortDirection,
    User,
    UserFilter,
    UserOrder,
)
from .speedrun_api import (
    SpeedrunClient,
    fetch_category,
    fetch_game,
    fetch_level,
    fetch_platform,
    fetch_region,
    fetch_run,
    fetch_user,
    fetch_users,
    get_default_client,
    personal_bests,
    podiums,
    world_records,
)

__all__ = [
    "__version__",
    "SpeedrunAPIError",
    "SpeedrunDecodeError",
    "SpeedrunNetworkError",
    "SpeedrunNotFoundError",
    "SpeedrunPaginationError",
    "SpeedrunRateLimitError",
    "SpeedrunRemoteError",
    "Category",
    "Game",
    "Level",
    "PBFilter",
    "PersonalBest",
    "Platform",
    "Region",
    "Run",
    "SortDirection",
    "User",
    "UserFilter",
    "UserOrder",
    "SpeedrunClient",
    "fetch_category",
    "fetch_game",
    "fetch_level",
    "fetch_platform",
    "fetch_region",
    "fetch_run",
    "fetch_user",
    "fetch_users",
    "get_default_client",
    "personal_bests",
    "podiums",
    "world_records",
]
