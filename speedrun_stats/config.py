"""Central configuration for the speedrun.com client.

All values are constants imported by the rest of the package. Protocol
constants (base URL, rate-limit sentinel, page size) are fixed; tunables are
read from environment variables (optionally via a local `.env`).
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

from .__version__ import __version__


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


# Load .env from the current directory or any parent folder.
load_dotenv()


# ---------------------------------------------------------------------------
# speedrun.com API
# ---------------------------------------------------------------------------
SPEEDRUN_BASE_URL = "https://www.speedrun.com/api/v1"

# Optional API key sent as X-API-Key. Only needed for endpoints that act on
# behalf of a user; public reads work without it.
SPEEDRUN_API_KEY = os.getenv("SPEEDRUN_API_KEY", "")

USER_AGENT = os.getenv("SPEEDRUN_USER_AGENT", f"speedrun-stats/{__version__}")


# ---------------------------------------------------------------------------
# Rate limiting
# ---------------------------------------------------------------------------
# speedrun.com answers 420 (not 429) when a client should slow down.
RATE_LIMIT_STATUS = 420
# Seconds slept before retrying a rate-limited request.
RATE_LIMIT_BACKOFF_SECONDS = 2.0
# Number of 420 responses tolerated for one request before giving up.
RATE_LIMIT_MAX_RETRIES = 10


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------
# Largest page the service returns for a single list request.
MAX_PAGE_SIZE = 200

# Upper bound on concurrent page requests for one paginated call.
MAX_WORKERS = _env_int("SPEEDRUN_MAX_WORKERS", 8)


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------
# Request timeout in seconds.
REQUEST_TIMEOUT = _env_float("SPEEDRUN_REQUEST_TIMEOUT", 15.0)

# HTTP session pool sizes for concurrent requests.
HTTP_POOL_CONNECTIONS = 10
HTTP_POOL_MAXSIZE = 10


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = os.getenv("SPEEDRUN_LOG_LEVEL", "INFO").upper()
