"""Request engine for the speedrun.com API (transport, pagination, decoding)."""

from .decoding import Page, decode  # noqa: F401
from .pagination import Paginator  # noqa: F401
from .rate_limit import RateLimitPolicy  # noqa: F401
from .session import create_default_session, get_default_session  # noqa: F401
from .transport import Transport  # noqa: F401
