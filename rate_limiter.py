from slowapi import Limiter
from slowapi.util import get_remote_address

from config import settings


def current_rate_limit() -> str:
    # read per request so a changed RATE_LIMIT applies without re-importing
    return settings.RATE_LIMIT


limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[current_rate_limit],
    enabled=settings.RATE_LIMIT_ENABLED,
)
