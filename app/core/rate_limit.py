from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config.settings import settings

limiter = Limiter(key_func=get_remote_address)


def login_rate_limit() -> str:
    """Read per request so LOGIN_RATE_LIMIT changes apply without a restart"""
    return settings.login_rate_limit
