"""Rate limiter compartilhado pelos routers"""
from slowapi import Limiter
from slowapi.util import get_remote_address
from football_hub.core.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["1000/hour", "100/minute"],
    enabled=settings.RATE_LIMIT_ENABLED,
)
