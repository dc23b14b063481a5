"""Core modules - configurações principais"""
from football_hub.core.config import settings
from football_hub.core.database import get_db, Base, AsyncSessionLocal
from football_hub.core.cache import cache, CacheManager
from football_hub.core.logging_config import setup_logging

__all__ = [
    "settings",
    "get_db",
    "Base",
    "AsyncSessionLocal",
    "cache",
    "CacheManager",
    "setup_logging",
]
