"""Core modules - configurações principais"""
from app.core.config import settings
from app.core.database import get_db, Base, SessionLocal
from app.core.cache import cache, CacheManager
from app.core.logging_config import setup_logging

__all__ = [
    "settings",
    "get_db",
    "Base",
    "SessionLocal",
    "cache",
    "CacheManager",
    "setup_logging",
]
