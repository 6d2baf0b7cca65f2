"""Session backends."""

import logging

from storelink.sessions.base import SessionBackend
from storelink.sessions.file import FileSessionBackend
from storelink.sessions.memory import MemorySessionBackend
from storelink.settings import Settings

logger = logging.getLogger(__name__)


def create_backend(settings: Settings) -> SessionBackend:
    """Select a session backend from settings.

    Priority: Redis (``REDIS_URL``) → files (``SESSION_DIR``) → memory.
    """
    ttl = settings.session_max_age
    if settings.redis_url:
        from storelink.sessions.redis_backend import RedisSessionBackend

        return RedisSessionBackend(settings.redis_url, ttl=ttl)
    if settings.session_dir:
        return FileSessionBackend(settings.session_dir, ttl=ttl)

    logger.warning("Using in-memory sessions; not shared between workers, development only")
    return MemorySessionBackend(ttl=ttl)


__all__ = [
    "FileSessionBackend",
    "MemorySessionBackend",
    "SessionBackend",
    "create_backend",
]
