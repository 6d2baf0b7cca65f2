"""Session backend interface."""

import logging
import re
from abc import ABC, abstractmethod

from pydantic import ValidationError

from storelink.auth.models import Session

logger = logging.getLogger(__name__)

_SESSION_ID = re.compile(r"^[A-Za-z0-9_-]{16,128}$")


class SessionBackend(ABC):
    """Server-side session storage shared by every request worker.

    Subclasses only move opaque JSON payloads; (de)serialization and id
    checks live here.
    """

    def __init__(self, ttl: int) -> None:
        self.ttl = ttl

    async def connect(self) -> None:
        """Open backend resources. Called once at application startup."""

    async def close(self) -> None:
        """Release backend resources. Called once at application shutdown."""

    async def load(self, session_id: str | None) -> Session | None:
        """Load a session by id.

        Returns:
            The stored session, or None when the id is unknown, expired,
            malformed or the payload cannot be read back.

        Raises:
            SessionStoreError: Backend unreachable.
        """
        if not session_id or not _SESSION_ID.match(session_id):
            return None

        payload = await self._read(session_id)
        if payload is None:
            return None

        try:
            session = Session.model_validate_json(payload)
        except (ValidationError, ValueError) as e:
            logger.warning("Discarding unreadable session %s: %s", session_id[:8], e)
            return None

        session.session_id = session_id
        session.mark_persisted()
        return session

    async def save(self, session: Session) -> None:
        """Persist a session, resetting its time to live.

        Raises:
            SessionStoreError: Backend unreachable or write failed.
        """
        await self._write(session.session_id, session.model_dump_json())
        session.mark_persisted()

    async def delete(self, session: Session) -> None:
        """Remove a session from the backend. Unknown ids are ignored.

        Raises:
            SessionStoreError: Backend unreachable or delete failed.
        """
        if _SESSION_ID.match(session.session_id):
            await self._remove(session.session_id)
        session.mark_discarded()

    @abstractmethod
    async def _read(self, session_id: str) -> str | None: ...

    @abstractmethod
    async def _write(self, session_id: str, payload: str) -> None: ...

    @abstractmethod
    async def _remove(self, session_id: str) -> None: ...
