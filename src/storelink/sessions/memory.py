"""In-process session backend.

Not shared between workers or instances; development only.
"""

import time

from storelink.sessions.base import SessionBackend


class MemorySessionBackend(SessionBackend):
    """Dict-backed sessions; expired entries are dropped on read and on write."""

    def __init__(self, ttl: int) -> None:
        super().__init__(ttl)
        self._sessions: dict[str, tuple[float, str]] = {}

    async def close(self) -> None:
        self._sessions.clear()

    async def _read(self, session_id: str) -> str | None:
        entry = self._sessions.get(session_id)
        if entry is None:
            return None
        expires_at, payload = entry
        if time.monotonic() >= expires_at:
            del self._sessions[session_id]
            return None
        return payload

    async def _write(self, session_id: str, payload: str) -> None:
        now = time.monotonic()
        # Entries never read again would otherwise stay forever
        self._sessions = {key: entry for key, entry in self._sessions.items() if entry[0] > now}
        self._sessions[session_id] = (now + self.ttl, payload)

    async def _remove(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)
