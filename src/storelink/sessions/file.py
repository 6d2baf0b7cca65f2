"""File-per-session backend.

Writes go to a temp file that is renamed into place, so concurrent workers
on the same host never observe a partial session.
"""

import logging
import secrets
import time
from pathlib import Path

import aiofiles

from storelink.exceptions import SessionStoreError
from storelink.sessions.base import SessionBackend

logger = logging.getLogger(__name__)


class FileSessionBackend(SessionBackend):
    """Sessions stored as JSON files; expiry derived from modification time.

    Expired files are swept on connect and every ``SWEEP_EVERY`` writes.
    """

    SWEEP_EVERY = 100

    def __init__(self, directory: str | Path, ttl: int) -> None:
        super().__init__(ttl)
        self.directory = Path(directory)
        self._writes = 0

    def _path(self, session_id: str) -> Path:
        return self.directory / f"{session_id}.json"

    async def connect(self) -> None:
        try:
            self.directory.mkdir(parents=True, exist_ok=True, mode=0o700)
        except OSError as e:
            raise SessionStoreError(f"Cannot create session directory {self.directory}: {e}") from e
        self._sweep()
        logger.debug("File sessions in %s", self.directory)

    async def _read(self, session_id: str) -> str | None:
        path = self._path(session_id)
        try:
            if path.stat().st_mtime + self.ttl <= time.time():
                path.unlink(missing_ok=True)
                return None
            async with aiofiles.open(path) as f:
                return await f.read()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise SessionStoreError(f"Failed to read session {session_id[:8]}: {e}") from e

    async def _write(self, session_id: str, payload: str) -> None:
        path = self._path(session_id)
        temp_path = path.with_suffix(f".{secrets.token_hex(4)}.tmp")
        try:
            async with aiofiles.open(temp_path, "w") as f:
                await f.write(payload)
            temp_path.chmod(0o600)
            temp_path.replace(path)
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            raise SessionStoreError(f"Failed to write session {session_id[:8]}: {e}") from e

        self._writes += 1
        if self._writes % self.SWEEP_EVERY == 0:
            self._sweep()

    async def _remove(self, session_id: str) -> None:
        try:
            self._path(session_id).unlink(missing_ok=True)
        except OSError as e:
            raise SessionStoreError(f"Failed to delete session {session_id[:8]}: {e}") from e

    def _sweep(self) -> int:
        """Delete expired session files. Returns how many were removed."""
        cutoff = time.time() - self.ttl
        removed = 0
        try:
            paths = list(self.directory.glob("*.json"))
        except OSError as e:
            logger.warning("Session sweep of %s failed: %s", self.directory, e)
            return 0
        for path in paths:
            try:
                if path.stat().st_mtime <= cutoff:
                    path.unlink()
                    removed += 1
            except FileNotFoundError:
                continue
            except OSError as e:
                logger.warning("Could not remove expired session %s: %s", path.name, e)
        if removed:
            logger.debug("Swept %d expired sessions from %s", removed, self.directory)
        return removed
