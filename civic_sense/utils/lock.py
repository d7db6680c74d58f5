import json
import logging
import os
import threading
import time
from pathlib import Path
from types import TracebackType
from uuid import uuid4

logger = logging.getLogger(__name__)

_registry_guard = threading.Lock()
_process_locks: dict[str, threading.Lock] = {}


def _process_lock_for(path: Path) -> threading.Lock:
    key = str(path.resolve())
    with _registry_guard:
        if key not in _process_locks:
            _process_locks[key] = threading.Lock()
        return _process_locks[key]


class LockTimeoutError(Exception):
    """Exception raised when exclusive access is not granted in time."""

    pass


class FileLock:
    """Advisory lock guarding a shared file across threads and processes.

    Holders inside one process are serialized by a per-path
    ``threading.Lock``. Holders in different processes are serialized by a
    marker file created with ``O_CREAT | O_EXCL`` that records the owner's
    pid, a random token and the acquisition time. A marker older than
    ``stale_after`` seconds is treated as left behind by a crashed holder and
    is removed, so two holders can overlap briefly after a crash.

    Attributes:
        path: Location of the marker file
        timeout: Maximum seconds to wait in ``acquire``
        stale_after: Marker age in seconds after which it is reclaimed
        poll_interval: Seconds between attempts to create the marker
    """

    def __init__(
        self,
        path: Path,
        timeout: float = 5.0,
        stale_after: float = 10.0,
        poll_interval: float = 0.05,
    ) -> None:
        self.path = Path(path)
        self.timeout = timeout
        self.stale_after = stale_after
        self.poll_interval = poll_interval
        self._process_lock = _process_lock_for(self.path)
        self._token: str | None = None

    @property
    def is_held(self) -> bool:
        return self._token is not None

    def acquire(self) -> None:
        """Block until the lock is held or the timeout expires.

        Raises:
            LockTimeoutError: If the lock could not be acquired in time
        """
        deadline = time.monotonic() + self.timeout
        if not self._process_lock.acquire(timeout=self.timeout):
            raise LockTimeoutError(f"Timed out waiting for {self.path}")

        try:
            while not self._create_marker():
                self._reclaim_if_stale()
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise LockTimeoutError(f"Timed out waiting for {self.path}")
                time.sleep(min(self.poll_interval, remaining))
        except BaseException:
            self._process_lock.release()
            raise

    def release(self) -> None:
        """Remove our marker and let the next holder in.

        The marker is only removed while it still carries our token, so a
        holder whose marker was reclaimed as stale never deletes the marker
        of the holder that replaced it.
        """
        if self._token is None:
            return
        try:
            if self._read_token() == self._token:
                self.path.unlink(missing_ok=True)
        finally:
            self._token = None
            self._process_lock.release()

    def _create_marker(self) -> bool:
        token = uuid4().hex
        try:
            fd = os.open(self.path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
        except FileExistsError:
            return False
        payload = {"pid": os.getpid(), "token": token, "acquiredAt": time.time()}
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(payload, f)
        self._token = token
        return True

    def _read_token(self) -> str | None:
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return None
        if isinstance(payload, dict):
            return payload.get("token")
        return None

    def _reclaim_if_stale(self) -> None:
        try:
            age = time.time() - self.path.stat().st_mtime
        except FileNotFoundError:
            return
        if age > self.stale_after:
            logger.warning(
                "Reclaiming stale lock %s (age %.1fs > %.1fs)",
                self.path,
                age,
                self.stale_after,
            )
            self.path.unlink(missing_ok=True)

    def __enter__(self) -> "FileLock":
        self.acquire()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()
