import json
import logging
import os
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any

from civic_sense.config import Settings, get_settings
from civic_sense.utils.lock import FileLock

logger = logging.getLogger(__name__)

Record = dict[str, Any]


class StoreError(Exception):
    """Exception raised when a collection file cannot be read or written."""

    pass


class JsonStore:
    """File-backed record set for one collection.

    Each collection lives in ``<data_dir>/<name>.json`` as a JSON array and
    is always loaded and replaced as a whole. Mutations go through
    ``mutate`` (or the ``append``/``prepend`` helpers built on it), which
    holds the collection's ``FileLock`` while reloading, changing and
    persisting the records.

    Attributes:
        name: Name of the collection
        path: Location of the collection file
        lock_path: Location of the collection's lock marker
    """

    def __init__(self, name: str, settings: Settings | None = None) -> None:
        """Initialize the store for a collection.

        Args:
            name: Name of the collection, e.g. ``"posts"``
            settings: Settings to use; read from the environment when omitted
        """
        self._settings = settings or get_settings()
        self.name = name
        self.path: Path = self._settings.data_dir / f"{name}.json"
        self.lock_path: Path = self.path.with_name(self.path.name + ".lock")

    def lock(self) -> FileLock:
        """Create the lock guarding this collection.

        Returns:
            An unacquired ``FileLock`` configured from the settings
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        return FileLock(
            self.lock_path,
            timeout=self._settings.lock_timeout,
            stale_after=self._settings.lock_stale_after,
        )

    def load_all(self) -> list[Record]:
        """Load every record of the collection.

        A missing file is an empty collection. Nothing is written.

        Returns:
            The records in file order

        Raises:
            StoreError: If the file cannot be read or is not a JSON array
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            raise StoreError(f"Failed to read {self.name}: {str(e)}")

        if not raw.strip():
            return []
        try:
            records = json.loads(raw)
        except ValueError as e:
            raise StoreError(f"Corrupt {self.name} data: {str(e)}")
        if not isinstance(records, list):
            raise StoreError(f"Corrupt {self.name} data: expected a JSON array")
        return records

    def replace_all(self, records: list[Record]) -> None:
        """Persist the whole collection.

        The records are written to a temporary file beside the collection
        and moved into place, so readers never see a partial file.

        Args:
            records: The full record set to store

        Raises:
            StoreError: If the file cannot be written
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=self.path.name + ".", suffix=".tmp", dir=self.path.parent
            )
        except OSError as e:
            raise StoreError(f"Failed to write {self.name}: {str(e)}")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except OSError as e:
            raise StoreError(f"Failed to write {self.name}: {str(e)}")
        finally:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)

    def find(self, record_id: str) -> Record | None:
        """Find a record by its ``id`` without locking.

        Args:
            record_id: Identifier of the record

        Returns:
            The record, or None if it does not exist
        """
        return find_record(self.load_all(), record_id)

    def mutate(self, change: Callable[[list[Record]], Any]) -> Any:
        """Apply a change to the collection under its lock.

        The records are reloaded after the lock is taken. ``change`` edits
        the list in place and returns a result for the caller. If ``change``
        raises, nothing is written.

        Args:
            change: Callable receiving the freshly loaded records

        Returns:
            Whatever ``change`` returned

        Raises:
            LockTimeoutError: If the lock could not be acquired in time
            StoreError: If the collection cannot be read or written
        """
        with self.lock():
            records = self.load_all()
            result = change(records)
            self.replace_all(records)
            return result

    def append(self, record: Record) -> Record:
        self.mutate(lambda records: records.append(record))
        logger.info("Added %s record %s", self.name, record.get("id"))
        return record

    def prepend(self, record: Record) -> Record:
        self.mutate(lambda records: records.insert(0, record))
        logger.info("Added %s record %s", self.name, record.get("id"))
        return record


def find_record(records: list[Record], record_id: str) -> Record | None:
    for record in records:
        if record.get("id") == record_id:
            return record
    return None
