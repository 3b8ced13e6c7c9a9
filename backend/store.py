"""
Persistence for show designs.

The whole collection lives under one key of a small key-value store as a
JSON array.  Every save is a full read-modify-write of that array; there is
a single user and a single writer, so no locking is attempted.

Two stores are provided:
  JsonFileStore — a JSON object on disk, the local-storage equivalent
  MemoryStore   — a dict, for tests and throwaway sessions
"""

import json
import logging
import os
import tempfile
from typing import Dict, List, Optional, Protocol

from backend.errors import DesignLockedError
from models.show import ShowDesign

logger = logging.getLogger(__name__)

DEFAULT_KEY = "bandShows"


class KeyValueStore(Protocol):
    """Synchronous string get/set, the only thing the repository needs."""

    def load(self, key: str) -> Optional[str]:
        ...

    def store(self, key: str, value: str) -> None:
        ...


class MemoryStore:
    """Dict-backed store; contents vanish with the object."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def store(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """
    Key-value store kept as one JSON object in a file.

    A missing or unreadable file reads as an empty store.  Writes go to a
    temporary file in the same directory that is then renamed over the
    original, so a crash mid-write leaves the previous contents intact.
    """

    def __init__(self, path: str):
        self.path = path

    def load(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def store(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise

    def _read_all(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable store file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store file %s: expected a JSON object", self.path)
            return {}
        return data


class ShowRepository:
    """
    The saved collection of show designs.

    Usage:
        repo = ShowRepository(JsonFileStore("show_designs.json"))
        shows = repo.load_all()
        shows = repo.upsert(design)     # replace by id, or append

    lock_signed : refuse to overwrite a design that was saved signed
    """

    def __init__(self, store: KeyValueStore, key: str = DEFAULT_KEY, lock_signed: bool = True):
        self.store = store
        self.key = key
        self.lock_signed = lock_signed

    # ── Public API ────────────────────────────────────────────────────────────

    def load_all(self) -> List[ShowDesign]:
        """
        Read the whole collection.

        A missing key, undecodable JSON or a payload that is not a list all
        read as an empty collection.  Records that cannot be rebuilt are
        skipped individually.
        """
        raw = self.store.load(self.key)
        if raw is None:
            return []
        try:
            payload = json.loads(raw)
        except ValueError as exc:
            logger.warning("Stored designs under %r are not valid JSON (%s); starting empty.",
                           self.key, exc)
            return []
        if not isinstance(payload, list):
            logger.warning("Stored designs under %r are not a list; starting empty.", self.key)
            return []

        shows: List[ShowDesign] = []
        seen = set()
        for record in payload:
            try:
                show = ShowDesign.from_dict(record)
            except (KeyError, TypeError, ValueError, AttributeError) as exc:
                logger.warning("Skipping malformed design record %r: %s", record, exc)
                continue
            if show.id in seen:
                logger.warning("Skipping duplicate design id %s", show.id)
                continue
            seen.add(show.id)
            shows.append(show)
        return shows

    def save_all(self, shows: List[ShowDesign]) -> None:
        """Overwrite the stored collection with *shows*."""
        self.store.store(self.key, json.dumps([s.to_dict() for s in shows]))
        logger.info("Saved %d design(s) under %r", len(shows), self.key)

    def get(self, show_id: int) -> Optional[ShowDesign]:
        for show in self.load_all():
            if show.id == show_id:
                return show
        return None

    def is_locked(self, show: Optional[ShowDesign]) -> bool:
        """True when *show* is a saved, signed design and locking is on."""
        return bool(self.lock_signed and show is not None and show.signed)

    def upsert(self, show: ShowDesign) -> List[ShowDesign]:
        """
        Replace the stored design with the same id in place, or append it.

        Returns the collection as written.  Raises DesignLockedError when the
        stored version is signed and locking is on.
        """
        shows = self.load_all()
        for index, existing in enumerate(shows):
            if existing.id == show.id:
                if self.is_locked(existing):
                    raise DesignLockedError(
                        f"Design {show.id} is signed and locked; it cannot be overwritten."
                    )
                shows[index] = show
                break
        else:
            shows.append(show)
        self.save_all(shows)
        return shows
