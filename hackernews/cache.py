from __future__ import annotations

import hashlib
import logging
from collections import OrderedDict
from contextlib import suppress
from pathlib import Path
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class ResponseCache(Protocol):
    """Raw payload store keyed by request URL."""

    def get(self, key: str) -> Optional[str]:
        ...

    def put(self, key: str, payload: str) -> None:
        ...


class MemoryResponseCache:
    """Least-recently-used store holding at most `max_entries` payloads."""

    def __init__(self, max_entries: int = 512) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be > 0")
        self.max_entries = max_entries
        self._entries: OrderedDict[str, str] = OrderedDict()

    def get(self, key: str) -> Optional[str]:
        payload = self._entries.get(key)
        if payload is not None:
            self._entries.move_to_end(key)
        return payload

    def put(self, key: str, payload: str) -> None:
        self._entries[key] = payload
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    def __len__(self) -> int:
        return len(self._entries)


class DiskResponseCache:
    """
    One UTF-8 file per entry under `directory`, named by the sha1 of the key.

    Unreadable entries are treated as misses; failed writes are logged and
    dropped.
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.is_file():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning("Cache read failed: path=%s err=%s", path, e)
            return None

    def put(self, key: str, payload: str) -> None:
        path = self._path_for(key)
        tmp = path.with_suffix(".tmp")
        try:
            tmp.write_text(payload, encoding="utf-8")
            tmp.replace(path)
        except OSError as e:
            logger.warning("Cache write failed: path=%s err=%s", path, e)
            with suppress(OSError):
                tmp.unlink(missing_ok=True)

    def _path_for(self, key: str) -> Path:
        digest = hashlib.sha1(key.encode("utf-8")).hexdigest()
        return self.directory / f"{digest}.cache"
