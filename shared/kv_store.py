"""String key-value stores shared by the onboarding tools.

Every backend exposes the same three calls (get / set / delete over string
keys and string values), so the draft and migration code can run against
a directory of JSON files or a plain dict in tests.

Backends are allowed to raise. Tolerating failures is the caller's job.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable
from urllib.parse import quote


class StorageUnavailable(RuntimeError):
    """Raised by a backend that has been disabled or cannot accept writes."""


@runtime_checkable
class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStore:
    """Dict-backed store. ``available=False`` makes every call raise."""

    def __init__(self, initial: dict[str, str] | None = None, available: bool = True):
        self.data: dict[str, str] = dict(initial or {})
        self.available = available

    def _check(self) -> None:
        if not self.available:
            raise StorageUnavailable("memory store disabled")

    def get(self, key: str) -> str | None:
        self._check()
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self._check()
        self.data[key] = value

    def delete(self, key: str) -> None:
        self._check()
        self.data.pop(key, None)


class JsonFileStore:
    """Persistent store: one ``<key>.json`` file per key under *directory*.

    Values are written verbatim, so a file holds whatever string the caller
    serialized. Keys are percent-encoded, so distinct keys never share a
    file and no key can name a path outside the directory.
    """

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        # "." and ".." are legal names once ".json" is appended
        name = quote(key, safe="") or "%"
        return self.directory / f"{name}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self.path_for(key).write_text(value, encoding="utf-8")

    def delete(self, key: str) -> None:
        path = self.path_for(key)
        if path.exists():
            path.unlink()

