"""Key-value storage backends holding whole-collection JSON snapshots."""

from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path
from typing import MutableMapping, Protocol

from .errors import StorageError

__all__ = [
    "KeyValueStorage",
    "MemoryStorage",
    "FileStorage",
]

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStorage(Protocol):
    """Minimal string key-value interface, modelled on browser storage."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """Dictionary-backed storage; contents vanish with the process."""

    def __init__(self, initial: MutableMapping[str, str] | None = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def keys(self) -> list[str]:
        return list(self._items)


class FileStorage:
    """Store each key as ``<directory>/<key>.json``.

    Writes go through a temporary file and ``os.replace`` so a crash mid-write
    leaves the previous snapshot in place. There is no locking: two processes
    writing the same key simply race and the last write wins.
    """

    def __init__(self, directory: Path) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        if not _KEY_RE.match(key):
            raise StorageError(f"Invalid storage key: {key!r}")
        return self._directory / f"{key}.json"

    def get_item(self, key: str) -> str | None:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageError(f"Failed to read {path}: {exc}") from exc

    def set_item(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            _atomic_write(path, value)
        except (OSError, UnicodeError) as exc:
            raise StorageError(f"Failed to write {path}: {exc}") from exc


def _atomic_write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    handle = tempfile.NamedTemporaryFile(
        "w",
        delete=False,
        encoding="utf-8",
        dir=str(path.parent),
        prefix=f".{path.stem}-",
        suffix=".tmp",
    )
    temp_path = Path(handle.name)
    try:
        try:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        finally:
            handle.close()
        os.replace(temp_path, path)
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise
    try:
        path.chmod(0o600)
    except PermissionError:  # pragma: no cover - depends on filesystem
        pass
