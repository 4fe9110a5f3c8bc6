"""Key-value persistence for the license record.

The gate persists a single record ``{licenseKey, clientId, expirationDate}``
under its configured storage key.  Stores raise :class:`StorageError` on any
failure; the gate decides what to do with it.
"""

from __future__ import annotations

import json
import os
import stat
import sys
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from lq_dc.license.errors import StorageError


@runtime_checkable
class KeyValueStore(Protocol):
    """Minimal store contract the gate depends on."""

    def get(self, key: str) -> dict[str, Any] | None:
        """Return the record under *key*, or ``None`` if absent."""
        ...

    def set(self, key: str, value: dict[str, Any]) -> None:
        """Store *value* under *key*, replacing any previous record."""
        ...

    def delete(self, key: str) -> None:
        """Remove *key*.  Removing a missing key is not an error."""
        ...


class MemoryStore:
    """In-process store.  Records are copied on the way in and out."""

    def __init__(self) -> None:
        self._data: dict[str, dict[str, Any]] = {}

    def get(self, key: str) -> dict[str, Any] | None:
        value = self._data.get(key)
        return dict(value) if value is not None else None

    def set(self, key: str, value: dict[str, Any]) -> None:
        self._data[key] = dict(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._data


class JsonFileStore:
    """Store backed by a single JSON document on disk.

    The document maps storage keys to records, so several gates with
    different storage keys can share one file.  The file is written with
    owner-only permissions on POSIX systems.

    Parameters
    ----------
    path:
        Location of the JSON document.  Parent directories are created on
        first write.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise StorageError(f"Cannot read license store {self._path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StorageError(f"License store {self._path} does not contain a JSON object")
        return data

    def _write_all(self, data: dict[str, Any]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
            if sys.platform != "win32":
                os.chmod(self._path, stat.S_IRUSR | stat.S_IWUSR)
        except OSError as exc:
            raise StorageError(f"Cannot write license store {self._path}: {exc}") from exc

    def get(self, key: str) -> dict[str, Any] | None:
        value = self._read_all().get(key)
        if value is None:
            return None
        if not isinstance(value, dict):
            raise StorageError(f"Entry '{key}' in {self._path} is not an object")
        return value

    def set(self, key: str, value: dict[str, Any]) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def delete(self, key: str) -> None:
        data = self._read_all()
        if key not in data:
            return
        del data[key]
        if data:
            self._write_all(data)
            return
        try:
            self._path.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            raise StorageError(f"Cannot remove license store {self._path}: {exc}") from exc
