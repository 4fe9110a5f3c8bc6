"""Tests for license key-value stores."""

from __future__ import annotations

import json
import stat
import sys
from pathlib import Path

import pytest

from lq_dc.license.errors import StorageError
from lq_dc.license.storage import JsonFileStore, KeyValueStore, MemoryStore

RECORD = {
    "licenseKey": "lq-91-0302" + "a" * 36,
    "clientId": "client-42",
    "expirationDate": "2026-06-30T12:00:00+00:00",
}


# ---------------------------------------------------------------------------
# MemoryStore
# ---------------------------------------------------------------------------


class TestMemoryStore:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(MemoryStore(), KeyValueStore)

    def test_set_get_delete(self) -> None:
        store = MemoryStore()
        store.set("k", RECORD)
        assert store.get("k") == RECORD
        store.delete("k")
        assert store.get("k") is None

    def test_delete_missing_is_noop(self) -> None:
        MemoryStore().delete("missing")

    def test_returns_copies(self) -> None:
        store = MemoryStore()
        store.set("k", RECORD)
        fetched = store.get("k")
        fetched["clientId"] = "changed"
        assert store.get("k")["clientId"] == "client-42"


# ---------------------------------------------------------------------------
# JsonFileStore
# ---------------------------------------------------------------------------


class TestJsonFileStore:
    def test_satisfies_protocol(self, tmp_path: Path) -> None:
        assert isinstance(JsonFileStore(tmp_path / "s.json"), KeyValueStore)

    def test_missing_file_reads_none(self, tmp_path: Path) -> None:
        assert JsonFileStore(tmp_path / "absent.json").get("k") is None

    def test_round_trip_creates_parents(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "dir" / "license.json"
        store = JsonFileStore(path)
        store.set("k", RECORD)
        assert path.exists()
        assert JsonFileStore(path).get("k") == RECORD

    def test_multiple_keys_share_file(self, tmp_path: Path) -> None:
        path = tmp_path / "license.json"
        store = JsonFileStore(path)
        store.set("a", RECORD)
        store.set("b", {"x": 1})
        store.delete("a")
        assert store.get("a") is None
        assert store.get("b") == {"x": 1}
        assert json.loads(path.read_text(encoding="utf-8")) == {"b": {"x": 1}}

    def test_deleting_last_key_removes_file(self, tmp_path: Path) -> None:
        path = tmp_path / "license.json"
        store = JsonFileStore(path)
        store.set("k", RECORD)
        store.delete("k")
        assert not path.exists()

    def test_delete_missing_key_is_noop(self, tmp_path: Path) -> None:
        JsonFileStore(tmp_path / "license.json").delete("k")

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    def test_owner_only_permissions(self, tmp_path: Path) -> None:
        path = tmp_path / "license.json"
        JsonFileStore(path).set("k", RECORD)
        mode = stat.S_IMODE(path.stat().st_mode)
        assert mode == stat.S_IRUSR | stat.S_IWUSR

    def test_corrupt_file_raises_storage_error(self, tmp_path: Path) -> None:
        path = tmp_path / "license.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(StorageError, match="Cannot read"):
            JsonFileStore(path).get("k")

    def test_non_object_document_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "license.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(StorageError):
            JsonFileStore(path).get("k")

    def test_non_object_entry_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "license.json"
        path.write_text('{"k": "string"}', encoding="utf-8")
        with pytest.raises(StorageError):
            JsonFileStore(path).get("k")

    def test_unwritable_location_raises(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(StorageError, match="Cannot write"):
            JsonFileStore(blocker / "license.json").set("k", RECORD)
