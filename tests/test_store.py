"""Tests for store.py - in-memory and JSON file stores."""

import json

import pytest

from courtdraw.store import JsonFileStore, MemoryStore


class TestMemoryStore:
    def test_get_default(self):
        store = MemoryStore()
        assert store.get("missing") is None
        assert store.get("missing", []) == []

    def test_values_are_copies(self):
        store = MemoryStore()
        value = ["A"]
        store.set("k", value)
        value.append("B")
        store.get("k").append("C")
        assert store.get("k") == ["A"]

    def test_delete(self):
        store = MemoryStore({"k": 1})
        store.delete("k")
        assert "k" not in store
        store.delete("k")


class TestJsonFileStore:
    def test_missing_file_starts_empty(self, tmp_path):
        store = JsonFileStore(tmp_path / "state.json")
        assert store.get("members") is None
        assert not (tmp_path / "state.json").exists()

    def test_survives_restart(self, tmp_path):
        path = tmp_path / "state.json"
        JsonFileStore(path).set("members", ["Aki", "Ben"])
        assert JsonFileStore(path).get("members") == ["Aki", "Ben"]

    def test_writes_json(self, tmp_path):
        path = tmp_path / "sub" / "state.json"
        store = JsonFileStore(path)
        store.set("members", ["Åsa"])
        assert json.loads(path.read_text(encoding="utf-8")) == {"members": ["Åsa"]}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("")
        assert JsonFileStore(path).get("members") is None

    def test_rejects_non_object(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError):
            JsonFileStore(path)
