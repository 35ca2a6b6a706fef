from __future__ import annotations

import json

import pytest

from kv_store import InMemoryKeyValueStore, JsonFileKeyValueStore, KeyValueStoreError


def test_in_memory_store_round_trip():
    store = InMemoryKeyValueStore()
    assert store.get("Easy-5") is None
    store.set("Easy-5", "1.25")
    assert store.get("Easy-5") == "1.25"
    assert store.as_dict() == {"Easy-5": "1.25"}


def test_json_store_missing_file_is_empty(tmp_path):
    store = JsonFileKeyValueStore(tmp_path / "scores.json")
    assert store.get("Easy-5") is None
    assert not (tmp_path / "scores.json").exists()


def test_json_store_persists_across_instances(tmp_path):
    store_path = tmp_path / "data" / "scores.json"
    JsonFileKeyValueStore(store_path).set("Hard-5-sightread", "3.5")

    reopened = JsonFileKeyValueStore(store_path)
    assert reopened.file_path == store_path
    assert reopened.get("Hard-5-sightread") == "3.5"
    assert json.loads(store_path.read_text(encoding="utf-8")) == {"Hard-5-sightread": "3.5"}
    assert not store_path.with_suffix(".json.tmp").exists()


def test_json_store_keeps_other_keys(tmp_path):
    store_path = tmp_path / "scores.json"
    store_path.write_text(json.dumps({"Easy-5": 1.5}), encoding="utf-8")

    store = JsonFileKeyValueStore(store_path)
    store.set("Medium-5", "2.0")

    assert json.loads(store_path.read_text(encoding="utf-8")) == {"Easy-5": "1.5", "Medium-5": "2.0"}


@pytest.mark.parametrize("content", ["{not json", "[]", "\"text\""])
def test_json_store_rejects_malformed_file(tmp_path, content):
    store_path = tmp_path / "scores.json"
    store_path.write_text(content, encoding="utf-8")

    with pytest.raises(KeyValueStoreError):
        JsonFileKeyValueStore(store_path).get("Easy-5")


def test_json_store_write_failure_raises(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(KeyValueStoreError):
        JsonFileKeyValueStore(blocker / "scores.json").set("Easy-5", "1.0")


def test_json_store_rejects_invalid_utf8(tmp_path):
    store_path = tmp_path / "scores.json"
    store_path.write_bytes(b'{"Easy-5": "1.2\xff"}')

    with pytest.raises(KeyValueStoreError):
        JsonFileKeyValueStore(store_path).get("Easy-5")
