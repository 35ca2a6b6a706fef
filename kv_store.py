# kv_store.py
from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)


class KeyValueStoreError(Exception):
    pass


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryKeyValueStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(str(key))

    def set(self, key: str, value: str) -> None:
        self._values[str(key)] = str(value)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._values)


class JsonFileKeyValueStore:
    """
    String key-value store backed by a single JSON object file.

    - The file is read lazily on first access and cached in memory
    - Writes go to a sibling .tmp file which then replaces the target
    - Non-string values found in the file are converted with str()
    - I/O and format problems raise KeyValueStoreError
    """

    def __init__(self, file_path: Path) -> None:
        self._file_path = Path(file_path)
        self._lock = threading.Lock()
        self._values: Optional[Dict[str, str]] = None

    @property
    def file_path(self) -> Path:
        return self._file_path

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._load_locked().get(str(key))

    def set(self, key: str, value: str) -> None:
        with self._lock:
            values = dict(self._load_locked())
            values[str(key)] = str(value)
            self._write_locked(values)
            self._values = values

    def _load_locked(self) -> Dict[str, str]:
        if self._values is not None:
            return self._values

        if not self._file_path.exists():
            self._values = {}
            return self._values

        try:
            raw_text = self._file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exception:
            raise KeyValueStoreError(f"Failed to read store file: {self._file_path}. Error: {exception}") from exception

        try:
            parsed = json.loads(raw_text) if raw_text.strip() else {}
        except json.JSONDecodeError as exception:
            raise KeyValueStoreError(f"Store file is not valid JSON: {self._file_path}. Error: {exception}") from exception

        if not isinstance(parsed, dict):
            raise KeyValueStoreError(f"Store file root must be a JSON object: {self._file_path}")

        self._values = {str(key): str(value) for key, value in parsed.items() if value is not None}
        logger.debug("Loaded %d stored values from %s", len(self._values), self._file_path)
        return self._values

    def _write_locked(self, values: Dict[str, str]) -> None:
        temporary_path = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            temporary_path.write_text(json.dumps(values, ensure_ascii=False, indent=2, sort_keys=True), encoding="utf-8")
            temporary_path.replace(self._file_path)
        except OSError as exception:
            raise KeyValueStoreError(f"Failed to write store file: {self._file_path}. Error: {exception}") from exception


def _run_unit_tests() -> None:
    import tempfile

    memory_store = InMemoryKeyValueStore({"Easy-5": "1.5"})
    assert memory_store.get("Easy-5") == "1.5"
    assert memory_store.get("Hard-5") is None

    with tempfile.TemporaryDirectory() as temporary_dir:
        store_path = Path(temporary_dir) / "nested" / "scores.json"
        file_store = JsonFileKeyValueStore(store_path)
        assert file_store.get("Easy-5") is None
        file_store.set("Easy-5", "2.25")
        assert JsonFileKeyValueStore(store_path).get("Easy-5") == "2.25"

        broken_path = Path(temporary_dir) / "broken.json"
        broken_path.write_text("[1, 2]", encoding="utf-8")
        try:
            JsonFileKeyValueStore(broken_path).get("Easy-5")
        except KeyValueStoreError:
            pass
        else:
            raise AssertionError("non-object root must raise")


if __name__ == "__main__":
    _run_unit_tests()
    print("kv_store.py: ok")
