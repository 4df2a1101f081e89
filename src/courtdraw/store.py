"""Key-value persistence for roster, base roster, history and the current round.

Values are plain JSON-compatible data. `MemoryStore` keeps them in a dict,
`JsonFileStore` mirrors the whole mapping into one JSON file on every write.
"""

import copy
import json
from pathlib import Path

MEMBERS_KEY = "members"
BASE_MEMBERS_KEY = "base_members"
HISTORY_KEY = "match_history"
CURRENT_ROUND_KEY = "current_round"


class MemoryStore:
    def __init__(self, data: dict | None = None):
        self._data: dict = dict(data or {})

    def get(self, key: str, default=None):
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value) -> None:
        self._data[key] = copy.deepcopy(value)
        self._flush()

    def delete(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            self._flush()

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def _flush(self) -> None:
        pass


class JsonFileStore(MemoryStore):
    """Store backed by a single JSON file; survives process restarts."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        data = {}
        if self.path.exists():
            with open(self.path, encoding="utf-8") as f:
                text = f.read()
            if text.strip():
                data = json.loads(text)
            if not isinstance(data, dict):
                raise ValueError(f"{self.path}: expected a JSON object at top level")
        super().__init__(data)

    def _flush(self) -> None:
        if self.path.parent and not self.path.parent.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2, ensure_ascii=False)
