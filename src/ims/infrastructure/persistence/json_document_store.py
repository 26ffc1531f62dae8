"""Key-path addressed document store persisted to a single JSON file.

Paths look like ``products/<id>/variations/<vid>/quantity``.  Every
operation reads the file, applies its change and writes the file back,
so separate store instances pointing at the same file always see each
other's writes.

Besides plain reads and writes the store offers the two conditional
primitives the ledger relies on:

- ``insert_if_absent``: idempotent append under a caller-chosen key;
- ``compare_and_set``: write only if the stored value is unchanged.
"""

from __future__ import annotations

import json
import os
import time
import uuid
from pathlib import Path
from typing import Any

from ims.domain.exceptions import ConcurrentModificationError, StoreError

_MISSING = object()


def time_ordered_key() -> str:
    """Generated child key; lexical order follows creation time."""
    return f"{time.time_ns():020d}-{uuid.uuid4().hex[:8]}"


class JsonDocumentStore:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    @property
    def file_path(self) -> Path:
        return self._file_path

    # --- Reads ----------------------------------------------------------------

    def get(self, path: str) -> Any:
        """Return the value at *path*, or None if nothing is stored there."""
        node = self._lookup(self._load(), _split(path))
        return None if node is _MISSING else node

    def children(self, path: str) -> dict[str, Any]:
        """Return the child mapping at *path* (empty if absent)."""
        node = self.get(path)
        if node is None:
            return {}
        if not isinstance(node, dict):
            raise StoreError(f"'{path}' is not a collection")
        return node

    # --- Writes ---------------------------------------------------------------

    def set(self, path: str, value: Any) -> None:
        root = self._load()
        parent, key = self._parent(root, _split(path))
        parent[key] = value
        self._persist(root)

    def update(self, path: str, values: dict[str, Any]) -> None:
        """Merge *values* into the mapping at *path*, creating it if needed."""
        root = self._load()
        parts = _split(path)
        node = self._descend(root, parts)
        node.update(values)
        self._persist(root)

    def delete(self, path: str) -> None:
        root = self._load()
        parent, key = self._parent(root, _split(path))
        parent.pop(key, None)
        self._persist(root)

    def push(self, path: str, value: Any) -> str:
        """Append *value* under a new time-ordered key and return the key."""
        key = time_ordered_key()
        root = self._load()
        self._descend(root, _split(path))[key] = value
        self._persist(root)
        return key

    def insert_if_absent(self, path: str, value: Any) -> bool:
        """Store *value* at *path* unless a value is already there."""
        root = self._load()
        parent, key = self._parent(root, _split(path))
        if key in parent:
            return False
        parent[key] = value
        self._persist(root)
        return True

    def compare_and_set(self, path: str, expected: Any, new: Any) -> None:
        root = self._load()
        parts = _split(path)
        actual = self._lookup(root, parts)
        if actual is _MISSING or actual != expected:
            raise ConcurrentModificationError(
                path, expected, None if actual is _MISSING else actual
            )
        parent, key = self._parent(root, parts)
        parent[key] = new
        self._persist(root)

    # --- Tree helpers ---------------------------------------------------------

    @staticmethod
    def _lookup(root: dict, parts: list[str]) -> Any:
        node: Any = root
        for part in parts:
            if not isinstance(node, dict) or part not in node:
                return _MISSING
            node = node[part]
        return node

    @staticmethod
    def _descend(root: dict, parts: list[str]) -> dict:
        node = root
        for part in parts:
            child = node.setdefault(part, {})
            if not isinstance(child, dict):
                raise StoreError(f"Cannot descend into non-collection '{part}'")
            node = child
        return node

    def _parent(self, root: dict, parts: list[str]) -> tuple[dict, str]:
        if not parts:
            raise StoreError("Cannot address the store root")
        return self._descend(root, parts[:-1]), parts[-1]

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> dict:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StoreError(f"Cannot read {self._file_path}: {exc}") from exc

    def _persist(self, root: dict) -> None:
        tmp = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        try:
            tmp.write_text(json.dumps(root, indent=2) + "\n", encoding="utf-8")
            os.replace(tmp, self._file_path)
        except OSError as exc:
            raise StoreError(f"Cannot write {self._file_path}: {exc}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            try:
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                self._file_path.write_text("{}", encoding="utf-8")
            except OSError as exc:
                raise StoreError(f"Cannot create {self._file_path}: {exc}") from exc


def _split(path: str) -> list[str]:
    return [part for part in path.split("/") if part]
