from __future__ import annotations

from collections.abc import Mapping

from ..store import EMPTY_STORE, FlatStore
from .base import flatten_tree


class MemorySource:
    """Configuration held in memory, typically application defaults.

    *values* may use colon paths as keys, nested mappings, or both.
    """

    def __init__(self, values: Mapping[str, object] | None = None) -> None:
        self._values = dict(values or {})
        self._data = EMPTY_STORE

    @property
    def data(self) -> FlatStore:
        return self._data

    def try_get(self, path: str) -> str | None:
        return self._data.try_get(path)

    def load(self) -> None:
        self._data = flatten_tree(self._values)
