"""Read-only flat store shared by every configuration source."""
from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from .keys import normalize_key, split_path


class FlatStore(Mapping[str, str]):
    """Case-insensitive, ordered mapping from configuration path to value.

    A store is built once from ``(path, value)`` pairs and never changes
    afterwards.  When the same path occurs more than once the last value
    wins while the first spelling of the path is kept for iteration.
    Sources that must reject duplicates check for them before building
    the store.
    """

    __slots__ = ("_keys", "_values")

    def __init__(self, items: Mapping[str, str] | Iterable[tuple[str, str]] = ()) -> None:
        if isinstance(items, Mapping):
            items = items.items()
        keys: dict[str, str] = {}
        values: dict[str, str] = {}
        for path, value in items:
            norm = normalize_key(path)
            keys.setdefault(norm, path)
            values[norm] = value
        self._keys = keys
        self._values = values

    def try_get(self, path: str) -> str | None:
        """Return the value stored at *path* or ``None``."""
        return self._values.get(normalize_key(path))

    def __getitem__(self, path: str) -> str:
        try:
            return self._values[normalize_key(path)]
        except KeyError:
            raise KeyError(path) from None

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and normalize_key(path) in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys.values())

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"FlatStore({dict(self.items())!r})"

    def child_keys(self, prefix: str | None = None) -> list[str]:
        """Return the distinct segments directly below *prefix*.

        With no prefix the top-level segments are returned.  Order follows
        first appearance in the store.
        """
        parent = [normalize_key(s) for s in split_path(prefix)] if prefix else []
        depth = len(parent)
        seen: dict[str, str] = {}
        for path in self._keys.values():
            segments = split_path(path)
            if len(segments) <= depth:
                continue
            if [normalize_key(s) for s in segments[:depth]] != parent:
                continue
            seen.setdefault(normalize_key(segments[depth]), segments[depth])
        return list(seen.values())


EMPTY_STORE = FlatStore()
