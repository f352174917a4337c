from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from os import PathLike
from pathlib import Path
from typing import BinaryIO, Protocol

from ..errors import ArgumentError, FormatError
from ..keys import combine_path, normalize_key
from ..store import EMPTY_STORE, FlatStore

logger = logging.getLogger(__name__)


class ConfigurationSource(Protocol):
    """Protocol implemented by every configuration source."""

    @property
    def data(self) -> FlatStore:
        """Store produced by the last successful :meth:`load`."""

    def load(self) -> None:
        """(Re)build :attr:`data` from the underlying input."""

    def try_get(self, path: str) -> str | None:
        """Return the value at *path* or ``None``."""


def require_path(path: str | PathLike[str] | None) -> Path:
    """Return *path* as :class:`Path` or raise :class:`ArgumentError`."""
    if path is None or str(path) == "":
        raise ArgumentError("File path must be a non-empty string.")
    return Path(path)


def read_file(
    path: Path, *, optional: bool, parse: Callable[[BinaryIO], FlatStore]
) -> FlatStore:
    """Open *path* in binary mode and hand the stream to *parse*.

    Missing optional files produce an empty store.
    """
    if optional and not path.exists():
        logger.debug("optional configuration file %s not found", path)
        return EMPTY_STORE
    with path.open("rb") as fh:
        store = parse(fh)
    logger.debug("loaded %d keys from %s", len(store), path)
    return store


def _scalar(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def flatten_tree(node: object, prefix: tuple[str, ...] = ()) -> FlatStore:
    """Flatten nested mappings and lists into a :class:`FlatStore`.

    List items use their index as path segment.  Two spellings of the same
    path with different values raise :class:`FormatError`.
    """
    found: dict[str, tuple[str, str]] = {}

    def _walk(value: object, segments: tuple[str, ...]) -> None:
        if isinstance(value, Mapping):
            for k, v in value.items():
                _walk(v, segments + (str(k),))
            return
        if isinstance(value, list):
            for i, v in enumerate(value):
                _walk(v, segments + (str(i),))
            return
        path = combine_path(*segments)
        text = _scalar(value)
        norm = normalize_key(path)
        existing = found.get(norm)
        if existing is not None and existing[1] != text:
            raise FormatError(f"A duplicate key '{path}' was found.")
        found.setdefault(norm, (path, text))

    _walk(node, prefix)
    return FlatStore(found.values())
