from __future__ import annotations

import json
from collections.abc import Mapping
from os import PathLike
from typing import BinaryIO

from ..errors import FormatError
from ..store import EMPTY_STORE, FlatStore
from . import register_source
from .base import flatten_tree, read_file, require_path


@register_source
class JsonFileSource:
    """Configuration read from a JSON document whose root is an object."""

    suffixes = (".json",)

    def __init__(self, path: str | PathLike[str] | None, *, optional: bool = False) -> None:
        self.path = require_path(path)
        self.optional = optional
        self._data = EMPTY_STORE

    @property
    def data(self) -> FlatStore:
        return self._data

    def try_get(self, path: str) -> str | None:
        return self._data.try_get(path)

    def load(self) -> None:
        self._data = read_file(self.path, optional=self.optional, parse=self._parse)

    def load_stream(self, stream: BinaryIO) -> None:
        self._data = self._parse(stream)

    def _parse(self, stream: BinaryIO) -> FlatStore:
        try:
            raw = stream.read().decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise FormatError(f"JSON document is not valid UTF-8: {exc.reason}.") from exc
        if raw.strip() == "":
            return EMPTY_STORE
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise FormatError(
                f"Malformed JSON document: {exc.msg}.", line=exc.lineno, column=exc.colno
            ) from exc
        if not isinstance(data, Mapping):
            raise FormatError("Root of a JSON configuration document must be an object.")
        return flatten_tree(data)
