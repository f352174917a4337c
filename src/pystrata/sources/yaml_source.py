from __future__ import annotations

from collections.abc import Mapping
from os import PathLike
from typing import BinaryIO

import yaml

from ..errors import FormatError
from ..store import EMPTY_STORE, FlatStore
from . import register_source
from .base import flatten_tree, read_file, require_path


@register_source
class YamlFileSource:
    """Configuration read from a YAML document whose root is a mapping."""

    suffixes = (".yaml", ".yml")

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
            data = yaml.safe_load(stream)
        except yaml.YAMLError as exc:
            mark = getattr(exc, "problem_mark", None)
            raise FormatError(
                f"Malformed YAML document: {exc}",
                line=mark.line + 1 if mark is not None else None,
                column=mark.column + 1 if mark is not None else None,
            ) from exc
        if data is None:
            return EMPTY_STORE
        if not isinstance(data, Mapping):
            raise FormatError("Root of a YAML configuration document must be a mapping.")
        return flatten_tree(data)
