from __future__ import annotations

import configparser
from os import PathLike
from typing import BinaryIO

from ..errors import FormatError
from ..keys import combine_path, normalize_key
from ..store import EMPTY_STORE, FlatStore
from . import register_source
from .base import read_file, require_path

# Keys above the first section header are collected under this section;
# the NUL byte keeps it from clashing with a section named in the file.
ROOT_SECTION = "\x00root"
_UNUSED_DEFAULT = "\x00default"


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value


@register_source
class IniFileSource:
    """Configuration read from an INI file.

    ``[Section]`` headers prefix the keys below them, so ``Port=80`` under
    ``[Server]`` becomes ``Server:Port``.  Lines starting with ``;``, ``#`` or
    ``/`` are comments.
    """

    suffixes = (".ini",)

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
        parser = configparser.ConfigParser(
            delimiters=("=",),
            comment_prefixes=(";", "#", "/"),
            inline_comment_prefixes=None,
            strict=True,
            empty_lines_in_values=False,
            interpolation=None,
            default_section=_UNUSED_DEFAULT,
        )
        parser.optionxform = str  # type: ignore[assignment,method-assign]
        try:
            text = stream.read().decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise FormatError(f"INI file is not valid UTF-8: {exc.reason}.") from exc
        # Indented lines would otherwise continue the previous value.
        lines = (line.strip() for line in text.splitlines())
        try:
            parser.read_string("\n".join([f"[{ROOT_SECTION}]", *lines]))
        except configparser.DuplicateOptionError as exc:
            raise FormatError(
                f"A duplicate key '{combine_path(exc.section, exc.option)}' was found.",
                line=exc.lineno - 1 if exc.lineno else None,
            ) from exc
        except configparser.DuplicateSectionError as exc:
            raise FormatError(
                f"A duplicate section '{exc.section}' was found.",
                line=exc.lineno - 1 if exc.lineno else None,
            ) from exc
        except configparser.ParsingError as exc:
            lineno = exc.errors[0][0] - 1 if exc.errors else None
            raise FormatError("Unrecognized line format in INI file.", line=lineno) from exc

        found: dict[str, tuple[str, str]] = {}
        for section in parser.sections():
            prefix = None if section == ROOT_SECTION else section
            for key, value in parser.items(section):
                path = combine_path(prefix, key)
                norm = normalize_key(path)
                if norm in found:
                    raise FormatError(f"A duplicate key '{path}' was found.")
                found[norm] = (path, _unquote(value))
        return FlatStore(found.values())
