"""XML configuration files.

Elements and attributes are projected onto colon-delimited paths::

    <settings Port="8008">
      <Data Name="Inventory" Provider="MySql">
        <ConnectionString>Server=db</ConnectionString>
      </Data>
    </settings>

yields ``Port``, ``Data:Inventory:Provider`` and
``Data:Inventory:ConnectionString``.  The root element only contributes a
segment through its ``Name`` attribute.  Documents carrying a DTD or using
XML namespaces are rejected.
"""
from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from os import PathLike
from typing import BinaryIO
from xml.parsers import expat

from ..errors import FormatError, SecurityRejectionError
from ..keys import combine_path, normalize_key
from ..store import EMPTY_STORE, FlatStore
from . import register_source
from .base import read_file, require_path

NAME_ATTRIBUTE = "name"

_TAG_NAME_RX = re.compile(rb"<[^\s/>]+")
_ATTR_RX = re.compile(rb"""\s*([^\s=/>]+)\s*=\s*(?:"[^"]*"|'[^']*')""")


@dataclass
class _Element:
    path: tuple[str, ...]
    line: int
    column: int
    has_children: bool = False
    has_values: bool = False
    text: list[str] = field(default_factory=list)


def _is_namespaced(name: str) -> bool:
    return ":" in name or name == "xmlns"


class _Flattener:
    """Single-use expat driver collecting ``path -> value`` pairs."""

    def __init__(self) -> None:
        parser = expat.ParserCreate()
        parser.buffer_text = True
        parser.SetParamEntityParsing(expat.XML_PARAM_ENTITY_PARSING_NEVER)
        parser.StartDoctypeDeclHandler = self._on_doctype
        parser.StartElementHandler = self._on_start
        parser.EndElementHandler = self._on_end
        parser.CharacterDataHandler = self._on_text
        self._parser = parser
        self._stack: list[_Element] = []
        self._values: dict[str, tuple[str, str]] = {}
        self._raw = b""

    def run(self, stream: BinaryIO) -> FlatStore:
        raw = stream.read()
        self._raw = raw.encode("utf-8") if isinstance(raw, str) else raw
        try:
            self._parser.Parse(self._raw, True)
        except expat.ExpatError as exc:
            raise FormatError(
                f"Malformed XML document: {expat.ErrorString(exc.code)}.",
                line=exc.lineno,
                column=exc.offset + 1,
            ) from exc
        return FlatStore(self._values.values())

    def _position(self) -> tuple[int, int]:
        return self._parser.CurrentLineNumber, self._parser.CurrentColumnNumber + 1

    def _attribute_position(self, attr: str) -> tuple[int, int]:
        """Return the 1-based position of *attr* in the current start tag.

        expat only reports where a start tag begins, so the attribute is
        located by scanning the raw bytes of the tag.
        """
        raw = self._raw
        start = self._parser.CurrentByteIndex
        m = _TAG_NAME_RX.match(raw, start)
        pos = m.end() if m else start
        while True:
            m = _ATTR_RX.match(raw, pos)
            if m is None:
                return self._position()
            if m.group(1).decode("utf-8", "replace") == attr:
                break
            pos = m.end()
        offset = m.start(1)
        line_start = raw.rfind(b"\n", 0, offset) + 1
        line = raw.count(b"\n", 0, offset) + 1
        column = len(raw[line_start:offset].decode("utf-8", "replace")) + 1
        return line, column

    def _on_doctype(self, name, system_id, public_id, has_internal_subset) -> None:
        line, column = self._position()
        raise SecurityRejectionError(
            "For security reasons DTD is prohibited in configuration documents.",
            line=line,
            column=column,
        )

    def _on_start(self, tag: str, attrs: dict[str, str]) -> None:
        line, column = self._position()
        if _is_namespaced(tag):
            raise FormatError("XML namespaces are not supported.", line=line, column=column)
        for attr in attrs:
            if _is_namespaced(attr):
                attr_line, attr_column = self._attribute_position(attr)
                raise FormatError(
                    "XML namespaces are not supported.", line=attr_line, column=attr_column
                )

        name = None
        values: list[tuple[str, str]] = []
        for attr, value in attrs.items():
            if attr.lower() == NAME_ATTRIBUTE:
                name = value
            else:
                values.append((attr, value))

        if self._stack:
            parent = self._stack[-1]
            parent.has_children = True
            path = parent.path + (tag,)
        else:
            path = ()
        if name is not None:
            path += (name,)

        element = _Element(path, line, column, has_values=bool(values))
        for attr, value in values:
            self._put(path + (attr,), value, lambda a=attr: self._attribute_position(a))
        self._stack.append(element)

    def _on_text(self, data: str) -> None:
        if self._stack:
            self._stack[-1].text.append(data)

    def _on_end(self, tag: str) -> None:
        element = self._stack.pop()
        if element.has_children or not element.path:
            return
        text = "".join(element.text)
        if text.strip():
            self._put(element.path, text, lambda: (element.line, element.column))
        elif not element.has_values:
            self._put(element.path, "", lambda: (element.line, element.column))

    def _put(
        self, segments: tuple[str, ...], value: str, position: Callable[[], tuple[int, int]]
    ) -> None:
        path = combine_path(*segments)
        norm = normalize_key(path)
        existing = self._values.get(norm)
        if existing is not None:
            if existing[1] == value:
                return
            line, column = position()
            raise FormatError(f"A duplicate key '{path}' was found.", line=line, column=column)
        self._values[norm] = (path, value)


@register_source
class XmlFileSource:
    """Configuration read from an XML document."""

    suffixes = (".xml", ".config")

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
        """Load from an already opened byte stream."""
        self._data = self._parse(stream)

    def _parse(self, stream: BinaryIO) -> FlatStore:
        return _Flattener().run(stream)
