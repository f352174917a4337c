"""Configuration sources and the file-suffix registry."""
from __future__ import annotations

from os import PathLike
from typing import Protocol

from ..errors import ArgumentError
from .base import ConfigurationSource, require_path


class FileSourceFactory(Protocol):
    suffixes: tuple[str, ...]

    def __call__(self, path: str | PathLike[str] | None, *, optional: bool = False) -> ConfigurationSource: ...


_REGISTRY: dict[str, FileSourceFactory] = {}


def register_source(source: FileSourceFactory) -> FileSourceFactory:
    """Register a file source class and return it for decorator use."""
    for suf in source.suffixes:
        _REGISTRY[suf.lower()] = source
    return source


def source_for_path(path: str | PathLike[str] | None, *, optional: bool = False) -> ConfigurationSource:
    p = require_path(path)
    source_cls = _REGISTRY.get(p.suffix.lower())
    if source_cls is None:
        raise ArgumentError(f"No configuration source for '{p.suffix}' files.")
    return source_cls(p, optional=optional)


# register default sources
from .command_line_source import CommandLineSource  # noqa: E402
from .environment_source import EnvironmentVariablesSource  # noqa: E402
from .ini_source import IniFileSource  # noqa: E402
from .json_source import JsonFileSource  # noqa: E402
from .memory_source import MemorySource  # noqa: E402
from .xml_source import XmlFileSource  # noqa: E402
from .yaml_source import YamlFileSource  # noqa: E402

__all__ = [
    "CommandLineSource",
    "ConfigurationSource",
    "EnvironmentVariablesSource",
    "IniFileSource",
    "JsonFileSource",
    "MemorySource",
    "XmlFileSource",
    "YamlFileSource",
    "register_source",
    "source_for_path",
]
