from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from os import PathLike
from threading import RLock

from .keys import normalize_key
from .store import FlatStore
from .sources import (
    CommandLineSource,
    ConfigurationSource,
    EnvironmentVariablesSource,
    IniFileSource,
    JsonFileSource,
    MemorySource,
    XmlFileSource,
    YamlFileSource,
    source_for_path,
)

logger = logging.getLogger(__name__)

PathArg = str | PathLike[str]


class ConfigurationRoot:
    """Ordered collection of configuration sources.

    Lookups scan the sources from the most recently added to the first one
    and return the first match, so later sources override earlier ones::

        config = (
            ConfigurationRoot()
            .add_memory({"Logging:Level": "info"})
            .add_xml_file("settings.xml", optional=True)
            .add_environment_variables("APP_")
            .add_command_line(sys.argv[1:])
        )
        config.get("Logging:Level")
    """

    def __init__(self, sources: Sequence[ConfigurationSource] = ()) -> None:
        self._lock = RLock()
        # each source paired with the store the root currently serves from it
        self._entries: list[tuple[ConfigurationSource, FlatStore]] = []
        for source in sources:
            self.add(source)

    @property
    def sources(self) -> tuple[ConfigurationSource, ...]:
        with self._lock:
            return tuple(source for source, _ in self._entries)

    def add(self, source: ConfigurationSource, *, load: bool = True) -> ConfigurationRoot:
        """Append *source*, loading it first unless *load* is false.

        A source that fails to load is not added. The root serves the store
        the source holds at this point until the next :meth:`reload`.
        """
        if load:
            source.load()
        with self._lock:
            self._entries.append((source, source.data))
        logger.debug("added %s (%d keys)", type(source).__name__, len(source.data))
        return self

    # ----- fluent helpers -----

    def add_command_line(
        self, args: Sequence[str], switch_mappings: Mapping[str, str] | None = None
    ) -> ConfigurationRoot:
        return self.add(CommandLineSource(args, switch_mappings))

    def add_environment_variables(self, prefix: str = "") -> ConfigurationRoot:
        return self.add(EnvironmentVariablesSource(prefix))

    def add_memory(self, values: Mapping[str, object]) -> ConfigurationRoot:
        return self.add(MemorySource(values))

    def add_xml_file(self, path: PathArg, *, optional: bool = False) -> ConfigurationRoot:
        return self.add(XmlFileSource(path, optional=optional))

    def add_ini_file(self, path: PathArg, *, optional: bool = False) -> ConfigurationRoot:
        return self.add(IniFileSource(path, optional=optional))

    def add_json_file(self, path: PathArg, *, optional: bool = False) -> ConfigurationRoot:
        return self.add(JsonFileSource(path, optional=optional))

    def add_yaml_file(self, path: PathArg, *, optional: bool = False) -> ConfigurationRoot:
        return self.add(YamlFileSource(path, optional=optional))

    def add_file(self, path: PathArg, *, optional: bool = False) -> ConfigurationRoot:
        """Add a file source chosen by the file suffix."""
        return self.add(source_for_path(path, optional=optional))

    # ----- lookup -----

    def reload(self) -> None:
        """Reload every source in registration order.

        The new stores are only served once every source has loaded. If one
        source fails the error propagates and lookups keep returning the
        values from before the call.
        """
        with self._lock:
            sources = [source for source, _ in self._entries]
            for source in sources:
                source.load()
            self._entries = [(source, source.data) for source in sources]

    def _lookup(self, path: str) -> tuple[ConfigurationSource, str] | None:
        with self._lock:
            for source, store in reversed(self._entries):
                value = store.try_get(path)
                if value is not None:
                    return source, value
        return None

    def source_of(self, path: str) -> ConfigurationSource | None:
        """Return the source supplying the effective value for *path*."""
        found = self._lookup(path)
        return None if found is None else found[0]

    def try_get(self, path: str) -> str | None:
        found = self._lookup(path)
        return None if found is None else found[1]

    def get(self, path: str, default: str | None = None) -> str | None:
        value = self.try_get(path)
        return default if value is None else value

    def __getitem__(self, path: str) -> str:
        value = self.try_get(path)
        if value is None:
            raise KeyError(path)
        return value

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.try_get(path) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self.as_dict())

    def child_keys(self, prefix: str | None = None) -> list[str]:
        """Return the distinct segments below *prefix* across all sources."""
        seen: dict[str, str] = {}
        with self._lock:
            for _, store in self._entries:
                for segment in store.child_keys(prefix):
                    seen.setdefault(normalize_key(segment), segment)
        return list(seen.values())

    def as_dict(self) -> dict[str, str]:
        """Return the merged configuration as a flat ``path -> value`` dict."""
        keys: dict[str, str] = {}
        values: dict[str, str] = {}
        with self._lock:
            for _, store in self._entries:
                for path, value in store.items():
                    norm = normalize_key(path)
                    keys.setdefault(norm, path)
                    values[norm] = value
        return {keys[norm]: value for norm, value in values.items()}
