from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from ..keys import KEY_DELIMITER
from ..store import EMPTY_STORE, FlatStore

logger = logging.getLogger(__name__)

# Environment variable names cannot contain ":"; "__" stands in for it.
ENV_DELIMITER = "__"


def read_env(prefix: str = "", environ: Mapping[str, str] | None = None) -> list[tuple[str, str]]:
    """Return ``(path, value)`` pairs for variables starting with *prefix*."""
    env = os.environ if environ is None else environ
    lowered = prefix.lower()
    out: list[tuple[str, str]] = []
    for name, value in env.items():
        if not name.lower().startswith(lowered):
            continue
        raw = name[len(prefix):]
        if not raw:
            continue
        out.append((raw.replace(ENV_DELIMITER, KEY_DELIMITER), value))
    return out


class EnvironmentVariablesSource:
    """Configuration read from environment variables.

    Only variables whose name starts with *prefix* are used, with the prefix
    removed: ``APP_Logging__Level`` becomes ``Logging:Level`` for prefix
    ``APP_``.
    """

    def __init__(self, prefix: str = "", environ: Mapping[str, str] | None = None) -> None:
        self.prefix = prefix
        self._environ = environ
        self._data = EMPTY_STORE

    @property
    def data(self) -> FlatStore:
        return self._data

    def try_get(self, path: str) -> str | None:
        return self._data.try_get(path)

    def load(self) -> None:
        self._data = FlatStore(read_env(self.prefix, self._environ))
        logger.debug("loaded %d keys from environment (prefix %r)", len(self._data), self.prefix)
