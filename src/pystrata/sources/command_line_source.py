from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from ..errors import ArgumentError, ConfigurationError, FormatError
from ..keys import normalize_key
from ..store import EMPTY_STORE, FlatStore

logger = logging.getLogger(__name__)


def _validated_mappings(switch_mappings: Mapping[str, str]) -> dict[str, str]:
    # Callers may hand in a case-sensitive dict; switches match case-insensitively.
    out: dict[str, str] = {}
    for switch, key in switch_mappings.items():
        if not switch.startswith("-"):
            raise ConfigurationError(
                f"The switch mapping '{switch}' is invalid. "
                "Switch mappings must start with '--' or '-'."
            )
        norm = normalize_key(switch)
        if norm in out:
            raise ConfigurationError(
                f"Keys in switch mappings are case-insensitive. "
                f"A duplicated key '{switch}' was found."
            )
        out[norm] = key
    return out


class CommandLineSource:
    """Configuration read from command-line arguments.

    Accepted shapes are ``--key value``, ``--key=value``, ``/key value`` and
    ``/key=value``.  Single-dash switches (``-k``) are only accepted when
    listed in *switch_mappings*, which translates a switch spelling into
    the configuration key it stands for::

        CommandLineSource(["-v", "2"], {"-v": "Verbosity"})

    Later occurrences of a key override earlier ones.
    """

    def __init__(
        self,
        args: Sequence[str] | None,
        switch_mappings: Mapping[str, str] | None = None,
    ) -> None:
        if args is None:
            raise ArgumentError("Command-line arguments must not be None.")
        self.args = list(args)
        self._mappings = (
            _validated_mappings(switch_mappings) if switch_mappings is not None else {}
        )
        self._data = EMPTY_STORE

    @property
    def data(self) -> FlatStore:
        return self._data

    def try_get(self, path: str) -> str | None:
        return self._data.try_get(path)

    def load(self) -> None:
        self._data = FlatStore(self._parse(self.args))
        logger.debug("loaded %d keys from %d arguments", len(self._data), len(self.args))

    def _resolve_key(self, switch: str, prefix_len: int, arg: str) -> str:
        mapped = self._mappings.get(normalize_key(switch))
        if mapped is not None:
            return mapped
        if prefix_len == 1:
            raise FormatError(
                f"The short switch '{arg}' is not defined in the switch mappings."
            )
        return switch[prefix_len:]

    def _parse(self, args: Iterable[str]) -> Iterable[tuple[str, str]]:
        tokens = iter(args)
        for arg in tokens:
            if arg.startswith("--"):
                prefix_len = 2
            elif arg.startswith("-"):
                prefix_len = 1
            elif arg.startswith("/"):
                # "/Switch" is an alias for "--Switch", mappings included
                arg = f"--{arg[1:]}"
                prefix_len = 2
            else:
                prefix_len = 0

            sep = arg.find("=")
            if sep < 0:
                if prefix_len == 0:
                    raise FormatError(f"Unrecognized argument format: '{arg}'.")
                key = self._resolve_key(arg, prefix_len, arg)
                try:
                    value = next(tokens)
                except StopIteration:
                    raise FormatError(f"Value for switch '{arg}' is missing.") from None
            else:
                key = self._resolve_key(arg[:sep], prefix_len, arg)
                value = arg[sep + 1:]
            yield key, value
