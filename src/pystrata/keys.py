from __future__ import annotations

KEY_DELIMITER = ":"

KeyPath = tuple[str, ...]


def combine_path(*segments: str | None) -> str:
    """Join *segments* into a single configuration path.

    ``None`` entries are skipped so callers can pass optional segments
    without branching.
    """
    return KEY_DELIMITER.join(s for s in segments if s is not None)


def split_path(path: str) -> KeyPath:
    return tuple(path.split(KEY_DELIMITER))


def normalize_key(path: str) -> str:
    """Return the comparison form of *path*.

    Paths compare case-insensitively segment by segment; since the delimiter
    has no case, folding the whole string is equivalent.
    """
    return path.casefold()
