"""Derivation of rate-limit bucket keys from request paths."""

from __future__ import annotations

import re

from .emoji import string_is_custom_emoji, string_is_emoji_only

MAJOR_ROOT_PATHS = ("channels", "guilds")

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


def _is_int(text: str) -> bool:
    if not _INT_PATTERN.fullmatch(text):
        return False
    return _INT64_MIN <= int(text) <= _INT64_MAX


def parse_bucket_key(path: str) -> str:
    """Blank out the minor IDs and emoji in a path to form its bucket key."""
    path = path.split("?", 1)[0]
    parts = path.split("/")[1:]
    if not parts:
        raise ValueError(f"bucket path {path!r} does not start with '/'")

    # Major parameters (the ID after a major root) stay part of the key.
    skip = 2 if parts[0] in MAJOR_ROOT_PATHS else 0
    skip += 1

    for index in range(skip, len(parts), 2):
        part = parts[index]
        if _is_int(part) or string_is_emoji_only(part) or string_is_custom_emoji(part):
            parts[index] = ""

    return "/" + "/".join(parts)