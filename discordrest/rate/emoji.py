"""Recognition of emoji and custom emoji names in request paths."""

from __future__ import annotations

import re

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1

_REPLACEMENT_CHAR = 0xFFFD


def _decode_surrogates(high: int, low: int) -> int:
    """Combine a UTF-16 surrogate pair, yielding U+FFFD for an invalid pair."""
    if 0xD800 <= high < 0xDC00 and 0xDC00 <= low < 0xE000:
        return (((high - 0xD800) << 10) | (low - 0xDC00)) + 0x10000
    return _REPLACEMENT_CHAR


# The lower bounds are not valid surrogate pairs and decode to U+FFFD,
# which deliberately widens each range.
_SURROGATE_RANGES = tuple(
    (_decode_surrogates(high, 0xD000), _decode_surrogates(high, 0xDFFF))
    for high in (0xD83C, 0xD83E, 0xD83F)
)


def _is_int(text: str) -> bool:
    """Report whether text is a signed decimal that fits in 64 bits."""
    if not _INT_PATTERN.fullmatch(text):
        return False
    return _INT64_MIN <= int(text) <= _INT64_MAX


def emoji_rune(char: str | int) -> bool:
    """Report whether a single character (or code point) looks like an emoji."""
    if isinstance(char, str):
        if len(char) != 1:
            raise ValueError(f"expected a single character, got {char!r}")
        code = ord(char)
    else:
        code = int(char)

    if code in (0x00A9, 0x00AE) or 0x2000 <= code <= 0x3300:
        return True
    return any(low <= code <= high for low, high in _SURROGATE_RANGES)


def string_is_emoji_only(emoji: str) -> bool:
    """Report whether the string is a single emoji, possibly with a modifier."""
    if len(emoji) in (1, 2):
        return emoji_rune(emoji[0])
    return False


def string_is_custom_emoji(emoji: str) -> bool:
    """Report whether the string has the ``name:id`` form of a custom emoji."""
    parts = emoji.split(":")
    if len(parts) != 2:
        return False
    name, emoji_id = parts
    if not _is_int(emoji_id):
        return False
    return " " not in name