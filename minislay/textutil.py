"""Small string helpers used throughout the shell."""

from __future__ import annotations

import operator
import re

_WHITESPACE = " \t\n\v\f\r"
_LEADING_DIGITS = re.compile(r"[0-9]*")


def _to_int32(value: int) -> int:
    """Wrap an integer into the signed 32-bit range."""
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value >= (1 << 31) else value


def atoi(text: str) -> int:
    """Convert the leading number of ``text`` to a signed 32-bit integer.

    Leading whitespace is skipped, one optional sign is accepted, and
    conversion stops at the first non-digit. Values that do not fit
    wrap around as a 32-bit integer would.
    """
    rest = text.lstrip(_WHITESPACE)
    sign = 1
    if rest[:1] in ("-", "+"):
        if rest[0] == "-":
            sign = -1
        rest = rest[1:]
    digits = _LEADING_DIGITS.match(rest).group()
    magnitude = int(digits) if digits else 0
    return _to_int32(sign * _to_int32(magnitude))


def itoa(number: int) -> str:
    """Return the decimal representation of an integer."""
    return str(operator.index(number))


def split(text: str, separator: str) -> list[str]:
    """Split ``text`` on a single character, dropping empty words."""
    if len(separator) != 1:
        raise ValueError("separator must be exactly one character")
    return [word for word in text.split(separator) if word]


def strtrim(text: str, charset: str) -> str:
    """Remove every character of ``charset`` from both ends of ``text``."""
    return text.strip(charset)


def substr(text: str, start: int, length: int) -> str:
    """Return at most ``length`` characters of ``text`` from ``start``."""
    if start < 0 or length < 0:
        raise ValueError("start and length must not be negative")
    if start >= len(text):
        return ""
    return text[start:start + length]


def strnstr(haystack: str, needle: str, length: int) -> int | None:
    """Find ``needle`` inside the first ``length`` characters of ``haystack``.

    Returns the index of the first occurrence, or None when the needle
    does not lie wholly within that window. An empty needle is found at 0.
    """
    if length < 0:
        raise ValueError("length must not be negative")
    if not needle:
        return 0
    position = haystack[:length].find(needle)
    return None if position < 0 else position