"""Filename matching with ``*`` and ``?``."""

from __future__ import annotations

import os


def match_wildcard(pattern: str, name: str) -> bool:
    """Return whether ``name`` matches ``pattern``.

    ``*`` matches any run of characters, including none; ``?`` matches
    exactly one character. Every other character matches only itself.
    """
    p = n = 0
    star = -1
    resume = 0
    while n < len(name):
        if p < len(pattern) and pattern[p] == "*":
            star = p
            resume = n
            p += 1
        elif p < len(pattern) and pattern[p] in ("?", name[n]):
            p += 1
            n += 1
        elif star >= 0:
            p = star + 1
            resume += 1
            n = resume
        else:
            return False
    return all(char == "*" for char in pattern[p:])


def expand_wildcards(pattern: str, directory: str = ".") -> list[str]:
    """Return the entries of ``directory`` that match ``pattern``.

    The directory's own ``.`` and ``..`` entries take part. When nothing
    matches, the pattern itself is returned as the only word. A directory
    that cannot be read raises OSError.
    """
    entries = [".", "..", *os.listdir(directory)]
    matches = [entry for entry in entries if match_wildcard(pattern, entry)]
    return matches or [pattern]