"""Expansion of ``$NAME`` variables inside words."""

from __future__ import annotations

from .env import Environment

_NAME_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_"
)
_LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")


def extract_variable_name(text: str, start: int) -> str:
    """Return the run of letters, digits and underscores at ``start``."""
    end = start
    while end < len(text) and text[end] in _NAME_CHARS:
        end += 1
    return text[start:end]


def expand_variable(env: Environment, text: str, single_quoted: bool = False) -> str:
    """Replace every ``$NAME`` in ``text`` with its value from ``env``.

    Only a ``$`` followed by a letter starts a variable; an unset variable
    expands to nothing. Single-quoted text is returned unchanged.
    """
    if single_quoted:
        return text
    parts: list[str] = []
    index = 0
    while index < len(text):
        char = text[index]
        if char == "$" and index + 1 < len(text) and text[index + 1] in _LETTERS:
            name = extract_variable_name(text, index + 1)
            value = env.get(name)
            if value is not None:
                parts.append(value)
            index += 1 + len(name)
        else:
            parts.append(char)
            index += 1
    return "".join(parts)