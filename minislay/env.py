"""The shell's environment: an ordered list of name/value variables."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


def parse_entry(entry: str) -> tuple[str, str]:
    """Split a ``NAME=VALUE`` entry at its first ``=``.

    An entry without ``=`` is a name with an empty value.
    """
    name, sep, value = entry.partition("=")
    if not sep:
        return entry, ""
    return name, value


class Environment:
    """Ordered environment variables.

    Order of insertion is kept. Lookups return the first variable with a
    given name.
    """

    def __init__(self, items: Iterable[tuple[str, str]] = ()) -> None:
        self._items: list[tuple[str, str]] = [(name, value) for name, value in items]

    def _index(self, name: str) -> int | None:
        return next(
            (index for index, (key, _) in enumerate(self._items) if key == name),
            None,
        )

    def get(self, name: str) -> str | None:
        """Return the value of ``name``, or None if it is not set."""
        index = self._index(name)
        return None if index is None else self._items[index][1]

    def set(self, name: str, value: str) -> None:
        """Update ``name`` in place, or append it when it is not set."""
        index = self._index(name)
        if index is None:
            self._items.append((name, value))
        else:
            self._items[index] = (name, value)

    def replace(self, name: str, value: str) -> None:
        """Change the value of ``name`` only if it is already set."""
        index = self._index(name)
        if index is not None:
            self._items[index] = (name, value)

    def remove(self, name: str) -> None:
        """Remove the first variable called ``name``; a missing name is ignored."""
        index = self._index(name)
        if index is not None:
            del self._items[index]

    def copy(self) -> Environment:
        """Return an independent copy."""
        return Environment(self._items)

    def lines(self) -> list[str]:
        """Return every variable as a ``NAME=VALUE`` line, in order."""
        return [f"{name}={value}" for name, value in self._items]

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, name: object) -> bool:
        return any(key == name for key, _ in self._items)

    def __repr__(self) -> str:
        return f"Environment({self._items!r})"


def init_env(entries: Iterable[str]) -> Environment:
    """Build an environment from ``NAME=VALUE`` strings, keeping their order."""
    return Environment(parse_entry(entry) for entry in entries)