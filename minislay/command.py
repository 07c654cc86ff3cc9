"""Simple commands: their arguments and their redirections."""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass, field

from .env import Environment
from .tokens import TokenType

HEREDOC_PROMPT = "heredoc> "

_OPEN_FLAGS = {
    TokenType.REDIR_OUT: os.O_CREAT | os.O_WRONLY | os.O_TRUNC,
    TokenType.REDIR_APPEND: os.O_CREAT | os.O_WRONLY | os.O_APPEND,
    TokenType.REDIR_IN: os.O_RDONLY,
}
_FILE_MODE = 0o644


class RedirectionError(Exception):
    """A redirection could not be set up."""


@dataclass
class Command:
    """One simple command of a pipeline."""

    args: list[str] = field(default_factory=list)
    in_file: str | None = None
    out_file: str | None = None
    append: bool = False
    heredoc: str | None = None
    env: Environment | None = None
    exit_status: int = 0

    def add_arg(self, value: str) -> None:
        """Append one word to the argument list."""
        self.args.append(value)

    def set_redirection(self, filename: str | None, out: bool, append: bool = False) -> None:
        """Record an input or output file; a later one replaces an earlier one."""
        if filename is None:
            raise RedirectionError("Error: invalid redirection")
        if out:
            self.out_file = filename
            self.append = append
        else:
            self.in_file = filename

    def read_heredoc(
        self,
        delimiter: str | None,
        read_line: Callable[[str], str | None] | None = None,
    ) -> None:
        """Collect lines until ``delimiter`` or end of input as the heredoc text.

        ``read_line`` is called with the prompt and returns a line, or None
        (or raises EOFError) at end of input. It defaults to ``input``.
        """
        if delimiter is None:
            raise RedirectionError("Error : invalid heredoc")
        reader = input if read_line is None else read_line
        lines: list[str] = []
        while True:
            try:
                line = reader(HEREDOC_PROMPT)
            except EOFError:
                break
            if line is None or line == delimiter:
                break
            lines.append(line + "\n")
        self.heredoc = "".join(lines)

    def has_redirection(self) -> bool:
        """Return whether the command reads or writes anything but the terminal."""
        return (
            self.in_file is not None
            or self.out_file is not None
            or self.heredoc is not None
        )


def open_file(filename: str | None, kind: TokenType) -> int:
    """Open ``filename`` for the redirection ``kind`` and return the descriptor.

    Output files are created with mode 0644; ``>`` truncates and ``>>``
    appends. The caller owns the returned descriptor.
    """
    if filename is None:
        raise RedirectionError("Error: NULL filename")
    try:
        flags = _OPEN_FLAGS[TokenType(kind)]
    except (KeyError, ValueError):
        raise ValueError(f"not a file redirection: {kind!r}") from None
    try:
        return os.open(filename, flags, _FILE_MODE)
    except OSError as error:
        raise RedirectionError(f"No such or directory : {filename}") from error


def handle_redirection(
    kind: TokenType,
    filename: str | None,
    command: Command | None,
    read_line: Callable[[str], str | None] | None = None,
) -> None:
    """Apply the redirection operator ``kind`` with its target to ``command``.

    For a heredoc, ``filename`` is the delimiter. Other token kinds are ignored.
    """
    if command is None or filename is None:
        raise RedirectionError("Error: invalid redirection")
    if kind == TokenType.REDIR_OUT:
        command.set_redirection(filename, out=True, append=False)
    elif kind == TokenType.REDIR_IN:
        command.set_redirection(filename, out=False, append=False)
    elif kind == TokenType.REDIR_APPEND:
        command.set_redirection(filename, out=True, append=True)
    elif kind == TokenType.HEREDOC:
        command.read_heredoc(filename, read_line)