"""Token kinds and the word classifier used by the lexer."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenType(enum.IntEnum):
    """Kinds of lexical token."""

    COMMAND = 1
    ARGUMENT = 2
    PIPE = 3
    REDIR_OUT = 4
    REDIR_IN = 5
    REDIR_APPEND = 6
    SEPARATOR = 7
    HEREDOC = 8
    SINGLE_QUOTE = 9
    OPEN_PARENT = 10
    CLOSE_PARENT = 11


@dataclass
class Token:
    """One token of the input line."""

    value: str
    type: TokenType


_OPERATORS = {
    "|": TokenType.PIPE,
    ">": TokenType.REDIR_OUT,
    ">>": TokenType.REDIR_APPEND,
    "<": TokenType.REDIR_IN,
    ";": TokenType.SEPARATOR,
    "<<": TokenType.HEREDOC,
    "(": TokenType.OPEN_PARENT,
    ")": TokenType.CLOSE_PARENT,
}


class TokenClassifier:
    """Assigns a token type to each word.

    Operators are recognised by their text. Of the other words, the first
    one since the last reset is the command and the rest are arguments.
    """

    def __init__(self) -> None:
        self.expecting_command = True

    def classify(self, word: str) -> TokenType:
        """Return the type of ``word``, consuming the command slot if needed."""
        operator = _OPERATORS.get(word)
        if operator is not None:
            return operator
        if self.expecting_command:
            self.expecting_command = False
            return TokenType.COMMAND
        return TokenType.ARGUMENT

    def reset(self) -> None:
        """Make the next plain word a command again."""
        self.expecting_command = True