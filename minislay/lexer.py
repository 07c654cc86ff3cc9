"""Turning an input line into tokens, with the shell's early syntax checks."""

from __future__ import annotations

import os
from collections.abc import Mapping

from .tokens import Token, TokenClassifier, TokenType

ERR_SYNTAX = "bash: syntax error near unexpected token"
_ERR_CMD = "bash: {}: command not found"
_ERR_DIR = "bash: {}: is a directory"
_ERR_APPLICATIONS = "bash: Applications: command not found"

_SEPARATORS = frozenset("|><;&()")
_SPACES = frozenset(" \t\n")
_QUOTES = frozenset("'\"")
_DOUBLE_OPERATORS = frozenset({">>", "<<", "&&", "||"})


class LexError(ValueError):
    """The input line was rejected; the message says why."""


def _at(text: str, index: int) -> str:
    """Return the character at ``index``, or "" past the end."""
    return text[index] if 0 <= index < len(text) else ""


def is_separator(char: str) -> bool:
    """Return whether ``char`` is one of the operator characters."""
    return len(char) == 1 and char in _SEPARATORS


def is_space(char: str) -> bool:
    """Return whether ``char`` is a space, tab or newline."""
    return len(char) == 1 and char in _SPACES


def double_delimiter(text: str, index: int) -> bool:
    """Return whether ``&&`` or ``||`` starts at ``index``."""
    return text[index:index + 2] in ("&&", "||")


def syntax_error(text: str, environ: Mapping[str, str] | None = None) -> None:
    """Reject a line by its first character; raise LexError if it is invalid."""
    env = os.environ if environ is None else environ
    first = _at(text, 0)
    if first == "\\":
        raise LexError(_ERR_CMD.format(text))
    if first == ";":
        path = env.get("PATH")
        shown = path if path is not None else "Error: variable not set"
        raise LexError(f"{shown}\n{ERR_SYNTAX}")
    if first == "-":
        raise LexError(_ERR_CMD.format(text))
    if first in ("!", ":"):
        raise LexError("")


def delimiter_error(text: str) -> None:
    """Check the text starting at an operator; raise LexError if it is invalid."""
    first, second, third = _at(text, 0), _at(text, 1), _at(text, 2)
    if first == "&" and second != "&":
        raise LexError(ERR_SYNTAX)
    if first == "&" and second == "&" and third == "&":
        raise LexError(ERR_SYNTAX)
    if first == "|" and second == "|" and third == "|":
        raise LexError(ERR_SYNTAX)
    if first in ("/", ".") and second in ("/", "."):
        raise LexError(_ERR_DIR.format(text))


def character_error(text: str, environ: Mapping[str, str] | None = None) -> None:
    """Reject whole lines that start badly; raise LexError if invalid."""
    env = os.environ if environ is None else environ
    first, second = _at(text, 0), _at(text, 1)
    if first == "~":
        raise LexError(f"bash: {env.get('HOME', '')}: Is a directory")
    if first == "*":
        raise LexError(_ERR_APPLICATIONS)
    if text in ("''", '""'):
        raise LexError(_ERR_APPLICATIONS)
    if first == "(" and second in ("(", ")"):
        raise LexError(ERR_SYNTAX)
    if first == "/" and second in ("", " "):
        raise LexError(_ERR_DIR.format(text))


def input_check(text: str) -> None:
    """Reject a line made of the single control character 0x02."""
    if text == chr(TokenType.ARGUMENT):
        raise LexError(_ERR_CMD.format(text))


class Lexer:
    """Splits one input line into tokens."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.tokens: list[Token] = []
        self.classifier = TokenClassifier()

    def tokenize(self) -> list[Token]:
        """Return the tokens of the line; raise LexError on a syntax error."""
        self.pos = 0
        self.tokens = []
        self.classifier = TokenClassifier()
        if not self.text:
            return []
        character_error(self.text)
        while self.pos < len(self.text):
            self._skip_space()
            if self.pos >= len(self.text):
                break
            self._handle_special_char()
        return list(self.tokens)

    def _skip_space(self) -> None:
        while self.pos < len(self.text) and is_space(self.text[self.pos]):
            self.pos += 1

    def _add(self, value: str, kind: TokenType) -> None:
        self.tokens.append(Token(value, kind))

    def _handle_special_char(self) -> None:
        char = self.text[self.pos]
        if char in _QUOTES:
            self.pos = self._handle_mixed_quotes(self.pos)
            return
        syntax_error(self.text)
        input_check(self.text)
        if is_separator(char):
            delimiter_error(self.text[self.pos:])
            self.pos = self._handle_delimiter(self.pos)
        else:
            self.pos = self._handle_word(self.pos)

    def _handle_word(self, start: int) -> int:
        end = start
        text = self.text
        while (
            end < len(text)
            and not is_space(text[end])
            and not is_separator(text[end])
            and text[end] not in _QUOTES
        ):
            end += 1
        if end == start:
            return end
        word = text[start:end]
        self._add(word, self.classifier.classify(word))
        return end

    def _handle_delimiter(self, start: int) -> int:
        length = 2 if self.text[start:start + 2] in _DOUBLE_OPERATORS else 1
        delim = self.text[start:start + length]
        kind = self.classifier.classify(delim)
        self._add(delim, kind)
        if kind in (TokenType.PIPE, TokenType.SEPARATOR):
            self.classifier.reset()
        return start + length

    def _handle_mixed_quotes(self, start: int) -> int:
        text = self.text
        parts: list[str] = []
        end = start
        while end < len(text) and text[end] != " ":
            char = text[end]
            if char in _QUOTES:
                close = text.find(char, end + 1)
                if close == -1:
                    raise LexError(ERR_SYNTAX)
                parts.append(text[end + 1:close])
                end = close + 1
            else:
                parts.append(char)
                end += 1
        merged = "".join(parts)
        if self.classifier.expecting_command:
            kind = self.classifier.classify(merged)
        else:
            kind = TokenType.ARGUMENT
        self._add(merged, kind)
        while end < len(text) and text[end] == " ":
            end += 1
        return end


def _validate(tokens: list[Token]) -> list[Token]:
    if tokens and tokens[-1].type is TokenType.PIPE:
        raise LexError(ERR_SYNTAX)
    return tokens


def lexing(text: str) -> list[Token]:
    """Tokenize ``text`` and reject a line that ends with a pipe."""
    return _validate(Lexer(text).tokenize())


def parse_input(text: str | None) -> list[Token]:
    """Split a user's input line into tokens; no input gives no tokens."""
    if text is None:
        return []
    return lexing(text)