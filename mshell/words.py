"""Reading words and operator symbols from a command line."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

WORD_BREAKS = "|;> <\t"
_QUOTES = "\"'"


class TokenType(Enum):
    """Kinds of token produced when a command line is split."""

    NONE = "NONE"
    PIPE = "PIPE"
    SEMICOLON = "SEMICOLON"
    REDIR_GREATER = "REDIR_GREATER"
    REDIR_LESSER = "REDIR_LESSER"
    DOUBLE_GREATER = "DOUBLE_GREATER"
    DOUBLE_LESSER = "DOUBLE_LESSER"
    WORD = "WORD"
    NEWLINE = "NEWLINE"


@dataclass(frozen=True)
class Token:
    """One token of a command line: its kind and its raw text."""

    type: TokenType
    value: str


def backslash_run(line: str, start: int) -> int:
    """Count the backslashes that follow one another from ``start``."""
    end = start
    while end < len(line) and line[end] == "\\":
        end += 1
    return end - start


def trailing_backslashes(value: str) -> int:
    """Count the backslashes at the very end of ``value``."""
    return len(value) - len(value.rstrip("\\"))


def _closing_quote(line: str, start: int, quote: str, escapes: bool) -> int:
    """Find the quote that closes the one at ``start``.

    Returns its index, or ``len(line)`` when the quote is never closed. With
    ``escapes``, a character after an odd run of backslashes is skipped.
    """
    pos = start + 1
    while pos < len(line) and line[pos] != quote:
        if escapes and line[pos] == "\\":
            run = backslash_run(line, pos)
            pos += run if run % 2 else run - 1
        pos += 1
    return min(pos, len(line))


def check_quotes(value: str) -> bool:
    """Tell whether the last quoted part of ``value`` is closed.

    A double quote may be escaped inside double quotes; nothing is escaped
    inside single quotes. Outside quotes, an odd run of backslashes escapes
    the character after it.
    """
    balanced = True
    pos = 0
    while pos < len(value):
        ch = value[pos]
        if ch == '"':
            pos = _closing_quote(value, pos, '"', escapes=True)
            balanced = pos < len(value)
        elif ch == "'":
            pos = _closing_quote(value, pos, "'", escapes=False)
            balanced = pos < len(value)
        elif ch == "\\" and backslash_run(value, pos) % 2:
            pos += 1
        pos += 1
    return balanced


def read_word(line: str, start: int) -> tuple[str, int]:
    """Read one word of ``line`` starting at ``start``.

    The word ends at an unquoted, unescaped space, tab, ``|``, ``;``, ``<`` or
    ``>``. Quotes and backslashes are kept in the word as written. Returns the
    word and the index just past it.
    """
    pieces: list[str] = []
    pos = start
    while pos < len(line) and line[pos] not in WORD_BREAKS:
        run = backslash_run(line, pos)
        if run % 2:
            pieces.append(line[pos : pos + run + 1])
            pos += run + 1
        elif line[pos] in _QUOTES:
            end = _closing_quote(line, pos, line[pos], escapes=True)
            pieces.append(line[pos : end + 1])
            pos = end + 1
        elif run:
            pieces.append(line[pos : pos + run])
            pos += run
        else:
            pieces.append(line[pos])
            pos += 1
    return "".join(pieces), min(pos, len(line))


_SYMBOLS: dict[str, tuple[TokenType, TokenType]] = {
    "|": (TokenType.PIPE, TokenType.PIPE),
    ";": (TokenType.SEMICOLON, TokenType.SEMICOLON),
    ">": (TokenType.REDIR_GREATER, TokenType.DOUBLE_GREATER),
    "<": (TokenType.REDIR_LESSER, TokenType.DOUBLE_LESSER),
}


def read_symbol(line: str, start: int) -> tuple[Token, int]:
    """Read the operator at ``start``, doubled when the same character follows.

    Returns the token and the index just past it. Raises ValueError when the
    character at ``start`` is not an operator.
    """
    ch = line[start : start + 1]
    if ch not in _SYMBOLS or not ch:
        raise ValueError(f"no operator at position {start}: {ch!r}")
    single, double = _SYMBOLS[ch]
    if line[start + 1 : start + 2] == ch:
        return Token(double, ch * 2), start + 2
    return Token(single, ch), start + 1


__all__ = [
    "Token",
    "TokenType",
    "backslash_run",
    "check_quotes",
    "read_symbol",
    "read_word",
    "trailing_backslashes",
]