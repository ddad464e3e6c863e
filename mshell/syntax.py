"""Syntax checks over the token list of a command line."""

from __future__ import annotations

from typing import Sequence

from mshell.words import Token, TokenType, check_quotes, trailing_backslashes

SYNTAX_ERROR_STATUS = 258

_RED = "\x1b[1;91m"
_RESET = "\x1b[0m"
_END = Token(TokenType.NEWLINE, "newline")
_REDIRECTIONS = frozenset(
    {
        TokenType.REDIR_GREATER,
        TokenType.REDIR_LESSER,
        TokenType.DOUBLE_GREATER,
        TokenType.DOUBLE_LESSER,
    }
)
_SEPARATORS = frozenset({TokenType.PIPE, TokenType.SEMICOLON})


class ShellSyntaxError(Exception):
    """A command line that cannot be run; ``status`` is the exit status to set."""

    def __init__(self, message: str, status: int = SYNTAX_ERROR_STATUS) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


def format_error(value: str) -> str:
    """Return the message shown for an unexpected token."""
    return f"{_RED}My_Minishell: syntax error near unexpected token {value}{_RESET}"


def _unexpected(token: Token) -> ShellSyntaxError:
    return ShellSyntaxError(format_error(token.value))


def _check(token: Token, following: Token) -> bool:
    """Check one token against the next; False means the line is empty."""
    kind = token.type
    if kind is TokenType.NONE:
        if following.type in _SEPARATORS:
            raise _unexpected(following)
        return following.type is not TokenType.NEWLINE
    if kind in _REDIRECTIONS:
        if following.type is not TokenType.WORD:
            raise _unexpected(following)
    elif kind is TokenType.PIPE:
        if following.type in _SEPARATORS or following.type is TokenType.NEWLINE:
            raise _unexpected(following)
    elif kind is TokenType.WORD:
        if trailing_backslashes(token.value) % 2 or not check_quotes(token.value):
            raise ShellSyntaxError(
                f"{_RED}syntax error multiple line not allowed{_RESET}"
            )
    elif kind is TokenType.SEMICOLON:
        if token.value == ";;":
            raise _unexpected(token)
        if following.type in _SEPARATORS:
            raise _unexpected(following)
    return True


def check_syntax(tokens: Sequence[Token]) -> bool:
    """Check a token list up to its NEWLINE token.

    Returns False when the line holds nothing to run (a leading NONE token
    directly followed by NEWLINE), True otherwise. Raises ShellSyntaxError
    on the first error found.
    """
    for index, token in enumerate(tokens):
        if token.type is TokenType.NEWLINE:
            break
        following = tokens[index + 1] if index + 1 < len(tokens) else _END
        if not _check(token, following):
            return False
    return bool(tokens)


__all__ = ["SYNTAX_ERROR_STATUS", "ShellSyntaxError", "check_syntax", "format_error"]