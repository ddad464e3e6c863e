"""Commands built from a parsed line: arguments, redirections and separators."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Optional

from mshell.environment import ShellState
from mshell.expansion import ExpansionMode, drop_empty, expand_word, read_heredoc
from mshell.words import TokenType


class Separator(Enum):
    """What ends a command: a pipe, a semicolon or the end of the line."""

    PIPE = 0
    SEMICOLON = 1
    NEWLINE = 2


def separator_for(token_type: TokenType) -> Separator:
    """Map the token that ends a command to its separator."""
    if token_type is TokenType.PIPE:
        return Separator.PIPE
    if token_type is TokenType.SEMICOLON:
        return Separator.SEMICOLON
    return Separator.NEWLINE


@dataclass
class Redirection:
    """One redirection; for a here-document ``file`` holds the document body."""

    kind: TokenType
    file: str


@dataclass
class Command:
    """A simple command: its words, its redirections and what follows it."""

    argv: list[str] = field(default_factory=list)
    redirections: list[Redirection] = field(default_factory=list)
    separator: Separator = Separator.NEWLINE


def make_redirection(
    kind: TokenType,
    value: str,
    state: ShellState,
    read_line: Optional[Callable[[str], Optional[str]]] = None,
) -> Redirection:
    """Build a redirection; a here-document is read at once up to ``value``."""
    if kind is TokenType.DOUBLE_LESSER:
        return Redirection(kind, read_heredoc(value, state, read_line))
    return Redirection(kind, value)


def expand_commands(commands: Iterable[Command], state: ShellState) -> list[Command]:
    """Expand the words and redirection targets of every command in place.

    Arguments that expand to nothing are dropped; here-document bodies are
    left alone. Returns the commands as a list.
    """
    expanded = list(commands)
    for command in expanded:
        if command.argv:
            command.argv = drop_empty(
                [expand_word(arg, state, ExpansionMode.COMMAND) for arg in command.argv]
            )
        for redirection in command.redirections:
            if redirection.kind is not TokenType.DOUBLE_LESSER:
                redirection.file = expand_word(
                    redirection.file, state, ExpansionMode.REDIRECTION
                )
    return expanded


__all__ = [
    "Command",
    "Redirection",
    "Separator",
    "expand_commands",
    "make_redirection",
    "separator_for",
]