"""Word expansion: variables, quotes, backslashes and here-documents."""

from __future__ import annotations

import signal
import sys
import threading
from contextlib import contextmanager
from enum import Enum
from typing import Callable, Iterable, Iterator, Optional

from mshell.environment import Environment, ShellState

SHELL_NAME = "My_Minishell"
HEREDOC_PROMPT = ">>"
AMBIGUOUS_MARKER = "\n"

_RED = "\x1b[1;91m"
_RESET = "\x1b[0m"
_ESCAPABLE_IN_DOUBLE_QUOTES = '\\`$"'
_LITERAL_DOLLAR_FOLLOWERS = '" \t'


class ExpansionMode(Enum):
    """Where a word appears, which decides how an empty expansion is treated."""

    COMMAND = 0
    REDIRECTION = 1


def _is_name_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch == "_")


def dollar_name(text: str, start: int) -> tuple[str, int]:
    """Read a variable name (letters, digits, ``_``) starting at ``start``.

    Returns the name and the index just past it; the name is empty when the
    character at ``start`` cannot begin one.
    """
    end = start
    while end < len(text) and _is_name_char(text[end]):
        end += 1
    return text[start:end], end


def _expand_dollar(
    text: str, pos: int, state: ShellState, quoted: bool
) -> tuple[str, int, bool]:
    """Expand the ``$`` at ``pos``.

    Returns the replacement text, the index to continue from, and whether a
    variable substitution took place.
    """
    following = text[pos + 1 : pos + 2]
    if following == "?":
        value = str(state.status)
        state.status = 0
        return value, pos + 2, True
    if following in ("'", '"') and not quoted:
        end = text.find(following, pos + 2)
        if end < 0:
            return text[pos + 2 :], len(text), False
        return text[pos + 2 : end], end + 1, False
    if following and _is_name_char(following):
        if following.isdigit():
            name, end = following, pos + 2
        else:
            name, end = dollar_name(text, pos + 1)
        if name == "0":
            return SHELL_NAME, end, True
        return state.env.find(name) or "", end, True
    # A lone dollar stays, and the character after it is taken as it is.
    return "$" + following, pos + 1 + len(following), False


def _expand_double_quoted(text: str, pos: int, state: ShellState) -> tuple[str, int]:
    """Expand the inside of a double-quoted part that starts at ``pos``."""
    pieces: list[str] = []
    while pos < len(text):
        ch = text[pos]
        following = text[pos + 1 : pos + 2]
        if ch == '"':
            return "".join(pieces), pos + 1
        if ch == "\\" and (not following or following in _ESCAPABLE_IN_DOUBLE_QUOTES):
            pieces.append(following)
            pos += 1 + len(following)
        elif ch == "$" and following and following not in _LITERAL_DOLLAR_FOLLOWERS:
            piece, pos, _ = _expand_dollar(text, pos, state, quoted=True)
            pieces.append(piece)
        else:
            pieces.append(ch)
            pos += 1
    return "".join(pieces), pos


def expand_word(
    text: str, state: ShellState, mode: ExpansionMode = ExpansionMode.COMMAND
) -> str:
    """Expand variables and remove quotes and backslashes from one word.

    In redirection mode, an unquoted variable that leaves the whole word empty
    is an ambiguous redirect: a message is printed, the status becomes 1 and
    the word becomes a single newline.
    """
    pieces: list[str] = []
    pos = 0
    while pos < len(text):
        ch = text[pos]
        if ch == "$":
            piece, pos, substituted = _expand_dollar(text, pos, state, quoted=False)
            pieces.append(piece)
            if (
                mode is ExpansionMode.REDIRECTION
                and substituted
                and pos >= len(text)
                and not "".join(pieces)
            ):
                name = text[text.rfind("$") + 1 :]
                print(f"{_RED}${name}: ambiguous redirect{_RESET}")
                state.status = 1
                return AMBIGUOUS_MARKER
        elif ch == "\\":
            pieces.append(text[pos + 1 : pos + 2])
            pos += 2
        elif ch == '"':
            piece, pos = _expand_double_quoted(text, pos + 1, state)
            pieces.append(piece)
        elif ch == "'":
            end = text.find("'", pos + 1)
            if end < 0:
                end = len(text)
            pieces.append(text[pos + 1 : end])
            pos = end + 1
        else:
            pieces.append(ch)
            pos += 1
    return "".join(pieces)


def drop_empty(args: Iterable[str]) -> list[str]:
    """Remove empty arguments.

    An argument that directly follows a removed one is always kept, even when
    it is empty itself.
    """
    kept: list[str] = []
    after_removed = False
    for arg in args:
        if after_removed:
            kept.append(arg)
            after_removed = False
        elif arg == "":
            after_removed = True
        else:
            kept.append(arg)
    return kept


def strip_delimiter_quotes(delimiter: str) -> tuple[str, bool]:
    """Remove quote pairs from a here-document delimiter.

    Returns the bare delimiter and whether any quote was found, which turns
    off expansion of the document body.
    """
    pieces: list[str] = []
    quoted = False
    pos = 0
    while pos < len(delimiter):
        ch = delimiter[pos]
        if ch in ("'", '"'):
            quoted = True
            end = delimiter.find(ch, pos + 1)
            if end < 0:
                end = len(delimiter)
            pieces.append(delimiter[pos + 1 : end])
            pos = end + 1
        else:
            pieces.append(ch)
            pos += 1
    return "".join(pieces), quoted


def expand_heredoc(body: str, env: Environment) -> str:
    """Expand ``$NAME`` references in a here-document body.

    Only a dollar followed by a name character is expanded; a leading digit
    is a one-character name. Quotes and other dollars stay as they are.
    """
    pieces: list[str] = []
    pos = 0
    while pos < len(body):
        ch = body[pos]
        following = body[pos + 1 : pos + 2]
        if ch == "$" and following and _is_name_char(following):
            if following.isdigit():
                name, pos = following, pos + 2
            else:
                name, pos = dollar_name(body, pos + 1)
            pieces.append(env.find(name) or "")
        else:
            pieces.append(ch)
            pos += 1
    return "".join(pieces)


def _prompt_input(prompt: str) -> Optional[str]:
    try:
        return input(prompt)
    except EOFError:
        return None


@contextmanager
def _interrupts_ignored() -> Iterator[None]:
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def _lines_until(delimiter: str, read_line: Callable[[str], Optional[str]]) -> Iterator[str]:
    while True:
        line = read_line(HEREDOC_PROMPT)
        if line is None or line == delimiter:
            return
        yield line


def read_heredoc(
    delimiter: str,
    state: ShellState,
    read_line: Optional[Callable[[str], Optional[str]]] = None,
) -> str:
    """Read a here-document body up to ``delimiter`` or end of input.

    ``read_line`` is called with the prompt and returns a line, or ``None``
    at end of input. The body is expanded unless the delimiter was quoted.
    """
    reader = read_line or _prompt_input
    bare, quoted = strip_delimiter_quotes(delimiter)
    with _interrupts_ignored():
        body = "".join(f"{line}\n" for line in _lines_until(bare, reader))
    return body if quoted else expand_heredoc(body, state.env)


__all__ = [
    "AMBIGUOUS_MARKER",
    "ExpansionMode",
    "dollar_name",
    "drop_empty",
    "expand_heredoc",
    "expand_word",
    "read_heredoc",
    "strip_delimiter_quotes",
]

_ = sys  # stdout is where ambiguous-redirect messages go, through print