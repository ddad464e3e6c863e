"""Ordered shell environment and the mutable state a shell session carries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional


def split_assignment(text: str) -> tuple[str, Optional[str]]:
    """Split ``NAME=value`` at the first ``=``.

    The value is ``None`` when the text holds no ``=`` at all, and the empty
    string when the ``=`` is the last character.
    """
    name, sep, value = text.partition("=")
    if not sep:
        return name, None
    return name, value


def environment_from_strings(strings: Iterable[str]) -> "Environment":
    """Build an environment from ``NAME=value`` strings, keeping their order."""
    return Environment(split_assignment(item) for item in strings)


def _equals_position(arg: str) -> int:
    position = arg.find("=")
    return len(arg) if position < 0 else position


def _is_append(arg: str, position: int) -> bool:
    return 0 < position < len(arg) and arg[position - 1] == "+"


def _name_of(arg: str) -> str:
    position = _equals_position(arg)
    if _is_append(arg, position):
        return arg[: position - 1]
    return arg[:position]


class Environment:
    """An ordered list of variables; a variable may exist without a value."""

    def __init__(self, entries: Iterable[tuple[str, Optional[str]]] = ()) -> None:
        self._entries: list[tuple[str, Optional[str]]] = [
            (name, value) for name, value in entries
        ]

    def __iter__(self) -> Iterator[tuple[str, Optional[str]]]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Environment({self._entries!r})"

    def find(self, key: str) -> Optional[str]:
        """Return the value of the first variable called ``key``, or ``None``."""
        index = self.index_of(key)
        return None if index is None else self._entries[index][1]

    def index_of(self, name: str) -> Optional[int]:
        """Return the position of the first variable called ``name``, or ``None``."""
        return next(
            (i for i, (entry_name, _) in enumerate(self._entries) if entry_name == name),
            None,
        )

    def contains(self, arg: str) -> bool:
        """Tell whether the variable named by an assignment argument exists.

        ``arg`` may be ``NAME``, ``NAME=value`` or ``NAME+=value``.
        """
        return self.index_of(_name_of(arg)) is not None

    def add(self, arg: str) -> None:
        """Append a new variable from ``NAME`` or ``NAME=value``.

        An appending assignment (``NAME+=value``) adds nothing.
        """
        position = _equals_position(arg)
        if _is_append(arg, position):
            return
        value = arg[position + 1 :] if position < len(arg) else None
        self._entries.append((arg[:position], value))

    def replace(self, arg: str) -> None:
        """Update an existing variable from ``NAME=value`` or ``NAME+=value``.

        ``NAME+=value`` appends to the current value; a variable that has no
        value keeps none. A bare ``NAME`` leaves the variable as it is, and a
        name that is not present changes nothing.
        """
        position = _equals_position(arg)
        if _is_append(arg, position):
            name = arg[: position - 1]
            index = self.index_of(name)
            if index is None:
                return
            current = self._entries[index][1]
            if current is not None:
                self._entries[index] = (name, current + arg[position + 1 :])
            return
        if position >= len(arg):
            return
        name = arg[:position]
        index = self.index_of(name)
        if index is not None:
            self._entries[index] = (name, arg[position + 1 :])

    def assign(self, arg: str) -> None:
        """Replace the variable if it exists, otherwise add it."""
        if self.contains(arg):
            self.replace(arg)
        else:
            self.add(arg)

    def delete(self, name: str) -> None:
        """Remove the first variable called ``name``; raise KeyError if absent."""
        index = self.index_of(name)
        if index is None:
            raise KeyError(name)
        del self._entries[index]

    def to_strings(self) -> list[str]:
        """Return ``NAME=value`` strings for every variable that has a value."""
        return [f"{name}={value}" for name, value in self._entries if value is not None]

    def format_env(self) -> str:
        """Return the listing printed by ``env``: one ``NAME=value`` per line."""
        return "".join(f"{line}\n" for line in self.to_strings())


@dataclass
class ShellState:
    """The environment and the last exit status of a shell session."""

    env: Environment = field(default_factory=Environment)
    status: int = 0