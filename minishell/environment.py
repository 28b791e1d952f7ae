"""The shell's ordered table of environment variables."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


def split_assignment(text: str) -> tuple[str, str]:
    """Split ``NAME=value`` at the first equal sign.

    Raises ValueError if there is no equal sign.
    """
    name, sep, value = text.partition("=")
    if not sep:
        raise ValueError("Error: no equal sign in env variable.")
    return name, value


class Environment:
    """Environment variables kept in insertion order."""

    def __init__(self) -> None:
        self._vars: dict[str, str] = {}

    @classmethod
    def from_strings(cls, strings: Iterable[str]) -> "Environment":
        """Build an environment from ``NAME=value`` strings; the first of duplicates wins."""
        env = cls()
        for text in strings:
            name, value = split_assignment(text)
            env._vars.setdefault(name, value)
        return env

    def get(self, name: str | None) -> str | None:
        """Return the value of ``name``, or None if it is not set."""
        if name is None:
            return None
        return self._vars.get(name)

    def contains(self, name: str | None) -> bool:
        """Return True if ``name`` is set."""
        return name is not None and name in self._vars

    __contains__ = contains

    def set(self, name: str, value: str | None) -> None:
        """Set ``name`` to ``value``; an existing variable keeps its position."""
        self._vars[name] = value if value is not None else ""

    def add(self, assignment: str) -> None:
        """Set a variable from a ``NAME=value`` string."""
        name, value = split_assignment(assignment)
        self.set(name, value)

    def remove(self, name: str) -> None:
        """Unset ``name``; unknown names are ignored."""
        self._vars.pop(name, None)

    def search_prefix(self, prefix: str | None) -> str | None:
        """Return the value of the first variable whose name starts with ``prefix``."""
        if not prefix:
            return None
        return next(
            (value for name, value in self._vars.items() if name.startswith(prefix)),
            None,
        )

    def to_strings(self) -> list[str]:
        """Return the variables as ``NAME=value`` strings, in order."""
        return [f"{name}={value}" for name, value in self._vars.items()]

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(list(self._vars.items()))

    def __len__(self) -> int:
        return len(self._vars)