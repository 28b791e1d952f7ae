"""Finding the program a command name refers to."""

from __future__ import annotations

import os

from minishell.environment import Environment
from minishell.textutils import split_fields


def resolve_command(name: str | None, env: Environment | None) -> str | None:
    """Return the path of the program to run for ``name``, or None.

    ``name`` itself is used if it is executable as given; otherwise each
    directory on PATH is tried in order.
    """
    if not name or env is None:
        return None
    if os.access(name, os.X_OK):
        return name
    path = env.get("PATH")
    if path is None:
        return None
    for directory in split_fields(path, ":"):
        candidate = f"{directory}/{name}"
        if os.access(candidate, os.X_OK):
            return candidate
    return None