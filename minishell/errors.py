"""Error kinds and the diagnostic messages the shell prints for them."""

from __future__ import annotations

import sys
from enum import Enum
from typing import TextIO

PREFIX = "minishell: "


class ErrorKind(Enum):
    """The kinds of error the shell reports."""

    COMMAND_NOT_FOUND = "u"
    PIPE_FAILED = "p"
    DOUBLE_PIPE = "q"
    PIPE_WITHOUT_COMMAND = "x"
    MEMORY = "m"
    SEMICOLON = ";"
    BACKSLASH = "\\"
    MISSING_REDIRECT_FILE = "r"
    IS_DIRECTORY = "d"
    INVALID_IDENTIFIER = "e"


_TEMPLATES = {
    ErrorKind.COMMAND_NOT_FOUND: "{name}: command not found\n",
    ErrorKind.PIPE_FAILED: " pipe open error\n",
    ErrorKind.DOUBLE_PIPE: "I cant handle '||'\n",
    ErrorKind.PIPE_WITHOUT_COMMAND: "no command after pipe\n",
    ErrorKind.MEMORY: "Memory allocation failed\n",
    ErrorKind.SEMICOLON: "I cant handle ';' or ';;'\n",
    ErrorKind.BACKSLASH: "I cant handle '\\'\n",
    ErrorKind.MISSING_REDIRECT_FILE: "No file after redirection\n",
    ErrorKind.IS_DIRECTORY: "{name}: is a directory\n",
    ErrorKind.INVALID_IDENTIFIER: "export: `{name}': not a valid identifier\n",
}


def error_message(kind: ErrorKind | str, name: str | None = None) -> str:
    """Return the full diagnostic line for ``kind``, ending in a newline."""
    kind = ErrorKind(kind)
    return PREFIX + _TEMPLATES[kind].format(name=name or "")


def report(kind: ErrorKind | str, name: str | None = None, stream: TextIO | None = None) -> str:
    """Write the diagnostic for ``kind`` to ``stream`` (stderr by default) and return it."""
    message = error_message(kind, name)
    (stream if stream is not None else sys.stderr).write(message)
    return message


def redirection_error_message(name: str) -> str:
    """Return the message printed when a redirection target cannot be opened."""
    return f"{PREFIX}{name}: No such file or directory\n"


class ShellError(Exception):
    """An error the shell reports to the user and then carries on."""

    def __init__(self, kind: ErrorKind | str, name: str | None = None):
        self.kind = ErrorKind(kind)
        self.name = name
        self.message = error_message(self.kind, name)
        super().__init__(self.message.rstrip("\n"))