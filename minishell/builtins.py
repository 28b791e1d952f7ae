"""Commands the shell runs itself instead of starting a program."""

from __future__ import annotations

import os
from collections.abc import Sequence
from typing import TextIO

from minishell.environment import Environment
from minishell.errors import PREFIX, ErrorKind, report
from minishell.textutils import atoi, split_fields

BUILTIN_NAMES = frozenset({"echo", "cd", "pwd", "export", "unset", "env", "exit"})


class ShellExit(Exception):
    """Raised by ``exit`` to end the shell with ``status``."""

    def __init__(self, status: int):
        self.status = status
        super().__init__(f"exit {status}")


def is_builtin(name: str | None) -> bool:
    """Return True if ``name`` is one of the shell's own commands."""
    return name in BUILTIN_NAMES


def cd(args: Sequence[str], env: Environment, stderr: TextIO) -> int:
    """Change the working directory; with no argument or ``~`` go to HOME."""
    if len(args) > 2:
        stderr.write(f"{PREFIX}cd: too many arguments\n")
        return -1
    if len(args) < 2 or args[1] == "~":
        path = env.get("HOME")
        if path is None:
            return 0
    else:
        path = args[1]
    try:
        os.chdir(path)
    except OSError as exc:
        stderr.write(f"{PREFIX}cd: {path}: {exc.strerror}\n")
        return 1
    return 0


def _is_n_flag(arg: str) -> bool:
    return arg.startswith("-") and all(ch == "n" for ch in arg[1:])


def echo(args: Sequence[str], stdout: TextIO) -> int:
    """Print the arguments separated by spaces; leading ``-n`` flags drop the newline."""
    words = list(args[1:])
    newline = True
    while words and _is_n_flag(words[0]):
        newline = False
        words.pop(0)
    stdout.write(" ".join(words))
    if newline:
        stdout.write("\n")
    return 0


def env_command(env: Environment, stdout: TextIO) -> int:
    """Print every variable as ``NAME=value``, one per line."""
    for name, value in env:
        stdout.write(f"{name}={value}\n")
    return 0


def exit_command(args: Sequence[str], stdout: TextIO, stderr: TextIO) -> int:
    """Announce the exit and raise ShellExit with the requested status.

    A non-numeric argument gives status 255, more than one argument gives 1.
    The status is reduced to the range a process exit code can hold.
    """
    stdout.write("exit\n")
    if len(args) <= 1:
        raise ShellExit(0)
    if len(args) == 2:
        arg = args[1]
        if not arg[:1].isdigit() or not arg[:1].isascii():
            stderr.write(f"{PREFIX}exit: {arg}: numeric argument required\n")
            raise ShellExit(255)
        raise ShellExit(atoi(arg) & 0xFF)
    stderr.write(f"{PREFIX}exit: too many arguments\n")
    raise ShellExit(1)


def export(args: Sequence[str], env: Environment, stdout: TextIO, stderr: TextIO) -> int:
    """Set a variable from ``NAME=value``, or list all variables sorted."""
    if len(args) < 2:
        for entry in sorted(env.to_strings()):
            stdout.write(f"declare -x {entry}\n")
        return 0
    assignment = args[1]
    if "=" not in assignment:
        return 0
    if assignment.startswith("="):
        report(ErrorKind.INVALID_IDENTIFIER, assignment, stderr)
        return -1
    fields = split_fields(assignment, "=")
    name = fields[0]
    if env.contains(name):
        env.set(name, fields[1] if len(fields) > 1 else None)
    else:
        env.add(assignment)
    return 0


def pwd(stdout: TextIO, stderr: TextIO) -> int:
    """Print the current working directory."""
    try:
        path = os.getcwd()
    except OSError as exc:
        stderr.write(f"{PREFIX}pwd: {exc.strerror}\n")
        return -1
    stdout.write(f"{path}\n")
    return 0


def unset(args: Sequence[str], env: Environment) -> int:
    """Remove each named variable that is set."""
    for name in args[1:]:
        if env.contains(name):
            env.remove(name)
    return 0


def run_builtin(args: Sequence[str], env: Environment, stdout: TextIO, stderr: TextIO) -> int:
    """Run the builtin named by ``args[0]`` and return its status.

    Raises ValueError if ``args[0]`` is not a builtin and ShellExit for ``exit``.
    """
    if not args or not is_builtin(args[0]):
        raise ValueError(f"not a builtin: {args[0] if args else ''}")
    name = args[0]
    if name == "echo":
        return echo(args, stdout)
    if name == "cd":
        return cd(args, env, stderr)
    if name == "pwd":
        return pwd(stdout, stderr)
    if name == "export":
        return export(args, env, stdout, stderr)
    if name == "unset":
        return unset(args, env)
    if name == "env":
        return env_command(env, stdout)
    return exit_command(args, stdout, stderr)