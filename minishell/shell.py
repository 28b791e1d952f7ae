"""The interactive shell: prompt, line handling and the read-eval loop."""

from __future__ import annotations

import os
import signal
import sys
from collections.abc import Callable, Iterable, Mapping
from typing import TextIO

from minishell.builtins import ShellExit
from minishell.environment import Environment
from minishell.errors import ShellError
from minishell.executor import Executor
from minishell.expansion import expand_words
from minishell.lexer import (
    check_control,
    check_operators,
    check_quotes,
    split_operators,
    split_words,
)

GREEN = "\033[92m"
DEFAULT = "\033[0m"
EOF_MESSAGE = "\b\bexit\n"
TOO_MANY_ARGUMENTS = "! Too many arguments.\n"


class Shell:
    """A shell session holding its environment and last exit status."""

    def __init__(
        self,
        environ: Mapping[str, str] | Iterable[str] | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        input_func: Callable[[str], str | None] | None = None,
    ):
        if environ is None:
            environ = os.environ
        if isinstance(environ, Mapping):
            strings = [f"{name}={value}" for name, value in environ.items()]
        else:
            strings = list(environ)
        self.env = Environment.from_strings(strings)
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr
        self.input_func = input_func if input_func is not None else input
        self.executor = Executor(self.env, None, self.stdout, self.stderr, self.input_func)

    @property
    def exit_status(self) -> int:
        """The status of the last command run."""
        return self.executor.exit_status

    def prompt(self) -> str:
        """Return the prompt: a green check mark, the last path segment and ``$``."""
        cwd = os.getcwd()
        return f"{GREEN}✓{DEFAULT}{cwd[cwd.rfind('/'):]} $ "

    def execute_line(self, line: str) -> int:
        """Check, expand and run one input line; return the exit status.

        Raises ShellExit when the line runs ``exit``.
        """
        try:
            check_control(line)
        except ShellError as exc:
            self.stderr.write(exc.message)
            return self.exit_status
        try:
            check_quotes(line)
        except ValueError as exc:
            self.stdout.write(f"{exc}\n")
            return self.exit_status
        words = expand_words(split_words(line), self.env, self.exit_status)
        tokens = split_operators(words)
        try:
            check_operators(tokens)
            return self.executor.run(tokens)
        except ShellError as exc:
            self.stderr.write(exc.message)
            return self.exit_status

    def loop(self) -> int:
        """Read and run lines until input ends or ``exit`` runs; return the exit code."""
        while True:
            try:
                line = self.input_func(self.prompt())
            except EOFError:
                line = None
            except KeyboardInterrupt:
                self.stdout.write("\n")
                continue
            if line is None:
                self.stdout.write(EOF_MESSAGE)
                return 0
            if not line:
                continue
            try:
                self.execute_line(line)
            except ShellExit as exc:
                return exc.status
            except KeyboardInterrupt:
                self.stdout.write("\n")


def main(argv: list[str] | None = None) -> int:
    """Start an interactive shell; no arguments are accepted."""
    args = sys.argv[1:] if argv is None else list(argv)
    if args:
        sys.stdout.write(TOO_MANY_ARGUMENTS)
        return 0
    try:
        import readline  # noqa: F401  (line editing and history for input())
    except ImportError:
        pass
    if hasattr(signal, "SIGQUIT"):
        signal.signal(signal.SIGQUIT, signal.SIG_IGN)
    try:
        shell = Shell()
    except ValueError as exc:
        sys.stdout.write(f"{exc}\n")
        return 0
    return shell.loop()


if __name__ == "__main__":
    raise SystemExit(main())