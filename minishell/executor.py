"""Running a tokenised command line: blocks, redirections, pipes and programs."""

from __future__ import annotations

import io
import subprocess
import sys
from collections.abc import Callable, Sequence
from contextlib import ExitStack
from dataclasses import dataclass, field
from typing import Any, BinaryIO, TextIO

from minishell.builtins import ShellExit, is_builtin, run_builtin
from minishell.environment import Environment
from minishell.errors import ErrorKind, ShellError, redirection_error_message, report
from minishell.lexer import is_pipe, is_redirection, trim_quotes
from minishell.pathsearch import resolve_command

HEREDOC_PROMPT = "> "
COMMAND_NOT_FOUND_STATUS = 127
PIPELINE_BUILTIN_STATUS = 127
REDIRECTION_FAILED_STATUS = 1


@dataclass(frozen=True)
class Redirection:
    """A redirection operator and the raw word that follows it."""

    operator: str
    target: str

    @property
    def path(self) -> str:
        """The target with its quoting removed."""
        return trim_quotes(self.target)


@dataclass
class Block:
    """One command of a pipeline: its arguments and its redirections, in order."""

    args: list[str] = field(default_factory=list)
    redirections: list[Redirection] = field(default_factory=list)

    @property
    def name(self) -> str | None:
        """The command name, or None if the block has no words."""
        return self.args[0] if self.args else None


class _RedirectionFailed(Exception):
    """A redirection target could not be opened; the line is abandoned."""


def count_pipes(tokens: Sequence[str]) -> int:
    """Count the pipe tokens; raise ShellError if two pipes follow each other."""
    tokens = list(tokens)
    count = 0
    for token, following in zip(tokens, [*tokens[1:], None]):
        if is_pipe(token):
            if is_pipe(following):
                raise ShellError(ErrorKind.DOUBLE_PIPE)
            count += 1
    return count


def parse_blocks(tokens: Sequence[str]) -> list[Block]:
    """Group tokens into blocks separated by pipes.

    The word after a redirection operator is its target, whatever it is.
    Raises ShellError if an operator has no word after it.
    """
    if not tokens:
        return []
    blocks = [Block()]
    stream = iter(tokens)
    for token in stream:
        if is_pipe(token):
            blocks.append(Block())
        elif is_redirection(token):
            target = next(stream, None)
            if target is None:
                raise ShellError(ErrorKind.MISSING_REDIRECT_FILE)
            blocks[-1].redirections.append(Redirection(token, target))
        else:
            blocks[-1].args.append(trim_quotes(token))
    return blocks


def read_heredoc(delimiter: str, input_func: Callable[[str], str | None] = input) -> str:
    """Read lines until one equals ``delimiter`` or input ends; return them newline-terminated."""
    lines: list[str] = []
    while True:
        try:
            line = input_func(HEREDOC_PROMPT)
        except EOFError:
            break
        if line is None or line == delimiter:
            break
        lines.append(line + "\n")
    return "".join(lines)


def _has_fileno(stream: Any) -> bool:
    try:
        stream.fileno()
    except (AttributeError, OSError, ValueError):
        return False
    return True


class Executor:
    """Runs the blocks of a command line one after another, feeding pipes between them."""

    def __init__(
        self,
        env: Environment,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        input_func: Callable[[str], str | None] | None = None,
    ):
        self.env = env
        self.stdin = stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr
        self.input_func = input_func if input_func is not None else input
        self.exit_status = 0

    def run(self, tokens: Sequence[str]) -> int:
        """Execute the tokens and return the resulting exit status.

        Raises ShellError for malformed operators and ShellExit when ``exit``
        runs outside a pipeline.
        """
        tokens = list(tokens)
        count_pipes(tokens)
        blocks = parse_blocks(tokens)
        piped: bytes | None = None
        for index, block in enumerate(blocks):
            last = index == len(blocks) - 1
            with ExitStack() as files:
                try:
                    source, sink = self._open_redirections(block, files)
                except _RedirectionFailed:
                    return self.exit_status
                if source is None and index > 0:
                    source = piped if piped is not None else b""
                piped = None
                if block.name:
                    piped = self._run_block(
                        block,
                        source,
                        sink,
                        pipe_out=sink is None and not last,
                        in_pipeline=len(blocks) > 1,
                    )
        return self.exit_status

    def _open_redirections(
        self, block: Block, files: ExitStack
    ) -> tuple[bytes | None, BinaryIO | None]:
        source: bytes | None = None
        sink: BinaryIO | None = None
        for redirection in block.redirections:
            operator, path = redirection.operator, redirection.path
            if operator.startswith("<<"):
                source = read_heredoc(path, self.input_func).encode()
                continue
            try:
                if operator.startswith(">"):
                    mode = "ab" if operator.startswith(">>") else "wb"
                    sink = files.enter_context(open(path, mode))
                else:
                    with open(path, "rb") as handle:
                        source = handle.read()
            except OSError:
                self.stderr.write(redirection_error_message(redirection.target))
                self.exit_status = REDIRECTION_FAILED_STATUS
                raise _RedirectionFailed from None
        return source, sink

    def _run_block(
        self,
        block: Block,
        source: bytes | None,
        sink: BinaryIO | None,
        pipe_out: bool,
        in_pipeline: bool,
    ) -> bytes | None:
        if is_builtin(block.name):
            return self._run_builtin(block, sink, pipe_out, in_pipeline)
        path = resolve_command(block.name, self.env)
        if path is None:
            report(ErrorKind.COMMAND_NOT_FOUND, block.name, self.stderr)
            self.exit_status = COMMAND_NOT_FOUND_STATUS
            return None
        return self._run_program(path, block, source, sink, pipe_out)

    def _emit(self, text: str, sink: BinaryIO | None, pipe_out: bool) -> bytes | None:
        if pipe_out:
            return text.encode()
        if sink is not None:
            sink.write(text.encode())
        else:
            self.stdout.write(text)
        return None

    def _run_builtin(
        self, block: Block, sink: BinaryIO | None, pipe_out: bool, in_pipeline: bool
    ) -> bytes | None:
        # In a pipeline the builtin works on a private copy, as a child process would.
        env = Environment.from_strings(self.env.to_strings()) if in_pipeline else self.env
        out = io.StringIO()
        try:
            status = run_builtin(block.args, env, out, self.stderr)
        except ShellExit as exc:
            produced = self._emit(out.getvalue(), sink, pipe_out)
            if not in_pipeline:
                raise
            self.exit_status = exc.status
            return produced
        self.exit_status = PIPELINE_BUILTIN_STATUS if in_pipeline else status
        return self._emit(out.getvalue(), sink, pipe_out)

    def _stream_target(self, stream: TextIO) -> Any:
        if _has_fileno(stream):
            stream.flush()
            return stream
        return subprocess.PIPE

    def _run_program(
        self,
        path: str,
        block: Block,
        source: bytes | None,
        sink: BinaryIO | None,
        pipe_out: bool,
    ) -> bytes | None:
        options: dict[str, Any] = {}
        if source is not None:
            options["input"] = source
        elif self.stdin is not None:
            if _has_fileno(self.stdin):
                options["stdin"] = self.stdin
            else:
                data = self.stdin.read()
                options["input"] = data.encode() if isinstance(data, str) else data
        if sink is not None:
            stdout_target: Any = sink
        elif pipe_out:
            stdout_target = subprocess.PIPE
        else:
            stdout_target = self._stream_target(self.stdout)
        stderr_target = self._stream_target(self.stderr)
        try:
            result = subprocess.run(
                block.args,
                executable=path,
                env=dict(self.env),
                stdout=stdout_target,
                stderr=stderr_target,
                check=False,
                **options,
            )
        except OSError:
            report(ErrorKind.IS_DIRECTORY, block.name, self.stderr)
            return None
        # A program killed by a signal leaves a zero status, as the wait decoding does.
        self.exit_status = result.returncode if result.returncode >= 0 else 0
        if stderr_target is subprocess.PIPE and result.stderr:
            self.stderr.write(result.stderr.decode(errors="replace"))
        if stdout_target is subprocess.PIPE:
            output = result.stdout or b""
            if pipe_out:
                return output
            self.stdout.write(output.decode(errors="replace"))
        return None