"""Splitting a command line into words and operator tokens, with input checks."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from minishell.errors import ErrorKind, ShellError

QUOTE_NOT_CLOSED = "Error: quote not closed"

_DELIMITERS = " \t\n"
_QUOTES = "\"'"
_OPERATOR = re.compile(r"<<|>>|[<>|]")


def check_control(line: str) -> None:
    """Reject lines the shell refuses to handle.

    Raises ShellError for a line opening with an empty quoted word, and for
    any line containing ``;`` or a backslash.
    """
    if line.startswith(('""', "''")):
        raise ShellError(ErrorKind.COMMAND_NOT_FOUND, "")
    if ";" in line:
        raise ShellError(ErrorKind.SEMICOLON)
    if "\\" in line:
        raise ShellError(ErrorKind.BACKSLASH)


def check_quotes(line: str) -> None:
    """Raise ValueError if a single or double quote is left open."""
    open_quote = None
    for ch in line:
        if ch not in _QUOTES:
            continue
        if open_quote is None:
            open_quote = ch
        elif open_quote == ch:
            open_quote = None
    if open_quote is not None:
        raise ValueError(QUOTE_NOT_CLOSED)


def _quoted_word_end(line: str, start: int) -> int:
    """End of a word that opens with a quote: the quoted part plus a plain tail."""
    close = line.find(line[start], start + 1)
    pos = len(line) if close == -1 else close + 1
    while pos < len(line) and line[pos] not in _DELIMITERS and line[pos] not in _QUOTES:
        pos += 1
    return pos


def _plain_word_end(line: str, start: int) -> int:
    """End of a word that opens with an ordinary character."""
    quote = ""
    quotes_seen = 0
    pos = start
    while pos < len(line) and (line[pos] not in _DELIMITERS or quote):
        following = line[pos + 1 : pos + 2]
        if following == " " and (quotes_seen % 2 == 0 or line[pos] == quote):
            return pos + 1
        if line[pos] in _QUOTES:
            quote = line[pos]
            quotes_seen += 1
        pos += 1
    return pos


def split_words(line: str) -> list[str]:
    """Split a command line into words, keeping quoted text and its quotes together."""
    words: list[str] = []
    pos = 0
    length = len(line)
    while True:
        while pos < length and line[pos] in _DELIMITERS:
            pos += 1
        if pos >= length:
            return words
        find_end = _quoted_word_end if line[pos] in _QUOTES else _plain_word_end
        end = find_end(line, pos)
        words.append(line[pos:end])
        pos = end


def trim_quotes(word: str) -> str:
    """Remove quoting from a word.

    Text before the first quote is kept as is; after it, every occurrence of
    that quote character is dropped and everything else is kept.
    """
    first = next((index for index, ch in enumerate(word) if ch in _QUOTES), None)
    if first is None:
        return word
    quote = word[first]
    return word[:first] + word[first + 1 :].replace(quote, "")


def _split_token(token: str) -> Iterator[str]:
    rest = token
    while not rest.startswith(tuple(_QUOTES)):
        match = _OPERATOR.search(rest)
        if match is None or match.group() == rest:
            break
        before = rest[: match.start()]
        if before:
            yield before
        yield match.group()
        rest = rest[match.end() :]
        if not rest:
            return
    yield rest


def split_operators(tokens: Iterable[str]) -> list[str]:
    """Separate ``<``, ``<<``, ``>``, ``>>`` and ``|`` from the words they touch.

    Tokens that start with a quote are left whole.
    """
    return [piece for token in tokens for piece in _split_token(token)]


def is_redirection(token: str | None) -> bool:
    """Return True if the token starts with ``<`` or ``>``."""
    return bool(token) and token[0] in "<>"


def is_pipe(token: str | None) -> bool:
    """Return True if the token starts with ``|``."""
    return bool(token) and token[0] == "|"


def check_operators(tokens: list[str]) -> None:
    """Raise ShellError for a dangling redirection, a doubled pipe or a trailing pipe."""
    for index, token in enumerate(tokens):
        following = tokens[index + 1] if index + 1 < len(tokens) else None
        if is_redirection(token) and following is None:
            raise ShellError(ErrorKind.MISSING_REDIRECT_FILE)
        if is_pipe(token):
            if is_pipe(following):
                raise ShellError(ErrorKind.DOUBLE_PIPE)
            if following is None:
                raise ShellError(ErrorKind.PIPE_WITHOUT_COMMAND)