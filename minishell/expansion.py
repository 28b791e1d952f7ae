"""Expansion of ``$NAME`` and ``$?`` inside words."""

from __future__ import annotations

import re
from collections.abc import Iterable

from minishell.environment import Environment
from minishell.textutils import is_alnum

_VARIABLE = re.compile(r"\$(\?|[A-Za-z0-9][^ \"'$]*)")


def starts_variable(ch: str, following: str) -> bool:
    """Return True if ``ch`` is ``$`` and ``following`` can begin a variable name."""
    return ch == "$" and (is_alnum(following) or following == "?")


def is_in_single_quote(text: str, index: int) -> bool:
    """Decide whether the character at ``index`` counts as single-quoted.

    An even, non-zero number of single quotes before ``index`` means it is
    not; otherwise it is if a single quote follows it anywhere.
    """
    quotes_before = text.count("'", 0, index)
    if quotes_before and quotes_before % 2 == 0:
        return False
    return "'" in text[index + 1 :]


def expand_word(word: str, env: Environment, exit_status: int = 0) -> str:
    """Replace variable references in ``word`` with their values.

    A name runs up to a space, a quote, a ``$`` or the end of the word and is
    looked up as a prefix of the variable names; unknown names expand to
    nothing and ``$?`` expands to ``exit_status``.
    """

    def substitute(match: re.Match[str]) -> str:
        if is_in_single_quote(word, match.start()):
            return match.group()
        name = match.group(1)
        if name == "?":
            return str(exit_status)
        return env.search_prefix(name) or ""

    return _VARIABLE.sub(substitute, word)


def expand_words(words: Iterable[str], env: Environment, exit_status: int = 0) -> list[str]:
    """Expand every word in ``words``."""
    return [expand_word(word, env, exit_status) for word in words]