# minishell

A small interactive command shell. It reads a line, expands variables,
splits it into commands joined by pipes, applies redirections and runs
each command, either as a built-in or as a program found on `PATH`.

## Installing

```
pip install .
```

## Running

```
minishell
```

The prompt is a green check mark followed by the last part of the current
directory and ` $ `. Press Ctrl-D at the prompt to leave the shell;
Ctrl-C starts a fresh line. The shell takes no arguments: given any, it
prints `! Too many arguments.` and stops.

## What it understands

- Words separated by spaces or tabs, with `'single'` and `"double"` quotes.
- `$NAME` expands to a variable's value and `$?` to the last exit status.
  A name is matched against the start of the variable names, so the first
  variable whose name begins with it is used; unknown names expand to
  nothing. References inside single quotes are left alone.
- Pipes: `ls | grep py | wc -l`
- Redirections: `< file`, `> file`, `>> file`, and heredocs with
  `<< DELIM`, which read lines at a `> ` prompt until `DELIM` or end of
  input.
- Built-in commands: `echo` (with `-n`), `cd` (no argument or `~` goes to
  `HOME`), `pwd`, `export` (one `NAME=value` per call; with no argument it
  lists the variables sorted, each after `declare -x`), `unset`, `env` and
  `exit` (with an optional numeric status).

Lines that contain `;` or `\`, that start with an empty quoted word, that
have unclosed quotes, that end in a pipe or a redirection, or that use
`||` are refused with an error message.

A command that cannot be found gives status 127. A redirection file that
cannot be opened gives status 1 and the rest of the line is not run.
Built-ins inside a pipeline work on a copy of the environment, so `export`,
`unset` and `cd`-style changes there do not last, and `exit` there does
not end the shell.

## Using it from Python

```python
import sys
from minishell.shell import Shell

shell = Shell({"PATH": "/usr/bin:/bin", "HOME": "/tmp"}, sys.stdout, sys.stderr, input)
status = shell.execute_line("echo hello | tr a-z A-Z")
```

`Shell.execute_line` returns the exit status and raises
`minishell.builtins.ShellExit` when the line runs `exit`; `Shell.loop`
runs the prompt loop and returns the exit code.

The stages are also available on their own:

- `minishell.lexer`: `check_control`, `check_quotes`, `split_words`,
  `split_operators`, `check_operators`, `trim_quotes`.
- `minishell.expansion`: `expand_word`, `expand_words`.
- `minishell.executor`: `parse_blocks`, `count_pipes`, `read_heredoc` and
  `Executor.run`.
- `minishell.builtins`: each built-in and `run_builtin`.
- `minishell.environment.Environment`: the ordered variable table.

Errors the shell reports are `minishell.errors.ShellError`, carrying an
`ErrorKind` and the message that is printed.

## What it does not do

- No `;`, `&&` or `||` lists, no background jobs or job control, no
  globbing, no subshells and no script files: it only reads lines
  interactively.
- The commands of a pipeline run one after another, each one's output
  collected before the next starts, not side by side.
- Only `$NAME` and `$?` are expanded; there is no `${...}`, command
  substitution or arithmetic.

## Tests

```
pip install .[test]
pytest
```