# mshell

`mshell` holds the front half of a small POSIX-style shell as a library:
keeping the environment, reading words and operators, checking a token list
for syntax errors, expanding words and reading here-documents. It has no
dependencies outside the standard library and needs Python 3.10 or later.

## The environment

`mshell.environment` keeps variables in an ordered `Environment`. A
variable may exist without a value.

```python
from mshell.environment import Environment, ShellState, environment_from_strings, split_assignment

env = environment_from_strings(["HOME=/home/user", "PATH=/usr/bin:/bin"])

env.find("HOME")                 # '/home/user'
env.assign("GREETING=hello")     # not present yet, so it is added
env.assign("GREETING+=, world")  # present, so the value is appended
env.find("GREETING")             # 'hello, world'
env.delete("GREETING")           # KeyError if the name is absent

env.assign("FLAG")               # added with no value
env.to_strings()                 # ['HOME=/home/user', 'PATH=/usr/bin:/bin']
env.format_env()                 # the same, one per line, each ending in '\n'

split_assignment("EMPTY=")       # ('EMPTY', '')
split_assignment("BARE")         # ('BARE', None)
```

`to_strings` and `format_env` leave out variables that have no value.
`NAME+=value` appends only to a variable that exists and has a value; given
to `add`, or to `assign` for a name that is absent, it changes nothing.

`ShellState` pairs an `Environment` with the last exit status (`status`),
which is what expansion reads and writes.

## Reading words and operators

`mshell.words` reads one piece of a line at a time:

```python
from mshell.words import Token, TokenType, read_word, read_symbol, check_quotes

read_word("echo 'a b'|wc", 0)   # ('echo', 4)
read_word("echo 'a b'|wc", 5)   # ("'a b'", 10)
read_symbol(">> out", 0)        # (Token(TokenType.DOUBLE_GREATER, '>>'), 2)
check_quotes('say "hi')         # False
```

A word ends at an unquoted, unescaped space, tab, `|`, `;`, `<` or `>`;
quotes and backslashes stay in it as written. `read_symbol` reads `|`, `;`,
`>` and `<`, doubled when the same character follows, and raises
`ValueError` at any other character. `backslash_run` and
`trailing_backslashes` count runs of backslashes.

## Syntax checks

`mshell.syntax.check_syntax` takes a list of `Token`s ending in a
`TokenType.NEWLINE` token and raises `ShellSyntaxError` on the first
problem: a separator after a pipe, semicolon or leading `NONE` token, a pipe
at the end of the line, `;;`, a redirection not followed by a word, or a
word with an unclosed quote or an odd number of trailing backslashes. The
exception carries `message` and `status` (258, `SYNTAX_ERROR_STATUS`).

```python
from mshell.syntax import check_syntax, ShellSyntaxError, format_error

tokens = [Token(TokenType.WORD, "ls"), Token(TokenType.PIPE, "|"),
          Token(TokenType.NEWLINE, "newline")]
try:
    check_syntax(tokens)
except ShellSyntaxError as error:
    error.message == format_error("newline")   # True
```

`check_syntax` returns `False` when a leading `NONE` token is directly
followed by `NEWLINE` (nothing to run), and `True` otherwise.

## Expansion

`mshell.expansion.expand_word` expands `$NAME`, `$?` and `$0` and removes
quotes and backslashes from one word:

```python
from mshell.expansion import ExpansionMode, expand_word, drop_empty, read_heredoc

state = ShellState(environment_from_strings(["USER=alice"]))
expand_word('"hello $USER"', state)   # 'hello alice'
expand_word("'$USER'", state)         # '$USER'
expand_word("$0", state)              # 'My_Minishell'
drop_empty(["ls", "", "-l"])          # ['ls', '-l']
```

`$?` yields the state's status and resets it to 0. In
`ExpansionMode.REDIRECTION`, an unquoted variable that leaves the whole word
empty prints an "ambiguous redirect" message, sets the status to 1 and
returns `AMBIGUOUS_MARKER` (a single newline).

`read_heredoc` collects a here-document body from any line source: a
callable that takes the prompt and returns a line, or `None` at end of
input. The body is expanded with `expand_heredoc` unless the delimiter was
quoted (`strip_delimiter_quotes` tells which).

```python
lines = iter(["hi $USER", "EOF"])
read_heredoc("EOF", state, lambda prompt: next(lines, None))   # 'hi alice\n'
```

Without a callable it reads from standard input with the prompt `>>`.
While it reads in the main thread, SIGINT is ignored.

## Commands

`mshell.commands` holds the parsed form of a line. A `Command` has `argv`,
a list of `Redirection`s (`kind` and `file`) and the `Separator` that ends
it (`separator_for` maps a token type to one). `make_redirection` builds a
redirection, reading a here-document body at once for
`TokenType.DOUBLE_LESSER`. `expand_commands` expands every argument and
redirection target in place, drops empty arguments and leaves
here-document bodies alone.

## What the package does not do

There is no interactive prompt and no command to start a shell. Nothing
turns a whole line into a token list or a token list into `Command`s; the
pieces above are called one by one. Redirection files are not opened,
builtins such as `cd`, `echo` or `export` are not provided, and no program
or pipeline is ever run.