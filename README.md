# minislay

The parts of a small command shell, as a Python library. It splits a
command line into tokens, expands `$NAME` variables and `*`/`?`
wildcards, records redirections on commands, and runs commands either
as built-ins or as external programs, alone or joined by pipes.

## What it handles

- Words, single and double quotes, including quoted pieces glued to
  plain text such as `a"b c"d`, which become one token.
- Operators: `|`, `>`, `>>`, `<`, `<<`, `;`, `(`, `)`.
- `$NAME` expansion from an `Environment`; a `$` must be followed by a
  letter, an unset name expands to nothing, and single-quoted text is
  left as it is.
- `*` and `?` wildcards matched against the entries of a directory
  (`.` and `..` included); with no match the pattern itself is kept.
- Input (`<`), output (`>`), append (`>>`) and here-document (`<<`)
  redirections.
- Built-in commands: `echo` (with `-n`), `cd` (with `-`, `~` and `~/`),
  `pwd`, `export`, `unset`, `env` and `exit`.
- External programs looked up along `PATH`, alone or in a pipeline.
  They are started with an empty environment.

## Modules

| Module | Contents |
| --- | --- |
| `minislay.textutil` | String helpers: `atoi`, `itoa`, `split`, `strtrim`, `substr`, `strnstr` |
| `minislay.linereader` | `LineReader`, which reads a file descriptor one line at a time |
| `minislay.env` | `Environment`, `parse_entry` and `init_env` |
| `minislay.tokens` | `TokenType`, `Token` and `TokenClassifier` |
| `minislay.expand` | `extract_variable_name` and `expand_variable` |
| `minislay.wildcards` | `match_wildcard` and `expand_wildcards` |
| `minislay.lexer` | `Lexer`, `LexError`, `lexing`, `parse_input` and the input checks (`syntax_error`, `delimiter_error`, `character_error`, `input_check`) |
| `minislay.command` | `Command`, `RedirectionError`, `open_file`, `handle_redirection` |
| `minislay.builtins` | `echo`, `cd`, `pwd`, `export`, `unset`, `print_env`, `exit_shell`, `run_builtin`, `is_builtin` and `ShellExit` |
| `minislay.executor` | `find_binary_path`, `has_pipes`, `execute_commands`, `execute_pipeline`, `execute_redirection` |

## Example

```python
import os

from minislay.command import Command, handle_redirection
from minislay.env import init_env
from minislay.executor import execute_pipeline, execute_redirection
from minislay.expand import expand_variable
from minislay.lexer import LexError, parse_input
from minislay.tokens import TokenType
from minislay.wildcards import match_wildcard

env = init_env(f"{name}={value}" for name, value in os.environ.items())

for token in parse_input("echo $HOME | cat > out.txt"):
    print(token.type.name, token.value)

try:
    parse_input("echo 'unterminated")
except LexError as error:
    print(error)

print(expand_variable(env, "home is $HOME", False))
print(match_wildcard("*.txt", "notes.txt"))

# echo hello | cat
env = execute_pipeline([Command(args=["echo", "hello"]), Command(args=["cat"])], env)

# sort > sorted.txt
sort = Command(args=["sort"])
handle_redirection(TokenType.REDIR_OUT, "sorted.txt", sort)
env = execute_redirection([sort], env)
```

Builtins write to the stream passed as `out` (standard output by
default) and return the environment they leave; `export`, `unset` and
`cd` return a new `Environment` rather than changing the one given.
`exit_shell` raises `ShellExit` carrying the exit status. A rejected
input line raises `LexError`, whose message is the shell's error text.

## What it does not do

- There is no interactive shell: no prompt, no read–eval loop and no
  command to run. The caller reads lines and drives the pieces.
- Nothing turns a token list into `Command` objects. The caller builds
  each `Command`, adding words with `Command.add_arg` and redirections
  with `handle_redirection` or `Command.set_redirection`.
- Tokens are not expanded automatically; call `expand_variable` and
  `expand_wildcards` on the words that need it.
- `&&`, `||` and parentheses are recognised by the lexer but never
  executed.

## Tests

The test suite uses pytest, installed with the `test` extra:

```
pip install -e .[test]
pytest
```