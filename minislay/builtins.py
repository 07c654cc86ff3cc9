"""Commands the shell runs itself instead of starting a program."""

from __future__ import annotations

import errno
import os
import sys
from typing import TextIO

from .command import Command
from .env import Environment
from .lexer import ERR_SYNTAX
from .textutil import atoi

BUILTINS = frozenset({"echo", "cd", "pwd", "unset", "export", "env", "exit"})


class ShellExit(SystemExit):
    """Raised by ``exit``; ``code`` is the status the shell ends with."""


def _stream(out: TextIO | None) -> TextIO:
    return sys.stdout if out is None else out


def is_builtin(name: str | None) -> bool:
    """Return whether ``name`` is one of the shell's own commands."""
    return name in BUILTINS


def is_numeric(text: str | None) -> bool:
    """Return whether ``text`` is an optional sign followed only by digits."""
    if text is None:
        return False
    body = text[1:] if text[:1] in ("-", "+") else text
    return all("0" <= char <= "9" for char in body)


def cd(command: Command, env: Environment, out: TextIO | None = None) -> Environment:
    """Change directory and return a copy of ``env`` with PWD and OLDPWD updated.

    With no argument, ``~`` or ``~/`` it goes to HOME; with ``-`` it goes to
    OLDPWD and prints the new directory. Failure raises OSError.
    """
    stream = _stream(out)
    args = command.args
    home = env.get("HOME")
    old_pwd = env.get("PWD")
    target: str | None = None
    if len(args) == 1:
        target = home
    elif len(args) == 2:
        if args[1] == "-":
            target = env.get("OLDPWD")
        elif args[1] in ("~", "~/"):
            target = home
        else:
            target = args[1]
    else:
        stream.write(f"bash: {args[0]}: too many arguments\n")
        raise OSError(errno.EINVAL, "too many arguments")
    if target is None:
        raise OSError(errno.ENOENT, "directory not set")
    os.chdir(target)
    new_env = env.copy()
    if old_pwd is not None:
        new_env.replace("OLDPWD", old_pwd)
    new_env.replace("PWD", os.getcwd())
    if len(args) == 2 and args[1] == "-":
        pwd(stream)
    return new_env


def echo(command: Command, out: TextIO | None = None) -> None:
    """Print the arguments separated by spaces; ``-n`` flags drop the newline."""
    stream = _stream(out)
    words = command.args[1:]
    newline = True
    while words and words[0].startswith("-n") and set(words[0][1:]) == {"n"}:
        newline = False
        words = words[1:]
    stream.write(" ".join(words))
    if newline:
        stream.write("\n")


def print_env(env: Environment, out: TextIO | None = None) -> None:
    """Print every variable as ``NAME=VALUE``."""
    stream = _stream(out)
    for line in env.lines():
        stream.write(line + "\n")


def exit_shell(command: Command, out: TextIO | None = None) -> None:
    """Leave the shell by raising ShellExit with the requested status.

    A non-numeric argument exits with 255. With more than one argument
    nothing happens beyond an error message.
    """
    stream = _stream(out)
    stream.write("Adieu 💀\n")
    args = command.args
    code = 0
    if len(args) > 1:
        if not is_numeric(args[1]):
            stream.write(f"minislay : exit: {args[1]}: numbers required\n")
            raise ShellExit(255)
        if len(args) > 2:
            stream.write("minislay : exit: too many arguments\n")
            return
        code = atoi(args[1]) % 256
    raise ShellExit(code)


def export(env: Environment, arg: str | None, out: TextIO | None = None) -> Environment:
    """Return a copy of ``env`` with ``NAME=VALUE`` from ``arg`` set.

    An argument without a name, without ``=`` or with an empty value leaves
    the environment unchanged and returns it as is.
    """
    if not arg or arg.startswith("="):
        _stream(out).write(ERR_SYNTAX + "\n")
        return env
    name, sep, value = arg.partition("=")
    if not sep or not name or not value:
        return env
    new_env = env.copy()
    new_env.set(name, value)
    return new_env


def pwd(out: TextIO | None = None) -> None:
    """Print the current working directory."""
    _stream(out).write(os.getcwd() + "\n")


def unset(env: Environment, name: str) -> Environment:
    """Return a copy of ``env`` without the variable ``name``."""
    new_env = env.copy()
    new_env.remove(name)
    return new_env


def run_builtin(command: Command, env: Environment, out: TextIO | None = None) -> Environment:
    """Run ``command`` if it is a builtin and return the resulting environment.

    ``export`` and ``unset`` need an argument. ``exit`` is recognised as a
    builtin but is not run here. A failing ``cd`` reports the error on
    stderr and keeps the environment.
    """
    if not command.args:
        return env
    stream = _stream(out)
    name = command.args[0]
    if name == "echo":
        echo(command, stream)
    elif name == "pwd":
        pwd(stream)
    elif name == "cd":
        try:
            env = cd(command, env, stream)
        except OSError as error:
            sys.stderr.write(f"cd: {error.strerror or error}\n")
    elif name == "export" and len(command.args) > 1:
        env = export(env, command.args[1], stream)
    elif name == "unset" and len(command.args) > 1:
        env = unset(env, command.args[1])
    elif name == "env":
        print_env(env, stream)
    return env