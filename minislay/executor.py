"""Running parsed commands: single programs, pipelines and redirections."""

from __future__ import annotations

import contextlib
import io
import os
import subprocess
import sys
import threading
from collections.abc import Iterable, Sequence
from typing import IO, TextIO, Union

from .builtins import is_builtin, run_builtin
from .command import Command, open_file
from .env import Environment
from .textutil import split
from .tokens import TokenType

ERR_CMD = "bash: {}: command not found\n"
EMPTY_PIPELINE_COMMAND = "Error: empty command in pipeline\n\n"
ABNORMAL_EXIT = "Processus fils termine anormalement."

_Input = Union[None, int, bytes, IO[bytes]]


def build_pathname(directory: str, name: str) -> str:
    """Join a directory and a program name with a ``/``."""
    return f"{directory}/{name}"


def find_binary_path(name: str, path: str | None = None) -> str | None:
    """Return the first ``dir/name`` that exists among the directories of ``path``.

    ``path`` defaults to the process's PATH variable. None is returned when
    no directory holds the name or there is no search path at all.
    """
    search = os.environ.get("PATH") if path is None else path
    if search is None:
        return None
    for directory in split(search, ":"):
        candidate = build_pathname(directory, name)
        if os.path.exists(candidate):
            return candidate
    return None


def has_pipes(commands: Sequence[Command]) -> bool:
    """Return whether there is more than one command to connect."""
    return len(commands) > 1


def _stream(out: TextIO | None) -> TextIO:
    return sys.stdout if out is None else out


def _fileno(stream: TextIO) -> int | None:
    """Return the stream's descriptor after flushing it, or None if it has none."""
    try:
        fd = stream.fileno()
    except (OSError, ValueError, AttributeError):
        return None
    stream.flush()
    return fd


def _executable(name: str) -> str | None:
    path = find_binary_path(name)
    if path is None or not os.access(path, os.X_OK):
        return None
    return path


def _close(upstream: _Input) -> None:
    """Close the parent's copy of a pipe; descriptors and bytes are left alone."""
    close = getattr(upstream, "close", None)
    if close is not None:
        close()


def _feed(pipe: IO[bytes], data: bytes) -> None:
    try:
        pipe.write(data)
    except BrokenPipeError:
        pass
    finally:
        with contextlib.suppress(BrokenPipeError):
            pipe.close()


def _spawn(
    args: list[str], path: str, stdin: _Input, stdout: int | IO[bytes] | None
) -> tuple[subprocess.Popen, threading.Thread | None]:
    """Start a program; bytes given as ``stdin`` are written to it by a thread."""
    feed = stdin if isinstance(stdin, bytes) else None
    # Programs are started with an empty environment.
    process = subprocess.Popen(
        args,
        executable=path,
        env={},
        stdin=subprocess.PIPE if feed is not None else stdin,
        stdout=stdout,
    )
    feeder = None
    if feed is not None:
        feeder = threading.Thread(target=_feed, args=(process.stdin, feed), daemon=True)
        feeder.start()
    return process, feeder


def _collect(
    process: subprocess.Popen,
    feeder: threading.Thread | None,
    stream: TextIO,
    capture: bool,
) -> None:
    if capture:
        data = process.stdout.read()
        process.stdout.close()
        if data:
            stream.write(data.decode(errors="replace"))
    if feeder is not None:
        feeder.join()
    process.wait()
    if process.returncode < 0:
        stream.write(ABNORMAL_EXIT)


def _run_program(args: list[str], stream: TextIO, stdin: _Input) -> None:
    path = _executable(args[0])
    if path is None:
        stream.write(ERR_CMD.format(args[0]))
        return
    target = _fileno(stream)
    try:
        process, feeder = _spawn(
            args, path, stdin, subprocess.PIPE if target is None else target
        )
    except OSError as error:
        sys.stderr.write(f"Execve failed: {error.strerror or error}\n")
        return
    _collect(process, feeder, stream, target is None)


def _run_sequence(
    commands: Iterable[Command], env: Environment, stream: TextIO, stdin: _Input
) -> Environment:
    for command in commands:
        if not command.args:
            continue
        if is_builtin(command.args[0]):
            env = run_builtin(command, env, stream)
        else:
            _run_program(command.args, stream, stdin)
    return env


def execute_commands(
    commands: Iterable[Command], env: Environment, out: TextIO | None = None
) -> Environment:
    """Run each command in turn and return the environment the builtins leave."""
    return _run_sequence(commands, env, _stream(out), None)


def _builtin_in_child(command: Command, env: Environment) -> bytes:
    """Run a builtin as a pipeline stage: its output is kept, its effects are not."""
    buffer = io.StringIO()
    cwd = os.getcwd()
    try:
        run_builtin(command, env.copy(), buffer)
    finally:
        os.chdir(cwd)
    return buffer.getvalue().encode()


def _middle_stage(
    command: Command,
    env: Environment,
    upstream: _Input,
    processes: list[subprocess.Popen],
    feeders: list[threading.Thread],
) -> _Input:
    """Start one stage whose output feeds the next; return what the next reads."""
    args = command.args
    if not args:
        _close(upstream)
        return EMPTY_PIPELINE_COMMAND.encode()
    if is_builtin(args[0]):
        _close(upstream)
        return _builtin_in_child(command, env)
    path = find_binary_path(args[0])
    if path is None:
        _close(upstream)
        return ERR_CMD.format(args[0]).encode()
    try:
        process, feeder = _spawn(args, path, upstream, subprocess.PIPE)
    except OSError:
        _close(upstream)
        return ERR_CMD.format(args[0]).encode()
    _close(upstream)
    processes.append(process)
    if feeder is not None:
        feeders.append(feeder)
    return process.stdout


def execute_pipeline(
    commands: Sequence[Command], env: Environment, out: TextIO | None = None
) -> Environment:
    """Run the commands with each one's output connected to the next one's input.

    Builtins before the last stage run on a copy of the environment and do
    not change the shell; the last stage runs like a plain command.
    """
    stages = list(commands)
    if len(stages) <= 1:
        return execute_commands(stages, env, out)
    stream = _stream(out)
    processes: list[subprocess.Popen] = []
    feeders: list[threading.Thread] = []
    upstream: _Input = None
    try:
        for command in stages[:-1]:
            upstream = _middle_stage(command, env, upstream, processes, feeders)
        last = stages[-1]
        if not last.args:
            _close(upstream)
            stream.write(EMPTY_PIPELINE_COMMAND)
        elif is_builtin(last.args[0]):
            _close(upstream)
            env = run_builtin(last, env, stream)
        else:
            _run_program(last.args, stream, upstream)
            _close(upstream)
    finally:
        for process in processes:
            if process.stdout is not None:
                process.stdout.close()
            process.wait()
        for feeder in feeders:
            feeder.join()
    return env


def _redirected_builtin(command: Command, env: Environment, stream: TextIO) -> Environment:
    if command.in_file is not None:
        os.close(open_file(command.in_file, TokenType.REDIR_IN))
    if command.out_file is None:
        return run_builtin(command, env, stream)
    kind = TokenType.REDIR_APPEND if command.append else TokenType.REDIR_OUT
    with os.fdopen(open_file(command.out_file, kind), "w") as target:
        return run_builtin(command, env, target)


def execute_redirection(
    commands: Sequence[Command], env: Environment, out: TextIO | None = None
) -> Environment:
    """Run the first command with its file and heredoc redirections applied.

    Any further commands read the first one's output. A file that cannot be
    opened raises RedirectionError before anything runs.
    """
    stages = list(commands)
    if not stages:
        return env
    first, rest = stages[0], stages[1:]
    stream = _stream(out)
    if first.args and is_builtin(first.args[0]):
        return _redirected_builtin(first, env, stream)

    with contextlib.ExitStack() as stack:
        stdin: _Input = None
        if first.in_file is not None:
            in_fd = open_file(first.in_file, TokenType.REDIR_IN)
            stack.callback(os.close, in_fd)
            stdin = in_fd
        elif first.heredoc is not None:
            stdin = first.heredoc.encode()
        out_fd = None
        if first.out_file is not None:
            kind = TokenType.REDIR_APPEND if first.append else TokenType.REDIR_OUT
            out_fd = open_file(first.out_file, kind)
            stack.callback(os.close, out_fd)

        target = None
        if out_fd is not None:
            stdout = out_fd
        elif rest:
            stdout = subprocess.PIPE
        else:
            target = _fileno(stream)
            stdout = subprocess.PIPE if target is None else target
        capture = out_fd is None and not rest and target is None

        message = None
        process = feeder = None
        if not first.args:
            message = EMPTY_PIPELINE_COMMAND
        else:
            path = find_binary_path(first.args[0])
            if path is None:
                message = ERR_CMD.format(first.args[0])
            else:
                try:
                    process, feeder = _spawn(first.args, path, stdin, stdout)
                except OSError:
                    message = ERR_CMD.format(first.args[0])

        rest_input: _Input = b""
        if message is not None:
            if out_fd is not None:
                os.write(out_fd, message.encode())
            elif rest:
                rest_input = message.encode()
            else:
                stream.write(message)
        elif rest and out_fd is None:
            rest_input = process.stdout

        if rest:
            try:
                env = _run_sequence(rest, env, stream, rest_input)
            finally:
                _close(rest_input)
        if process is not None:
            _collect(process, feeder, stream, capture)
    return env