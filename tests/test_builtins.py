import io
import os

import pytest

from minislay.builtins import (
    ShellExit,
    cd,
    echo,
    exit_shell,
    export,
    is_builtin,
    is_numeric,
    print_env,
    pwd,
    run_builtin,
    unset,
)
from minislay.command import Command
from minislay.env import Environment
from minislay.lexer import ERR_SYNTAX


def _echo(*words):
    out = io.StringIO()
    echo(Command(args=["echo", *words]), out)
    return out.getvalue()


@pytest.mark.parametrize("name", ["echo", "cd", "pwd", "unset", "export", "env", "exit"])
def test_is_builtin_true(name):
    assert is_builtin(name) is True


@pytest.mark.parametrize("name", ["ls", "", None, "ECHO"])
def test_is_builtin_false(name):
    assert is_builtin(name) is False


@pytest.mark.parametrize("text", ["42", "-7", "+3", "0"])
def test_is_numeric_true(text):
    assert is_numeric(text) is True


@pytest.mark.parametrize("text", ["4a", "--1", "1.5", None])
def test_is_numeric_false(text):
    assert is_numeric(text) is False


def test_echo_joins_words():
    assert _echo("hello", "world") == "hello world\n"


def test_echo_no_args_prints_newline():
    assert _echo() == "\n"


@pytest.mark.parametrize("flags", [["-n"], ["-nnn"], ["-n", "-n"]])
def test_echo_n_flags_drop_newline(flags):
    assert _echo(*flags, "a", "b") == "a b"


def test_echo_bad_flag_is_printed():
    assert _echo("-nx", "a") == "-nx a\n"


def test_echo_flag_after_word_is_printed():
    assert _echo("a", "-n") == "a -n\n"


def test_print_env():
    env = Environment([("A", "1"), ("B", "2")])
    out = io.StringIO()
    print_env(env, out)
    assert out.getvalue().splitlines() == env.lines()


def test_export_adds_variable_without_touching_original():
    env = Environment([("A", "1")])
    new = export(env, "B=two")
    assert new.get("B") == "two"
    assert "B" not in env
    assert list(new)[0] == ("A", "1")


def test_export_updates_existing():
    env = Environment([("A", "1"), ("B", "2")])
    new = export(env, "A=x=y")
    assert new.get("A") == "x=y"
    assert len(new) == len(env)


@pytest.mark.parametrize("arg", ["NAME", "NAME="])
def test_export_without_value_changes_nothing(arg):
    env = Environment([("A", "1")])
    assert export(env, arg) is env


@pytest.mark.parametrize("arg", ["", "=value", None])
def test_export_syntax_error(arg):
    env = Environment([("A", "1")])
    out = io.StringIO()
    assert export(env, arg, out) is env
    assert out.getvalue() == ERR_SYNTAX + "\n"


def test_unset_removes_from_copy():
    env = Environment([("A", "1"), ("B", "2")])
    new = unset(env, "A")
    assert "A" not in new
    assert "A" in env
    assert new.get("B") == "2"


def test_unset_missing_name_keeps_everything():
    env = Environment([("A", "1")])
    assert list(unset(env, "Z")) == list(env)


def test_pwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out = io.StringIO()
    pwd(out)
    assert out.getvalue() == os.getcwd() + "\n"


def test_cd_to_directory_updates_pwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    start = os.getcwd()
    (tmp_path / "sub").mkdir()
    env = Environment([("PWD", start), ("OLDPWD", "")])
    new = cd(Command(args=["cd", "sub"]), env)
    assert os.path.samefile(os.getcwd(), tmp_path / "sub")
    assert new.get("PWD") == os.getcwd()
    assert new.get("OLDPWD") == start
    assert env.get("PWD") == start


def test_cd_without_args_goes_home(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    home = tmp_path / "home"
    home.mkdir()
    env = Environment([("HOME", str(home)), ("PWD", os.getcwd())])
    cd(Command(args=["cd"]), env)
    assert os.path.samefile(os.getcwd(), home)


def test_cd_tilde_goes_home(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    start = os.getcwd()
    home = tmp_path / "h"
    home.mkdir()
    env = Environment([("HOME", str(home)), ("PWD", start)])
    new = cd(Command(args=["cd", "~/"]), env)
    assert os.path.samefile(os.getcwd(), home)
    assert new.get("PWD") == os.getcwd()
    assert os.path.samefile(new.get("PWD"), home)


def test_cd_dash_goes_to_oldpwd_and_prints(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    old = tmp_path / "old"
    old.mkdir()
    env = Environment([("PWD", os.getcwd()), ("OLDPWD", str(old))])
    out = io.StringIO()
    cd(Command(args=["cd", "-"]), env, out)
    assert os.path.samefile(os.getcwd(), old)
    assert out.getvalue() == os.getcwd() + "\n"


def test_cd_missing_directory_raises(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(OSError):
        cd(Command(args=["cd", "nowhere"]), Environment())


def test_cd_unset_home_raises(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(OSError):
        cd(Command(args=["cd"]), Environment())


def test_cd_too_many_arguments(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out = io.StringIO()
    with pytest.raises(OSError):
        cd(Command(args=["cd", "a", "b"]), Environment(), out)
    assert out.getvalue() == "bash: cd: too many arguments\n"


def test_exit_without_args():
    out = io.StringIO()
    with pytest.raises(ShellExit) as info:
        exit_shell(Command(args=["exit"]), out)
    assert info.value.code == 0
    assert out.getvalue() == "Adieu 💀\n"


def test_exit_wraps_status():
    with pytest.raises(ShellExit) as info:
        exit_shell(Command(args=["exit", "300"]), io.StringIO())
    assert info.value.code == 44


def test_exit_status_in_byte_range():
    with pytest.raises(ShellExit) as info:
        exit_shell(Command(args=["exit", "-1"]), io.StringIO())
    assert 0 <= info.value.code <= 255


def test_exit_non_numeric():
    out = io.StringIO()
    with pytest.raises(ShellExit) as info:
        exit_shell(Command(args=["exit", "abc"]), out)
    assert info.value.code == 255
    assert "minislay : exit: abc: numbers required\n" in out.getvalue()


def test_exit_too_many_arguments_does_not_exit():
    out = io.StringIO()
    result = exit_shell(Command(args=["exit", "1", "2"]), out)
    assert result is None
    assert out.getvalue().endswith("minislay : exit: too many arguments\n")


def test_run_builtin_echo():
    out = io.StringIO()
    env = Environment()
    assert run_builtin(Command(args=["echo", "hi"]), env, out) is env
    assert out.getvalue() == "hi\n"


def test_run_builtin_export_and_unset():
    env = Environment([("A", "1")])
    env = run_builtin(Command(args=["export", "B=2"]), env, io.StringIO())
    assert env.get("B") == "2"
    env = run_builtin(Command(args=["unset", "A"]), env, io.StringIO())
    assert "A" not in env


def test_run_builtin_export_without_argument_does_nothing():
    env = Environment([("A", "1")])
    out = io.StringIO()
    assert run_builtin(Command(args=["export"]), env, out) is env
    assert out.getvalue() == ""


def test_run_builtin_env():
    env = Environment([("A", "1")])
    out = io.StringIO()
    run_builtin(Command(args=["env"]), env, out)
    assert out.getvalue().splitlines() == env.lines()


def test_run_builtin_failed_cd_keeps_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    env = Environment([("PWD", os.getcwd())])
    result = run_builtin(Command(args=["cd", "missing"]), env, io.StringIO())
    assert result is env
    assert os.path.samefile(os.getcwd(), tmp_path)


def test_run_builtin_exit_is_not_run():
    env = Environment()
    out = io.StringIO()
    assert run_builtin(Command(args=["exit"]), env, out) is env
    assert out.getvalue() == ""