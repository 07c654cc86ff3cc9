import pytest

from minislay.env import Environment, init_env, parse_entry


@pytest.fixture
def env():
    return init_env(["HOME=/home/user", "PATH=/bin:/usr/bin", "EMPTY"])


def test_parse_entry_splits_at_first_equal():
    assert parse_entry("A=b=c") == ("A", "b=c")


def test_parse_entry_without_equal_has_empty_value():
    assert parse_entry("NOEQ") == ("NOEQ", "")


def test_parse_entry_empty_value():
    assert parse_entry("X=") == ("X", "")


def test_init_env_keeps_order(env):
    assert [name for name, _ in env] == ["HOME", "PATH", "EMPTY"]
    assert len(env) == 3


def test_get_existing_and_missing(env):
    assert env.get("HOME") == "/home/user"
    assert env.get("EMPTY") == ""
    assert env.get("MISSING") is None


def test_contains(env):
    assert "PATH" in env
    assert "NOPE" not in env


def test_set_updates_in_place(env):
    env.set("HOME", "/root")
    assert env.get("HOME") == "/root"
    assert [name for name, _ in env] == ["HOME", "PATH", "EMPTY"]


def test_set_appends_new_variable(env):
    env.set("NEW", "value")
    assert list(env)[-1] == ("NEW", "value")
    assert len(env) == 4


def test_replace_only_changes_existing(env):
    env.replace("HOME", "/tmp")
    env.replace("ABSENT", "x")
    assert env.get("HOME") == "/tmp"
    assert "ABSENT" not in env
    assert len(env) == 3


def test_remove(env):
    env.remove("PATH")
    assert "PATH" not in env
    assert [name for name, _ in env] == ["HOME", "EMPTY"]


def test_remove_missing_is_ignored(env):
    env.remove("MISSING")
    assert len(env) == 3


def test_copy_is_independent(env):
    clone = env.copy()
    clone.set("HOME", "/elsewhere")
    clone.remove("PATH")
    assert env.get("HOME") == "/home/user"
    assert "PATH" in env
    assert clone.get("HOME") == "/elsewhere"


def test_lines_format(env):
    assert env.lines() == ["HOME=/home/user", "PATH=/bin:/usr/bin", "EMPTY="]


def test_lines_roundtrip_through_init_env(env):
    again = init_env(env.lines())
    assert list(again) == list(env)


def test_get_returns_first_duplicate():
    dup = Environment([("A", "1"), ("A", "2")])
    assert dup.get("A") == "1"
    dup.remove("A")
    assert dup.get("A") == "2"


def test_empty_environment():
    empty = Environment()
    assert len(empty) == 0
    assert empty.lines() == []