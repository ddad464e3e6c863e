import pytest

from mshell.environment import (
    Environment,
    ShellState,
    environment_from_strings,
    split_assignment,
)


@pytest.fixture
def env():
    return environment_from_strings(["HOME=/home/user", "PATH=/bin:/usr/bin", "EMPTY="])


def test_split_assignment_with_value():
    assert split_assignment("HOME=/home/user") == ("HOME", "/home/user")


def test_split_assignment_keeps_later_equals():
    assert split_assignment("A=b=c") == ("A", "b=c")


def test_split_assignment_empty_and_missing_value():
    assert split_assignment("A=") == ("A", "")
    assert split_assignment("A") == ("A", None)


def test_environment_from_strings_keeps_order(env):
    assert [name for name, _ in env] == ["HOME", "PATH", "EMPTY"]
    assert len(env) == 3


def test_find_and_index_of(env):
    assert env.find("PATH") == "/bin:/usr/bin"
    assert env.find("MISSING") is None
    assert env.index_of("EMPTY") == 2
    assert env.index_of("MISSING") is None


def test_contains_handles_assignment_forms(env):
    assert env.contains("HOME")
    assert env.contains("HOME=/tmp")
    assert env.contains("HOME+=/tmp")
    assert not env.contains("OTHER=1")


def test_add_variable_with_and_without_value():
    env = Environment()
    env.add("A=1")
    env.add("B")
    assert list(env) == [("A", "1"), ("B", None)]


def test_add_appending_assignment_does_nothing():
    env = Environment()
    env.add("A+=1")
    assert len(env) == 0


def test_replace_sets_new_value(env):
    env.replace("HOME=/tmp")
    assert env.find("HOME") == "/tmp"
    assert len(env) == 3


def test_replace_appends(env):
    env.replace("PATH+=:/opt")
    assert env.find("PATH") == "/bin:/usr/bin:/opt"


def test_replace_bare_name_keeps_value(env):
    env.replace("HOME")
    assert env.find("HOME") == "/home/user"


def test_replace_append_on_valueless_variable_keeps_none():
    env = Environment([("A", None)])
    env.replace("A+=x")
    assert env.find("A") is None


def test_assign_adds_then_replaces():
    env = Environment()
    env.assign("X=1")
    env.assign("X=2")
    env.assign("X+=3")
    assert list(env) == [("X", "23")]


def test_delete_removes_first_match(env):
    env.delete("PATH")
    assert env.find("PATH") is None
    assert [name for name, _ in env] == ["HOME", "EMPTY"]


def test_delete_missing_raises(env):
    with pytest.raises(KeyError):
        env.delete("MISSING")


def test_to_strings_round_trip(env):
    strings = env.to_strings()
    assert strings == ["HOME=/home/user", "PATH=/bin:/usr/bin", "EMPTY="]
    assert list(environment_from_strings(strings)) == list(env)


def test_to_strings_skips_valueless_variables():
    env = Environment([("A", None), ("B", "2")])
    assert env.to_strings() == ["B=2"]


def test_format_env_one_line_per_variable(env):
    text = env.format_env()
    assert text.splitlines() == env.to_strings()
    assert text.endswith("\n")


def test_shell_state_defaults():
    state = ShellState()
    assert state.status == 0
    assert len(state.env) == 0
    state.env.assign("A=1")
    assert state.env.find("A") == "1"