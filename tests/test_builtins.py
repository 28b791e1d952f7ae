import io
import os

import pytest

from minishell.builtins import (
    ShellExit,
    cd,
    echo,
    env_command,
    exit_command,
    export,
    is_builtin,
    pwd,
    run_builtin,
    unset,
)
from minishell.environment import Environment


@pytest.fixture
def streams():
    return io.StringIO(), io.StringIO()


def make_env(*pairs):
    return Environment.from_strings(pairs)


@pytest.mark.parametrize("name", ["echo", "cd", "pwd", "export", "unset", "env", "exit"])
def test_is_builtin_true(name):
    assert is_builtin(name) is True


@pytest.mark.parametrize("name", ["ls", "", "Echo", None])
def test_is_builtin_false(name):
    assert is_builtin(name) is False


def test_echo_joins_with_spaces():
    out = io.StringIO()
    assert echo(["echo", "hello", "world"], out) == 0
    assert out.getvalue() == "hello world\n"


def test_echo_n_flags_suppress_newline():
    out = io.StringIO()
    echo(["echo", "-n", "-nnn", "-", "hi"], out)
    assert out.getvalue() == "hi"


def test_echo_flag_after_text_is_printed():
    out = io.StringIO()
    echo(["echo", "a", "-n"], out)
    assert out.getvalue() == "a -n\n"


def test_echo_no_args_prints_newline():
    out = io.StringIO()
    echo(["echo"], out)
    assert out.getvalue() == "\n"


def test_env_command_prints_in_order():
    out = io.StringIO()
    assert env_command(make_env("B=2", "A=1"), out) == 0
    assert out.getvalue().splitlines() == ["B=2", "A=1"]


def test_cd_changes_directory(tmp_path, monkeypatch, streams):
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "sub"
    target.mkdir()
    assert cd(["cd", str(target)], make_env(), streams[1]) == 0
    assert os.path.samefile(os.getcwd(), target)


def test_cd_home(tmp_path, monkeypatch, streams):
    monkeypatch.chdir("/")
    env = make_env(f"HOME={tmp_path}")
    assert cd(["cd", "~"], env, streams[1]) == 0
    assert os.path.samefile(os.getcwd(), tmp_path)
    monkeypatch.chdir("/")
    assert cd(["cd"], env, streams[1]) == 0
    assert os.path.samefile(os.getcwd(), tmp_path)


def test_cd_without_home_does_nothing(tmp_path, monkeypatch, streams):
    monkeypatch.chdir(tmp_path)
    assert cd(["cd"], make_env(), streams[1]) == 0
    assert os.path.samefile(os.getcwd(), tmp_path)


def test_cd_too_many_arguments(streams):
    err = streams[1]
    assert cd(["cd", "a", "b"], make_env(), err) == -1
    assert err.getvalue() == "minishell: cd: too many arguments\n"


def test_cd_missing_directory(tmp_path, streams):
    err = streams[1]
    missing = str(tmp_path / "nope")
    assert cd(["cd", missing], make_env(), err) == 1
    assert err.getvalue().startswith(f"minishell: cd: {missing}: ")


def test_pwd_prints_cwd(tmp_path, monkeypatch, streams):
    monkeypatch.chdir(tmp_path)
    out, err = streams
    assert pwd(out, err) == 0
    assert os.path.samefile(out.getvalue().rstrip("\n"), tmp_path)


def test_export_lists_sorted(streams):
    out, err = streams
    assert export(["export"], make_env("B=2", "A=1"), out, err) == 0
    assert out.getvalue().splitlines() == ["declare -x A=1", "declare -x B=2"]


def test_export_adds_new_variable(streams):
    env = make_env("A=1")
    assert export(["export", "NEW=x=y"], env, *streams) == 0
    assert env.get("NEW") == "x=y"


def test_export_changes_existing(streams):
    env = make_env("A=1")
    export(["export", "A=2"], env, *streams)
    assert env.get("A") == "2"
    export(["export", "A="], env, *streams)
    assert env.get("A") == ""


def test_export_without_equal_sign_ignored(streams):
    env = make_env("A=1")
    assert export(["export", "B"], env, *streams) == 0
    assert env.to_strings() == ["A=1"]


def test_export_leading_equal_is_invalid(streams):
    out, err = streams
    env = make_env()
    assert export(["export", "=x"], env, out, err) == -1
    assert "not a valid identifier" in err.getvalue()
    assert len(env) == 0


def test_unset_removes_names():
    env = make_env("A=1", "B=2", "C=3")
    assert unset(["unset", "A", "C", "missing"], env) == 0
    assert env.to_strings() == ["B=2"]


def test_exit_without_argument(streams):
    out, err = streams
    with pytest.raises(ShellExit) as info:
        exit_command(["exit"], out, err)
    assert info.value.status == 0
    assert out.getvalue() == "exit\n"


def test_exit_with_number(streams):
    with pytest.raises(ShellExit) as info:
        exit_command(["exit", "42"], *streams)
    assert info.value.status == 42


def test_exit_non_numeric(streams):
    out, err = streams
    with pytest.raises(ShellExit) as info:
        exit_command(["exit", "abc"], out, err)
    assert info.value.status == 255
    assert "numeric argument required" in err.getvalue()


def test_exit_too_many_arguments(streams):
    out, err = streams
    with pytest.raises(ShellExit) as info:
        exit_command(["exit", "1", "2"], out, err)
    assert info.value.status == 1
    assert err.getvalue() == "minishell: exit: too many arguments\n"


def test_run_builtin_dispatches(streams):
    out, err = streams
    env = make_env("A=1")
    assert run_builtin(["echo", "x"], env, out, err) == 0
    assert run_builtin(["unset", "A"], env, out, err) == 0
    assert out.getvalue() == "x\n"
    assert len(env) == 0


def test_run_builtin_rejects_other_commands(streams):
    with pytest.raises(ValueError):
        run_builtin(["ls"], make_env(), *streams)


def test_run_builtin_exit_raises(streams):
    with pytest.raises(ShellExit):
        run_builtin(["exit"], make_env(), *streams)