import pytest

import app
from config.config_loader import DEFAULT_CONFIG
from sample_programs import ACCEPT_EVENS


@pytest.fixture
def session():
    config = DEFAULT_CONFIG.copy()
    config["log_results"] = False
    return app.Session(config)


@pytest.fixture
def commands(session):
    return app.build_commands(session)


@pytest.fixture
def program(tmp_path):
    path = tmp_path / "evens.tm"
    path.write_text(ACCEPT_EVENS, encoding="utf-8")
    return path


def recording_commands(calls):
    return [
        app.Command("a", 0, 0, "a", "", lambda args: calls.append(["a"])),
        app.Command("b", 1, 1, "b <arg>", "", lambda args: calls.append(["b"] + args)),
        app.Command("c", 0, 2, "c [arg1] [arg2]", "", lambda args: calls.append(["c"] + args)),
    ]


@pytest.mark.parametrize("line, expected", [
    ("a", ["a"]),
    ("", []),
    ("a b", ["a", "b"]),
    ('a "b c"', ["a", "b c"]),
])
def test_parse_line(line, expected):
    assert app.parse_line(line) == expected


@pytest.mark.parametrize("line, expected", [
    ("a", ["a"]),
    ('b "hello world"', ["b", "hello world"]),
    ('c "hello world" "goodbye world"', ["c", "hello world", "goodbye world"]),
    ('c "hello world"', ["c", "hello world"]),
    ("c", ["c"]),
])
def test_dispatch(line, expected):
    calls = []
    assert app.dispatch(line, recording_commands(calls))
    assert calls == [expected]


def test_dispatch_checks_arity(capsys):
    calls = []
    assert not app.dispatch("b", recording_commands(calls))
    assert calls == []
    assert "Usage: b <arg>" in capsys.readouterr().out


def test_dispatch_unknown_command(capsys):
    assert not app.dispatch("nope", recording_commands([]))
    assert "Unknown command: nope" in capsys.readouterr().out


def test_dispatch_blank_and_unbalanced_quotes():
    assert not app.dispatch("", recording_commands([]))
    assert not app.dispatch('b "open', recording_commands([]))


def test_load_and_run(session, commands, program):
    app.dispatch(f'load "{program}" a', commands)
    assert session.machine is not None
    app.dispatch("run aaaa", commands)
    assert session.last_result.accepted
    app.dispatch("run aaa 16", commands)
    assert not session.last_result.accepted
    assert len(session.last_result.dump_tape()) == 16


def test_run_without_machine(session, commands, capsys):
    app.dispatch("run", commands)
    assert session.last_result is None
    assert "No Turing machine loaded" in capsys.readouterr().out


def test_load_reports_errors(session, commands, tmp_path, capsys):
    bad = tmp_path / "bad.tm"
    bad.write_text("S,* -> A,*,s", encoding="utf-8")
    app.dispatch(f'load "{bad}" a', commands)
    app.dispatch(f'load "{tmp_path / "missing.tm"}" a', commands)
    out = capsys.readouterr().out
    assert session.machine is None
    assert "SEMANTIC ERROR" in out
    assert "File not found" in out


def test_run_reports_runtime_errors(session, commands, tmp_path, capsys):
    path = tmp_path / "left.tm"
    path.write_text("S,* -> ha,*,l", encoding="utf-8")
    app.dispatch(f'load "{path}" a', commands)
    app.dispatch("run", commands)
    assert session.last_result is None
    assert "Went out of bounds." in capsys.readouterr().out


def test_run_rejects_bad_size(session, commands, program, capsys):
    app.dispatch(f'load "{program}" a', commands)
    app.dispatch("run aa lots", commands)
    assert session.last_result is None
    assert "Not an integer" in capsys.readouterr().out


def test_debug_prints_trace(session, commands, program, capsys):
    app.dispatch(f'load "{program}" a', commands)
    app.dispatch("debug on", commands)
    assert session.verbose
    capsys.readouterr()
    app.dispatch("run aa", commands)
    assert "1. S, _ -> E, *, r" in capsys.readouterr().out
    app.dispatch("debug off", commands)
    assert not session.verbose


def test_dump(session, commands, program, capsys):
    app.dispatch("dump", commands)
    assert "No program to dump" in capsys.readouterr().out
    app.dispatch(f'load "{program}" a', commands)
    capsys.readouterr()
    app.dispatch("dump", commands)
    assert "S, * -> E, *, r" in capsys.readouterr().out


def test_exit(session, commands):
    app.dispatch("exit", commands)
    assert not session.running


def test_main_runs_commands_and_logs(tmp_path, program, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    app.main(["--config", "missing.json", "-c", f'load "{program}" a', "-c", "run aa", "-c", "exit", "-c", "help"])
    out = capsys.readouterr().out
    assert ">>> run aa" in out
    assert "Accepted" in out
    assert "Displays all the available commands" not in out
    assert list((tmp_path / "logs").glob("tmvm_*.jsonl"))
