import pytest

from simulator.exceptions import TapeError
from simulator.parser import parse_program
from simulator.tape import ExecutionState, create_tape, render_tape


def test_tape_starts_with_blank_then_prefix():
    assert create_tape("ab", 5).tolist() == ["_", "a", "b", "_", "_"]
    assert create_tape("", 3).tolist() == ["_", "_", "_"]


def test_prefix_must_fit_with_leading_blank():
    assert create_tape("abc", 4).tolist() == ["_", "a", "b", "c"]
    with pytest.raises(TapeError):
        create_tape("abcd", 4)


def test_tape_size_must_be_positive():
    with pytest.raises(TapeError):
        create_tape("", 0)


def test_render_tape_trims_trailing_blanks():
    assert render_tape("_ab__", 1) == "_ab\n ^ [1]"


def test_render_tape_extends_to_head():
    assert render_tape("_____", 3) == "____\n   ^ [3]"


def test_begin_places_head_and_state():
    state = parse_program("S,* -> ha,*,s")["S"]
    execution = ExecutionState.begin(state, 8, "ab", 2)
    assert execution.head == 2
    assert execution.state is state
    assert execution.read() == "b"
    assert execution.steps == 0


def test_execution_state_mutators():
    execution = ExecutionState(create_tape("", 4), 0, None)
    execution.write("x")
    execution.move_head(3)
    assert execution.in_bounds
    execution.move_head(1)
    assert not execution.in_bounds
    assert execution.tape_contents() == "x___"
    assert execution.tape_to_string() == "x___\n    ^ [4]"


def test_every_character_round_trips():
    tape = create_tape("\x00a\x00", 5)
    assert tape.tolist() == ["_", "\x00", "a", "\x00", "_"]
    execution = ExecutionState(tape, 1, None)
    assert execution.read() == "\x00"
    assert execution.tape_contents() == "_\x00a\x00_"
