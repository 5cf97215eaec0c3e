from simulator.exceptions import ParseError
from simulator.state import State
from simulator.transition import Movement, TOKEN_MOVEMENTS, Transition

RULE_FORMAT = "<state>, <character> -> <next state>, <write>, <movement>"
TRANSITION_FORMAT = "<next state>, <write>, <movement>"


def parse_transition(text, line):
    """Parse the right-hand side of a rule: "<next state>, <write>, <movement>"."""
    parts = [part.strip() for part in text.split(",")]
    if len(parts) != 3:
        raise ParseError(line, f"Invalid transition format: {text}. Expected format {TRANSITION_FORMAT}")

    next_state, write, move = parts
    if not next_state:
        raise ParseError(line, f"Invalid transition format: {text}. Next state must not be empty")
    if len(write) != 1:
        raise ParseError(line, f"Invalid transition format: {text}. Write must be a single character")
    if move not in TOKEN_MOVEMENTS:
        tokens = ", ".join(f"'{token}'" for token in TOKEN_MOVEMENTS)
        raise ParseError(line, f"Invalid transition format: {text}. Movement must be one of: {tokens}")

    return Transition(next_state, write, Movement.from_token(move), line)


def parse_rule(states, text, line):
    """
    Parse one rule line and add its transition to `states`, creating the
    state on first mention. Returns the state the rule belongs to.
    """
    bad_rule = ParseError(line, f"Invalid state format: {text.strip()}. Expected format {RULE_FORMAT}")

    sides = text.split("->")
    if len(sides) != 2:
        raise bad_rule

    left = [part.strip() for part in sides[0].strip().split(",")]
    if len(left) != 2:
        raise bad_rule

    name, trigger = left
    if not name:
        raise ParseError(line, f"Invalid state format: {text.strip()}. State name must not be empty")
    if len(trigger) != 1:
        raise ParseError(line, f"Invalid state format: {text.strip()}. Trigger must be a single character")

    transition = parse_transition(sides[1].strip(), line)

    state = states.get(name)
    if state is None:
        state = State(name)
        states[name] = state

    if not state.add_transition(trigger, transition):
        first = state.transitions[trigger].source_line
        raise ParseError(line, f"Duplicate trigger '{trigger}' for state {name} (first defined on line {first})")

    return state


def parse_program(source):
    """Parse a whole program into a {name: State} mapping."""
    states = {}
    for line_no, text in enumerate(source.split("\n"), start=1):
        if not text.strip():
            continue
        parse_rule(states, text, line_no)
    return states
