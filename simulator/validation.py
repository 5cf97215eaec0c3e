from simulator.exceptions import SemanticError
from simulator.transition import BLANK, WILDCARD

# Name of the state every program starts in
STARTING_STATE = "S"

# Reserved halting targets; never real states
ACCEPT = "ha"
REJECT = "hr"
HALTING_STATES = (ACCEPT, REJECT)


def build_alphabet(letters):
    """Blank first, then the given letters in order, without duplicates."""
    alphabet = [BLANK]
    for letter in letters:
        if not isinstance(letter, str) or len(letter) != 1:
            raise SemanticError(f"Alphabet letters must be single characters, got {letter!r}")
        if letter == WILDCARD:
            raise SemanticError(f"'{WILDCARD}' is the wildcard and cannot be part of the alphabet")
        if letter not in alphabet:
            alphabet.append(letter)
    return tuple(alphabet)


def validate_alphabet(states, alphabet):
    """Ensure no state reads or writes a character outside the alphabet."""
    for state in states.values():
        if state.name in HALTING_STATES:
            first_line = min(t.source_line for t in state.transitions.values())
            raise SemanticError(f"State {state.name} is a reserved halting state and cannot have transitions", first_line)

        for trigger, transition in state.transitions.items():
            if trigger != WILDCARD and trigger not in alphabet:
                raise SemanticError(
                    f"State {state.name} has a transition for letter {trigger} which is not in the alphabet",
                    transition.source_line,
                )

        for transition in state.transitions.values():
            if transition.writes and transition.write not in alphabet:
                raise SemanticError(
                    f"State {state.name} writes {transition.write} which is not in the alphabet",
                    transition.source_line,
                )


def validate_states(states, alphabet):
    """
    Walk every state reachable from the starting state, checking that each
    one handles the whole alphabet and only transitions to existing states.
    Returns the starting state.
    """
    if STARTING_STATE not in states:
        raise SemanticError("VM does not contain a start state")

    visited = set()
    stack = [STARTING_STATE]

    while stack:
        name = stack.pop()
        if name in visited:
            continue
        visited.add(name)
        state = states[name]

        if not state.has_wildcard:
            for letter in alphabet:
                if letter not in state.transitions:
                    raise SemanticError(f"State {name} does not have a transition for letter {letter}")

        pending = []
        for transition in state.transitions.values():
            target = transition.next_state
            if target in HALTING_STATES or target in visited:
                continue
            if target not in states:
                raise SemanticError(f"State {target} does not exist", transition.source_line)
            pending.append(target)

        # Reversed so states are walked in source order
        stack.extend(reversed(pending))

    return states[STARTING_STATE]


def validate(states, alphabet):
    validate_alphabet(states, alphabet)
    return validate_states(states, alphabet)
