from simulator.exceptions import ExecutionError
from simulator.parser import parse_program
from simulator.result import Result
from simulator.tape import ExecutionState
from simulator.validation import ACCEPT, HALTING_STATES, STARTING_STATE, build_alphabet, validate

# Tape size used when the caller does not ask for one
DEFAULT_TAPE_SIZE = 1024


class TuringMachine:
    """
    A validated single-tape Turing machine.

    Construction parses and validates the program, so an instance always has
    a start state that covers its alphabet and only reaches existing states.
    The machine is never mutated by a run: every run gets its own
    ExecutionState, so one machine can drive many runs at once.
    """

    def __init__(self, source, alphabet=""):
        self.alphabet = build_alphabet(alphabet)
        self.states = parse_program(source)
        self.initial_state = validate(self.states, self.alphabet)

    @classmethod
    def compile(cls, source, alphabet=""):
        return cls(source, alphabet)

    # === Running ===
    def begin(self, tape_size=DEFAULT_TAPE_SIZE, prefix="", head=0):
        """Fresh ExecutionState at the start state."""
        return ExecutionState.begin(self.initial_state, tape_size, prefix, head)

    def run(self, tape_contents="", tape_size=DEFAULT_TAPE_SIZE, head=0, trace=None):
        """Run on a fresh tape. Not guaranteed to terminate!"""
        return self.run_state(self.begin(tape_size, tape_contents, head), trace=trace)

    def run_state(self, execution_state, trace=None):
        """Step `execution_state` until the machine halts. Not guaranteed to terminate!"""
        while True:
            result = self.step(execution_state, trace=trace)
            if result is not None:
                return result

    def step(self, execution_state, trace=None):
        """
        Apply one transition. Returns a Result if this step halts the
        machine, otherwise None.

        `trace`, if given, is called as trace(execution_state, cell, transition)
        before the transition is applied.
        """
        if not execution_state.in_bounds:
            raise ExecutionError(
                f"{execution_state.tape_to_string()}\nRead/write head is outside the tape"
            )

        cell = execution_state.read()
        state = execution_state.state
        transition = state.lookup(cell)
        if transition is None:
            raise ExecutionError(
                f"{execution_state.tape_to_string()}\nNo transition in {state.name} for {cell}"
            )

        if trace is not None:
            trace(execution_state, cell, transition)

        if transition.writes:
            execution_state.write(transition.write)

        execution_state.move_head(transition.delta)
        execution_state.steps += 1

        if not execution_state.in_bounds:
            raise ExecutionError(
                f"{execution_state.tape_to_string()}\n{state.name}, {cell} -> {transition}\nWent out of bounds."
            )

        if transition.next_state in HALTING_STATES:
            return Result.from_execution(execution_state, transition.next_state == ACCEPT)

        execution_state.transition(self.states[transition.next_state])
        return None

    # === Dumping ===
    def reachable_states(self):
        """States reachable from the start state, depth-first, each once."""
        visited = []
        stack = [STARTING_STATE]
        while stack:
            name = stack.pop()
            if name in visited:
                continue
            visited.append(name)
            targets = [
                t.next_state for t in self.states[name].transitions.values()
                if t.next_state not in HALTING_STATES and t.next_state not in visited
            ]
            stack.extend(reversed(targets))
        return [self.states[name] for name in visited]

    def dump(self):
        """Source code for every reachable state."""
        return "".join(state.to_source() for state in self.reachable_states())

    def __str__(self):
        return self.dump()
