import numpy as np

from simulator.exceptions import TapeError
from simulator.transition import BLANK

# Object cells: fixed-width unicode arrays drop NUL characters
TAPE_DTYPE = object


def create_tape(prefix="", size=1024):
    """
    Build a tape of `size` blank cells with `prefix` written after a leading
    blank, so the first cell is always blank.
    """
    contents = BLANK + prefix
    if size <= 0:
        raise TapeError(f"Tape size must be positive, got {size}")
    if len(contents) > size:
        raise TapeError("Prefix cannot be stored in a tape so small")

    tape = np.full(size, BLANK, dtype=TAPE_DTYPE)
    tape[:len(contents)] = list(contents)
    return tape


def render_tape(cells, head):
    """Tape up to its last non-blank cell (or the head), with a marker under the head."""
    cells = [str(c) for c in cells]
    last = max(0, min(head, len(cells)))
    for i in range(last, len(cells)):
        if cells[i] != BLANK:
            last = i

    line = "".join(cells[:last + 1])
    marker = " " * max(head, 0) + f"^ [{head}]"
    return f"{line}\n{marker}"


class ExecutionState:
    """
    Runtime tuple of a single run: the tape, the read/write head and the
    logical state the machine is in. Owned by one run only.
    """

    def __init__(self, tape, head, state):
        self.tape = tape
        self.head = head
        self.state = state
        self.steps = 0

    @classmethod
    def begin(cls, initial_state, tape_size, prefix="", head=0):
        return cls(create_tape(prefix, tape_size), head, initial_state)

    @property
    def in_bounds(self):
        return 0 <= self.head < len(self.tape)

    def read(self):
        return str(self.tape[self.head])

    def write(self, symbol):
        self.tape[self.head] = symbol

    def move_head(self, amount):
        self.head += amount

    def transition(self, state):
        self.state = state

    def tape_contents(self):
        return "".join(self.tape.tolist())

    def tape_to_string(self):
        return render_tape(self.tape.tolist(), self.head)
