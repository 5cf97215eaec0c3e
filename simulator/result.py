from dataclasses import dataclass

from simulator.tape import render_tape


@dataclass(frozen=True)
class Result:
    """Outcome of a halting run."""

    final_tape: str
    final_head: int
    accepted: bool
    steps: int = 0

    @classmethod
    def from_execution(cls, execution_state, accepted):
        return cls(
            final_tape=execution_state.tape_contents(),
            final_head=execution_state.head,
            accepted=accepted,
            steps=execution_state.steps,
        )

    def dump_tape(self):
        return self.final_tape

    def describe(self):
        verdict = "Accepted" if self.accepted else "Rejected"
        return f"{render_tape(self.final_tape, self.final_head)}\n{verdict}"

    def to_dict(self):
        return {
            "tape": self.final_tape,
            "head": self.final_head,
            "accepted": self.accepted,
            "steps": self.steps,
        }

    def __str__(self):
        return self.describe()
