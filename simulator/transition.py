from dataclasses import dataclass
from enum import Enum

BLANK = "_"
WILDCARD = "*"


class Movement(Enum):
    LEFT = -1
    STAY = 0
    RIGHT = 1

    @property
    def token(self):
        return MOVEMENT_TOKENS[self]

    @classmethod
    def from_token(cls, token):
        return TOKEN_MOVEMENTS[token]


# === Source tokens for head movements ===
MOVEMENT_TOKENS = {
    Movement.LEFT: "l",
    Movement.RIGHT: "r",
    Movement.STAY: "s",
}
TOKEN_MOVEMENTS = {token: move for move, token in MOVEMENT_TOKENS.items()}


@dataclass(frozen=True)
class Transition:
    """Right-hand side of a rule: where to go, what to write, how to move."""

    next_state: str
    write: str
    move: Movement
    source_line: int

    @property
    def writes(self) -> bool:
        return self.write != WILDCARD

    @property
    def delta(self) -> int:
        return self.move.value

    def __str__(self):
        return f"{self.next_state}, {self.write}, {self.move.token}"
