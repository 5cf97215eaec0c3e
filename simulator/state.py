from simulator.transition import WILDCARD


class State:
    """A named state and its trigger character -> Transition table."""

    def __init__(self, name):
        self.name = name
        self.transitions = {}

    def add_transition(self, trigger, transition):
        """Register a transition. Returns False if the trigger is already taken."""
        if trigger in self.transitions:
            return False
        self.transitions[trigger] = transition
        return True

    @property
    def has_wildcard(self):
        return WILDCARD in self.transitions

    def lookup(self, cell):
        # Exact trigger first, then the catch-all
        transition = self.transitions.get(cell)
        if transition is None:
            transition = self.transitions.get(WILDCARD)
        return transition

    def rule(self, trigger):
        return f"{self.name}, {trigger} -> {self.transitions[trigger]}"

    def to_source(self):
        """Every transition of this state, one rule per line."""
        return "".join(self.rule(trigger) + "\n" for trigger in self.transitions)

    def __repr__(self):
        return f"State({self.name!r}, triggers={list(self.transitions)})"
