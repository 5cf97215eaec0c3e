class TuringMachineError(Exception):
    """Base class for every error raised by the Turing machine VM."""


class ParseError(TuringMachineError):
    """Malformed rule syntax. Always tagged with the 1-based source line."""

    def __init__(self, line, message):
        self.line = line
        super().__init__(f"PARSING ERROR @ Ln {line} - {message}")


class SemanticError(TuringMachineError):
    """The program parses but cannot describe a valid machine."""

    def __init__(self, message, line=None):
        self.line = line
        if line is None:
            super().__init__(f"SEMANTIC ERROR - {message}")
        else:
            super().__init__(f"SEMANTIC ERROR @ Ln {line} - {message}")


class ExecutionError(TuringMachineError):
    """A run could not continue (no transition, head off the tape)."""


class TapeError(ExecutionError):
    """A tape could not be built from the requested contents and size."""
