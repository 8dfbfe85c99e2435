"""Exceptions raised while building or loading automata."""


class AutomatonError(ValueError):
    """Base exception for all automaton errors."""

    pass


class InvalidAutomatonError(AutomatonError):
    """Raised when an automaton references states it does not list."""

    pass


class AutomatonFormatError(AutomatonError):
    """Raised when a stored automaton document cannot be read."""

    def __init__(self, message: str, path: str = None) -> None:
        self.path = path
        super().__init__(message)

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {super().__str__()}"
        return super().__str__()
