"""
Construction errors for hephaestus automata.

Every failure raised while building a DFA or NFA derives from
ConstructionError, so callers can catch the whole family at once or
pick out the one they care about.
"""

from typing import Any, Optional


class ConstructionError(ValueError):
    """Base class for invalid automaton definitions."""
    pass


class ShapeError(ConstructionError):
    """A DFA was given the wrong number of transitions."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Incorrect number of transitions: expected {expected}, got {actual}"
        )


class InvalidStart(ConstructionError):
    """The start state is not one of the automaton's states."""

    def __init__(self, start: int, num_states: int):
        self.start = start
        self.num_states = num_states
        super().__init__(f"Start state `{start}` does not exist (num_states={num_states})")


class UnknownSymbol(ConstructionError):
    """A transition uses a symbol outside the declared alphabet."""

    def __init__(self, symbol: Any, transition: Optional[tuple] = None):
        self.symbol = symbol
        self.transition = transition
        super().__init__(f"Symbol `{symbol}` is not in the alphabet")


class UnknownState(ConstructionError):
    """A transition endpoint or accept index is out of range.

    ``role`` names the offending position: "source", "destination" or
    "accept".
    """

    def __init__(self, state: int, role: str, transition: Optional[tuple] = None):
        self.state = state
        self.role = role
        self.transition = transition
        if transition is not None:
            curr, sym, nxt = transition
            message = (
                f"In transition: ({curr}, '{sym}') -> {nxt}: "
                f"State `{state}` does not exist"
            )
        else:
            message = f"Accept state `{state}` does not exist"
        super().__init__(message)


class DuplicateOrMissingTransition(ConstructionError):
    """A DFA table is not exactly one transition per (state, symbol)."""

    def __init__(self, state: int, symbol: Any, duplicate: bool = True, target: Optional[int] = None):
        self.state = state
        self.symbol = symbol
        self.duplicate = duplicate
        if duplicate:
            message = f"Duplicate transition: ({state}, '{symbol}') -> {target}"
        else:
            message = f"Missing transition for ({state}, '{symbol}')"
        super().__init__(message)


class ReservedSymbol(UnknownSymbol):
    """An NFA alphabet contains the epsilon sentinel.

    Subclasses UnknownSymbol: the sentinel is never a usable alphabet symbol.
    """

    def __init__(self, symbol: str):
        self.symbol = symbol
        self.transition = None
        ConstructionError.__init__(self, f"Alphabets cannot contain '{symbol}'")
