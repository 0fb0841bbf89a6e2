"""
Deterministic Finite Automaton.

The transition function is stored densely: entry
``state * len(alphabet) + symbol_index`` holds the destination. The
constructor proves the table is total and single-valued, so lookups in
``run`` never miss.
"""

from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from .errors import (
    ConstructionError,
    DuplicateOrMissingTransition,
    InvalidStart,
    ShapeError,
    UnknownState,
    UnknownSymbol,
)
from .logging_config import get_logger
from .models import Automaton, Symbol, Transition, normalize_alphabet

log = get_logger(__name__)


class DFA(Automaton):
    """
    Immutable DFA over a finite alphabet.

    Build with ``DFA.new(num_states, alphabet, transitions, start, accept)``
    (or the equivalent ``DFA(...)``). Invalid definitions raise a
    ConstructionError subclass. Algebra (union, intersect, complement,
    minimize) always returns a new DFA.
    """

    def __init__(
        self,
        num_states: int,
        alphabet: Iterable[Symbol],
        transitions: Iterable[Tuple[int, Symbol, int]],
        start: int,
        accept: Iterable[int],
    ):
        alphabet = normalize_alphabet(alphabet)
        transitions = [Transition(*t) for t in transitions]
        accept = frozenset(accept)
        try:
            delta = self._build_delta(num_states, alphabet, transitions, start, accept)
        except ConstructionError as e:
            log.debug("dfa_construction_failed", error=type(e).__name__, detail=str(e))
            raise

        self._num_states = num_states
        self._alphabet = alphabet
        self._index: Dict[Symbol, int] = {sym: i for i, sym in enumerate(alphabet)}
        self._delta: Tuple[int, ...] = delta
        self._start = start
        self._accept: FrozenSet[int] = accept
        log.debug("dfa_constructed", num_states=num_states, alphabet_size=len(alphabet))

    @classmethod
    def new(
        cls,
        num_states: int,
        alphabet: Iterable[Symbol],
        transitions: Iterable[Tuple[int, Symbol, int]],
        start: int,
        accept: Iterable[int],
    ) -> "DFA":
        """Validate the definition and return a DFA."""
        return cls(num_states, alphabet, transitions, start, accept)

    @staticmethod
    def _build_delta(
        num_states: int,
        alphabet: Tuple[Symbol, ...],
        transitions: List[Transition],
        start: int,
        accept: FrozenSet[int],
    ) -> Tuple[int, ...]:
        width = len(alphabet)
        expected = num_states * width
        if len(transitions) != expected:
            raise ShapeError(expected, len(transitions))

        if not 0 <= start < num_states:
            raise InvalidStart(start, num_states)

        index = {sym: i for i, sym in enumerate(alphabet)}
        required: Set[Tuple[int, Symbol]] = {
            (state, sym) for state in range(num_states) for sym in alphabet
        }
        delta: List[int] = [0] * expected

        for t in transitions:
            curr, sym, nxt = t
            if sym not in index:
                raise UnknownSymbol(sym, t)
            if not 0 <= curr < num_states:
                raise UnknownState(curr, "source", t)
            if not 0 <= nxt < num_states:
                raise UnknownState(nxt, "destination", t)
            if (curr, sym) not in required:
                raise DuplicateOrMissingTransition(curr, sym, duplicate=True, target=nxt)
            required.discard((curr, sym))
            delta[curr * width + index[sym]] = nxt

        if required:
            curr, sym = min(required, key=lambda pair: (pair[0], index[pair[1]]))
            raise DuplicateOrMissingTransition(curr, sym, duplicate=False)

        for state in sorted(accept):
            if not 0 <= state < num_states:
                raise UnknownState(state, "accept")

        return tuple(delta)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def transition(self, state: int, symbol: Symbol) -> int:
        """Destination of ``state`` on ``symbol``. KeyError for unknown symbols."""
        return self._delta[state * len(self._alphabet) + self._index[symbol]]

    def transitions(self) -> List[Transition]:
        width = len(self._alphabet)
        return [
            Transition(state, sym, self._delta[state * width + i])
            for state in range(self._num_states)
            for i, sym in enumerate(self._alphabet)
        ]

    def run(self, string: Iterable[Symbol]) -> Optional[bool]:
        """True if accepted, False if rejected, None if a symbol is not in the alphabet."""
        width = len(self._alphabet)
        curr = self._start
        for sym in string:
            i = self._index.get(sym)
            if i is None:
                return None
            curr = self._delta[curr * width + i]
        return curr in self._accept

    def reachable_states(self) -> FrozenSet[int]:
        from .optimizer import find_reachable_states
        return find_reachable_states(self)

    def is_empty(self) -> bool:
        """True when the DFA accepts no string at all."""
        from .optimizer import is_empty
        return is_empty(self)

    # ------------------------------------------------------------------
    # Algebra
    # ------------------------------------------------------------------

    def union(self, other: "DFA") -> Optional["DFA"]:
        """Product DFA accepting L(self) | L(other); None if alphabets differ."""
        from .product import union
        return union(self, other)

    def intersect(self, other: "DFA") -> Optional["DFA"]:
        """Product DFA accepting L(self) & L(other); None if alphabets differ."""
        from .product import intersect
        return intersect(self, other)

    def complement(self) -> "DFA":
        from .product import complement
        return complement(self)

    def minimize(self) -> "DFA":
        """Equivalent DFA with the fewest states (Hopcroft)."""
        from .optimizer import minimize_dfa
        return minimize_dfa(self)

    def equals(self, other: "DFA") -> bool:
        """
        Language equivalence: the symmetric difference
        (A & ~B) | (~A & B) accepts nothing. Different alphabets are
        never equivalent.
        """
        left = self.intersect(other.complement())
        if left is None:
            return False
        right = self.complement().intersect(other)
        return left.union(right).is_empty()

    def __eq__(self, other):
        if not isinstance(other, DFA):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"DFA(num_states={self._num_states}, alphabet={list(self._alphabet)}, "
            f"start={self._start}, accept={sorted(self._accept)})"
        )
