"""
Nondeterministic Finite Automaton.

Similar in principle to a DFA except that an NFA can have zero or several
transitions on an input symbol, and can move on the empty symbol
(``EPSILON``, '_' by default) without consuming input.

Sets of states are bitsets: a Python int whose bit ``i`` is set when
state ``i`` is a member.
"""

from collections import deque
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple, Union

from .dfa import DFA
from .errors import ConstructionError, InvalidStart, ReservedSymbol, UnknownState, UnknownSymbol
from .logging_config import get_logger
from .models import Automaton, Symbol, Transition, normalize_alphabet

log = get_logger(__name__)

EPSILON = "_"

StateSet = Union[int, Iterable[int]]


def iter_states(bits: int) -> Iterator[int]:
    """Yield the state indices of a bitset in ascending order."""
    while bits:
        low = bits & -bits
        yield low.bit_length() - 1
        bits ^= low


def to_bits(states: StateSet) -> int:
    if isinstance(states, int):
        return states
    bits = 0
    for state in states:
        bits |= 1 << state
    return bits


def to_states(bits: int) -> FrozenSet[int]:
    return frozenset(iter_states(bits))


class NFA(Automaton):
    """
    Immutable NFA. Build with ``NFA.new(...)``; raises a ConstructionError
    subclass if the epsilon symbol is in the alphabet or a transition
    names an unknown symbol or state.
    """

    def __init__(
        self,
        num_states: int,
        alphabet: Iterable[Symbol],
        transitions: Iterable[Tuple[int, Symbol, int]],
        start: int,
        accept: Iterable[int],
        epsilon: str = EPSILON,
    ):
        alphabet = normalize_alphabet(alphabet)
        transitions = [Transition(*t) for t in transitions]
        accept = frozenset(accept)
        try:
            delta = self._build_delta(num_states, alphabet, transitions, start, accept, epsilon)
        except ConstructionError as e:
            log.debug("nfa_construction_failed", error=type(e).__name__, detail=str(e))
            raise

        self._num_states = num_states
        self._alphabet = alphabet
        self._symbols = frozenset(alphabet)
        self._epsilon = epsilon
        self._delta: Dict[Tuple[int, Symbol], int] = delta
        self._epsilon_moves: List[int] = [delta.get((i, epsilon), 0) for i in range(num_states)]
        self._start = start
        self._accept = accept
        self._accept_bits = to_bits(accept)
        log.debug("nfa_constructed", num_states=num_states, alphabet_size=len(alphabet))

    @classmethod
    def new(
        cls,
        num_states: int,
        alphabet: Iterable[Symbol],
        transitions: Iterable[Tuple[int, Symbol, int]],
        start: int,
        accept: Iterable[int],
        epsilon: str = EPSILON,
    ) -> "NFA":
        """Validate the definition and return an NFA."""
        return cls(num_states, alphabet, transitions, start, accept, epsilon=epsilon)

    @staticmethod
    def _build_delta(
        num_states: int,
        alphabet: Tuple[Symbol, ...],
        transitions: List[Transition],
        start: int,
        accept: FrozenSet[int],
        epsilon: str,
    ) -> Dict[Tuple[int, Symbol], int]:
        if epsilon in alphabet:
            raise ReservedSymbol(epsilon)

        if not 0 <= start < num_states:
            raise InvalidStart(start, num_states)

        symbols = set(alphabet)
        delta: Dict[Tuple[int, Symbol], int] = {}

        # Validate transitions and merge them into the transition table
        for t in transitions:
            curr, sym, nxt = t
            if sym != epsilon and sym not in symbols:
                raise UnknownSymbol(sym, t)
            if not 0 <= curr < num_states:
                raise UnknownState(curr, "source", t)
            if not 0 <= nxt < num_states:
                raise UnknownState(nxt, "destination", t)
            delta[(curr, sym)] = delta.get((curr, sym), 0) | (1 << nxt)

        for state in sorted(accept):
            if not 0 <= state < num_states:
                raise UnknownState(state, "accept")

        return delta

    @property
    def epsilon(self) -> str:
        return self._epsilon

    def successors(self, state: int, symbol: Symbol) -> FrozenSet[int]:
        """States reachable from ``state`` by one ``symbol`` move (epsilon allowed)."""
        return to_states(self._delta.get((state, symbol), 0))

    def transitions(self) -> List[Transition]:
        found = [
            Transition(curr, sym, nxt)
            for (curr, sym), bits in self._delta.items()
            for nxt in iter_states(bits)
        ]
        return sorted(found, key=lambda t: (t.source, str(t.symbol), t.destination))

    def closure(self, states: StateSet) -> int:
        """
        Epsilon closure of ``states`` (bitset or iterable of indices), as a bitset.

        Stops as soon as one round of epsilon moves adds nothing new, so
        epsilon cycles terminate.
        """
        current = to_bits(states)
        while True:
            reached = 0
            for i in iter_states(current):
                reached |= self._epsilon_moves[i]
            if reached & ~current == 0:
                return current
            current |= reached

    def _step(self, current: int, symbol: Symbol) -> int:
        moved = 0
        for i in iter_states(current):
            moved |= self._delta.get((i, symbol), 0)
        return moved

    def run(self, string: Iterable[Symbol]) -> Optional[bool]:
        # Instead of a single current state, keep the set of every state
        # the automaton could be in.
        current = self.closure(1 << self._start)

        for sym in string:
            if sym not in self._symbols:
                return None

            moved = self._step(current, sym)
            if not moved:
                return False

            current = self.closure(moved)

        return bool(current & self._accept_bits)

    def to_dfa(self) -> DFA:
        """
        Subset construction. DFA state ``k`` is the ``k``-th epsilon-closed
        subset discovered breadth-first from the start closure; the empty
        subset, when reachable, is the dead state.
        """
        start = self.closure(1 << self._start)
        index: Dict[int, int] = {start: 0}
        order: List[int] = [start]
        queue: deque = deque([start])
        transitions = []

        while queue:
            subset = queue.popleft()
            for sym in self._alphabet:
                moved = self._step(subset, sym)
                target = self.closure(moved) if moved else 0
                if target not in index:
                    index[target] = len(order)
                    order.append(target)
                    queue.append(target)
                transitions.append((index[subset], sym, index[target]))

        accept = [k for k, subset in enumerate(order) if subset & self._accept_bits]
        dfa = DFA.new(len(order), self._alphabet, transitions, 0, accept)
        log.debug("nfa_determinized", nfa_states=self._num_states, dfa_states=len(order))
        return dfa

    def __repr__(self) -> str:
        return (
            f"NFA(num_states={self._num_states}, alphabet={list(self._alphabet)}, "
            f"start={self._start}, accept={sorted(self._accept)})"
        )
