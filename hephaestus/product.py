from typing import Callable, Dict, Optional

from .dfa import DFA
from .logging_config import get_logger
from .models import same_alphabet

log = get_logger(__name__)

_COMBINATORS: Dict[str, Callable[[bool, bool], bool]] = {
    "AND": lambda a, b: a and b,
    "OR": lambda a, b: a or b,
}


class ProductConstructionEngine:
    def combine(self, dfa1: DFA, dfa2: DFA, operation: str) -> Optional[DFA]:
        """
        Cross-product of two DFAs; ``operation`` is "AND" (intersection)
        or "OR" (union). Returns None when the alphabets differ.

        Pair (i, j) gets id ``i * dfa2.num_states + j``: outer loop over
        dfa1 states, inner over dfa2 states.
        """
        try:
            combinator = _COMBINATORS[operation]
        except KeyError:
            raise ValueError(f"Unknown product operation '{operation}'") from None

        # 1. Normalize Alphabets
        if not same_alphabet(dfa1.alphabet, dfa2.alphabet):
            log.debug(
                "product_incompatible",
                alphabet1=list(dfa1.alphabet),
                alphabet2=list(dfa2.alphabet),
            )
            return None
        alphabet = dfa1.alphabet

        n1, n2 = dfa1.num_states, dfa2.num_states

        def pair_id(i: int, j: int) -> int:
            return i * n2 + j

        # 2. Generate Product States
        transitions = []
        accept = []
        for i in range(n1):
            accept1 = i in dfa1.accept
            for j in range(n2):
                curr = pair_id(i, j)
                if combinator(accept1, j in dfa2.accept):
                    accept.append(curr)
                for sym in alphabet:
                    nxt = pair_id(dfa1.transition(i, sym), dfa2.transition(j, sym))
                    transitions.append((curr, sym, nxt))

        combined = DFA.new(
            n1 * n2,
            alphabet,
            transitions,
            pair_id(dfa1.start, dfa2.start),
            accept,
        )
        log.debug("product_combined", operation=operation, num_states=n1 * n2)
        return combined

    def invert(self, dfa: DFA) -> DFA:
        accept = [s for s in range(dfa.num_states) if s not in dfa.accept]
        inverted = DFA.new(
            dfa.num_states,
            dfa.alphabet,
            dfa.transitions(),
            dfa.start,
            accept,
        )
        log.debug("dfa_complemented", num_states=dfa.num_states)
        return inverted


_engine = ProductConstructionEngine()


def union(dfa1: DFA, dfa2: DFA) -> Optional[DFA]:
    return _engine.combine(dfa1, dfa2, "OR")


def intersect(dfa1: DFA, dfa2: DFA) -> Optional[DFA]:
    return _engine.combine(dfa1, dfa2, "AND")


def complement(dfa: DFA) -> DFA:
    return _engine.invert(dfa)
