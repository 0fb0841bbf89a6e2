"""
DFA Optimizer Module
====================
Reachability analysis and minimization for hephaestus DFAs.

This module provides:
- Forward reachability from the start state
- Emptiness testing (no accept state is reachable)
- DFA minimization using Hopcroft's partition refinement
"""

from typing import Dict, FrozenSet, List, Set
from collections import deque
import logging

from .dfa import DFA

logger = logging.getLogger(__name__)


class DFAOptimizer:
    """
    Reduces a DFA to its minimal equivalent.

    Unreachable states are discarded first; the remaining states are
    split into blocks of behaviourally identical states, and each block
    becomes one state of the result.
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def _log(self, message: str):
        """Log optimization steps if verbose mode is enabled."""
        if self.verbose:
            logger.info(f"[Optimizer] {message}")

    def find_reachable_states(self, dfa: DFA) -> FrozenSet[int]:
        """
        Find all states reachable from the start state using BFS.

        Time Complexity: O(|States| * |Alphabet|)
        """
        reachable: Set[int] = {dfa.start}
        queue: deque = deque([dfa.start])

        while queue:
            current = queue.popleft()
            for symbol in dfa.alphabet:
                nxt = dfa.transition(current, symbol)
                if nxt not in reachable:
                    reachable.add(nxt)
                    queue.append(nxt)

        return frozenset(reachable)

    def is_empty(self, dfa: DFA) -> bool:
        """True if no accept state is reachable, i.e. the language is empty."""
        return not (self.find_reachable_states(dfa) & dfa.accept)

    def refine(self, dfa: DFA, reachable: FrozenSet[int]) -> List[FrozenSet[int]]:
        """
        Hopcroft partition refinement over ``reachable``.

        Returns the final blocks in partition-list order: the accepting
        block (if any) first, with each split replacing its parent in place.
        """
        accepting = frozenset(reachable & dfa.accept)
        rejecting = frozenset(reachable - dfa.accept)

        partition: List[FrozenSet[int]] = [b for b in (accepting, rejecting) if b]
        if len(partition) == 2:
            worklist: List[FrozenSet[int]] = [min(partition, key=len)]
        else:
            worklist = list(partition)

        # predecessors[symbol][target] -> reachable states moving to target on symbol
        predecessors: Dict[object, Dict[int, Set[int]]] = {sym: {} for sym in dfa.alphabet}
        for state in reachable:
            for sym in dfa.alphabet:
                predecessors[sym].setdefault(dfa.transition(state, sym), set()).add(state)

        while worklist:
            splitter = worklist.pop()
            for sym in dfa.alphabet:
                involved: Set[int] = set()
                for state in splitter:
                    involved |= predecessors[sym].get(state, set())
                if not involved:
                    continue

                refined: List[FrozenSet[int]] = []
                for block in partition:
                    inside = block & involved
                    outside = block - involved
                    if inside and outside:
                        refined.extend([inside, outside])
                        if block in worklist:
                            worklist.remove(block)
                            worklist.extend([inside, outside])
                        else:
                            worklist.append(inside if len(inside) <= len(outside) else outside)
                    else:
                        refined.append(block)
                partition = refined

        return [block for block in partition if block]

    def minimize(self, dfa: DFA) -> DFA:
        """
        Build the minimal DFA: one state per block, numbered by block
        index. Transitions follow any representative of the block.

        The result goes through DFA.new; a ConstructionError here means
        the refinement itself is wrong, so it is not caught.
        """
        reachable = self.find_reachable_states(dfa)
        self._log(f"Reachable states: {sorted(reachable)} of {dfa.num_states}")

        blocks = self.refine(dfa, reachable)

        block_of: Dict[int, int] = {}
        for index, block in enumerate(blocks):
            for state in block:
                block_of[state] = index

        transitions = []
        for index, block in enumerate(blocks):
            representative = min(block)
            for sym in dfa.alphabet:
                transitions.append((index, sym, block_of[dfa.transition(representative, sym)]))

        accept = [index for index, block in enumerate(blocks) if block & dfa.accept]

        minimized = DFA.new(len(blocks), dfa.alphabet, transitions, block_of[dfa.start], accept)
        self._log(f"Minimized {dfa.num_states} states to {len(blocks)}")
        return minimized


_optimizer = DFAOptimizer()


def find_reachable_states(dfa: DFA) -> FrozenSet[int]:
    return _optimizer.find_reachable_states(dfa)


def is_empty(dfa: DFA) -> bool:
    return _optimizer.is_empty(dfa)


def minimize_dfa(dfa: DFA, verbose: bool = False) -> DFA:
    """
    Convenience function to minimize a DFA.

    Usage:
        from hephaestus.optimizer import minimize_dfa
        smaller = minimize_dfa(original_dfa)
    """
    optimizer = DFAOptimizer(verbose=verbose) if verbose else _optimizer
    return optimizer.minimize(dfa)
