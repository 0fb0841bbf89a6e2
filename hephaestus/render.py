"""
Diagnostic rendering for automata: a plain-text transition table and a
graphviz Digraph. Only public accessors are used.
"""

from collections import defaultdict
from typing import Dict, List, Tuple

from graphviz import Digraph

from .models import Automaton
from .nfa import NFA


def _set_text(states) -> str:
    return "{" + ", ".join(str(s) for s in sorted(states)) + "}"


def format_table(automaton: Automaton) -> str:
    """
    Render alphabet, start, accept set and the sorted transition table:

        Alphabet: [a, b]
        Start State: 0
        Accept States: {0}
        Transitions:
          (0, 'a') -> 0
          (0, 'b') -> 0

    NFA rows show the destination set, e.g. ``(0, 'a') -> {1, 2}``.
    """
    lines = [
        "Alphabet: [" + ", ".join(str(sym) for sym in automaton.alphabet) + "]",
        f"Start State: {automaton.start}",
        f"Accept States: {_set_text(automaton.accept)}",
        "Transitions:",
    ]

    if isinstance(automaton, NFA):
        grouped: Dict[Tuple[int, str], List[int]] = defaultdict(list)
        for curr, sym, nxt in automaton.transitions():
            grouped[(curr, sym)].append(nxt)
        for (curr, sym) in sorted(grouped, key=lambda k: (k[0], str(k[1]))):
            lines.append(f"  ({curr}, '{sym}') -> {_set_text(grouped[(curr, sym)])}")
    else:
        for curr, sym, nxt in automaton.transitions():
            lines.append(f"  ({curr}, '{sym}') -> {nxt}")

    return "\n".join(lines) + "\n"


def to_digraph(automaton: Automaton, comment: str = "Automaton") -> Digraph:
    """Build (but do not render) a left-to-right graphviz diagram."""
    dot = Digraph(comment=comment)
    dot.attr(rankdir='LR')

    # Start Pointer
    dot.node('start_ptr', '', shape='none')
    dot.edge('start_ptr', str(automaton.start))

    # Nodes
    for state in range(automaton.num_states):
        shape = 'doublecircle' if state in automaton.accept else 'circle'
        dot.node(str(state), str(state), shape=shape)

    # Edges, parallel ones merged into a single comma-separated label
    labels: Dict[Tuple[int, int], List[str]] = defaultdict(list)
    for curr, sym, nxt in automaton.transitions():
        labels[(curr, nxt)].append(str(sym))
    for (curr, nxt), symbols in sorted(labels.items()):
        dot.edge(str(curr), str(nxt), label=",".join(symbols))

    return dot
