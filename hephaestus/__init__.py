"""
hephaestus: deterministic and nondeterministic finite automata.
Centralized exports for the automaton engine.
"""

from .errors import (
    ConstructionError,
    ShapeError,
    InvalidStart,
    UnknownSymbol,
    UnknownState,
    DuplicateOrMissingTransition,
    ReservedSymbol,
)

from .models import (
    Automaton,
    AutomatonSpec,
    Transition,
    normalize_alphabet,
)

from .dfa import DFA
from .nfa import NFA, EPSILON

from .product import ProductConstructionEngine
from .optimizer import DFAOptimizer, minimize_dfa

from .render import format_table, to_digraph

from .config import Settings, load_settings, configure
from .logging_config import setup_logging, get_logger

__all__ = [
    # Errors
    "ConstructionError",
    "ShapeError",
    "InvalidStart",
    "UnknownSymbol",
    "UnknownState",
    "DuplicateOrMissingTransition",
    "ReservedSymbol",
    # Models
    "Automaton",
    "AutomatonSpec",
    "Transition",
    "normalize_alphabet",
    # Engines
    "DFA",
    "NFA",
    "EPSILON",
    "ProductConstructionEngine",
    "DFAOptimizer",
    "minimize_dfa",
    # Rendering
    "format_table",
    "to_digraph",
    # Configuration
    "Settings",
    "load_settings",
    "configure",
    "setup_logging",
    "get_logger",
]
