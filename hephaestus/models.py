from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, FrozenSet, Hashable, Iterable, List, NamedTuple, Optional, Tuple, Union

from pydantic import BaseModel, Field, field_validator, model_validator

if TYPE_CHECKING:
    from .dfa import DFA
    from .nfa import NFA

Symbol = Hashable
Alphabet = Tuple[Symbol, ...]


class Transition(NamedTuple):
    source: int
    symbol: Any
    destination: int


def normalize_alphabet(alphabet: Iterable[Symbol]) -> Alphabet:
    """Sorted, de-duplicated alphabet; the canonical form used for comparisons."""
    return tuple(sorted(set(alphabet)))


def same_alphabet(a1: Iterable[Symbol], a2: Iterable[Symbol]) -> bool:
    return normalize_alphabet(a1) == normalize_alphabet(a2)


class Automaton(ABC):
    """
    Read-only surface shared by DFA and NFA.

    Subclasses decide membership through ``run``, which answers True
    (accepted), False (rejected) or None (input uses a symbol outside the
    alphabet).
    """

    _num_states: int
    _alphabet: Alphabet
    _start: int
    _accept: FrozenSet[int]

    @property
    def num_states(self) -> int:
        return self._num_states

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def start(self) -> int:
        return self._start

    @property
    def accept(self) -> FrozenSet[int]:
        return self._accept

    @abstractmethod
    def run(self, string: Iterable[Symbol]) -> Optional[bool]:
        ...

    @abstractmethod
    def transitions(self) -> List[Transition]:
        ...

    def accepts(self, string: Iterable[Symbol]) -> bool:
        """True only for accepted input; invalid input counts as not accepted."""
        return self.run(string) is True

    def __str__(self) -> str:
        from .render import format_table
        return format_table(self)


class AutomatonSpec(BaseModel):
    """
    Serializable description of a DFA or NFA.

    Mirrors the constructor arguments so definitions can travel as JSON
    and be rebuilt through the validating constructors.
    """
    kind: str = Field(default="dfa", description="'dfa' or 'nfa'")
    num_states: int = Field(..., ge=0)
    alphabet: List[str]
    transitions: List[Tuple[int, str, int]] = Field(default=[])
    start: int = Field(default=0)
    accept: List[int] = Field(default=[])
    epsilon: str = Field(default="_", description="Epsilon sentinel, NFA only")

    @field_validator("kind")
    @classmethod
    def normalize_kind(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ("dfa", "nfa"):
            raise ValueError(f"Unknown automaton kind '{v}'")
        return v

    @field_validator("alphabet")
    @classmethod
    def single_characters(cls, v: List[str]) -> List[str]:
        for sym in v:
            if len(sym) != 1:
                raise ValueError(f"Alphabet symbols must be single characters, got '{sym}'")
        return v

    @model_validator(mode='after')
    def validate_epsilon(self):
        if len(self.epsilon) != 1:
            raise ValueError("Epsilon must be a single character")
        return self

    def build(self) -> "Union[DFA, NFA]":
        """Construct the engine object. ConstructionError propagates."""
        if self.kind == "dfa":
            from .dfa import DFA
            return DFA.new(self.num_states, self.alphabet, self.transitions, self.start, self.accept)
        from .nfa import NFA
        return NFA.new(
            self.num_states,
            self.alphabet,
            self.transitions,
            self.start,
            self.accept,
            epsilon=self.epsilon,
        )

    @classmethod
    def from_automaton(cls, automaton: Automaton) -> "AutomatonSpec":
        from .nfa import NFA
        is_nfa = isinstance(automaton, NFA)
        return cls(
            kind="nfa" if is_nfa else "dfa",
            num_states=automaton.num_states,
            alphabet=list(automaton.alphabet),
            transitions=[tuple(t) for t in automaton.transitions()],
            start=automaton.start,
            accept=sorted(automaton.accept),
            epsilon=automaton.epsilon if is_nfa else "_",
        )
