"""Deterministic finite automaton evaluation."""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from fasim.automaton.model import AutomatonModel
from fasim.automaton.table import cell, defined, index_map
from fasim.automaton.validation import check_dict, structural_problems
from fasim.diagnostics.trace import RejectReason, Step, Trace
from fasim.exceptions import AutomatonError

# transitions[state_pos][symbol_pos] -> destination name
DFATable = Sequence[Optional[Sequence[Optional[str]]]]


def simulate_dfa(
    states: Sequence[str],
    alphabet: Sequence[str],
    transitions: DFATable,
    start_state: str,
    accept_states: Sequence[str],
    word: Sequence[str],
) -> bool:
    """Run a DFA over ``word`` and decide acceptance.

    Every anomaly (a symbol outside the alphabet, a state that is not
    declared, an undefined transition) rejects the input instead of raising,
    so malformed and non-accepting inputs look the same to the caller.

    Args:
        states: State names; the position of a name selects its table row.
        alphabet: Input symbols; the position selects the table column.
        transitions: ``transitions[state][symbol]`` destination name, or
            None / "" where no transition is defined.
        start_state: Name of the initial state.
        accept_states: Names of the accepting states.
        word: A string, or any sequence of symbols.

    Returns:
        True if the run ends in an accepting state.
    """
    symbol_index = index_map(alphabet)
    state_index = index_map(states)
    current = start_state

    for symbol in word:
        col = symbol_index.get(symbol)
        if col is None:
            return False
        row = state_index.get(current)
        if row is None:
            return False
        current = cell(transitions, row, col)
        if not defined(current):
            return False

    return current in accept_states


def trace_dfa(
    states: Sequence[str],
    alphabet: Sequence[str],
    transitions: DFATable,
    start_state: str,
    accept_states: Sequence[str],
    word: Sequence[str],
) -> Trace:
    """Run a DFA like :func:`simulate_dfa`, recording every step.

    The returned trace is accepted exactly when :func:`simulate_dfa` returns
    True for the same arguments.
    """
    symbol_index = index_map(alphabet)
    state_index = index_map(states)
    current = start_state
    trace = Trace(word=word, initial=frozenset([start_state]))

    for i, symbol in enumerate(word):
        col = symbol_index.get(symbol)
        if col is None:
            return trace.halt(RejectReason.UNKNOWN_SYMBOL, i)
        row = state_index.get(current)
        if row is None:
            return trace.halt(RejectReason.UNKNOWN_STATE, i)
        target = cell(transitions, row, col)
        if not defined(target):
            return trace.halt(RejectReason.NO_TRANSITION, i)
        trace.steps.append(
            Step(
                position=i,
                symbol=symbol,
                source=frozenset([current]),
                target=frozenset([target]),
            )
        )
        current = target

    return trace.finish(current in accept_states)


@dataclass(frozen=True)
class DFA(AutomatonModel):
    """Deterministic Finite Automaton description.

    A plain value bundling the arguments of :func:`simulate_dfa`. Nothing is
    checked on construction; call :meth:`validate` for a structural check.
    """

    states: Tuple[str, ...]
    alphabet: Tuple[str, ...]
    transitions: Tuple[Tuple[Optional[str], ...], ...]
    start_state: str
    accept_states: Tuple[str, ...] = ()

    @classmethod
    def create(
        cls,
        states: Sequence[str],
        alphabet: Sequence[str],
        transitions: DFATable,
        start_state: str,
        accept_states: Sequence[str] = (),
    ) -> "DFA":
        """Build a DFA from any sequences, freezing them into tuples."""
        return cls(
            states=tuple(states),
            alphabet=tuple(alphabet),
            transitions=tuple(
                tuple(row) if row is not None else () for row in transitions
            ),
            start_state=start_state,
            accept_states=tuple(accept_states),
        )

    @classmethod
    def from_mapping(
        cls,
        states: Sequence[str],
        alphabet: Sequence[str],
        delta: Mapping[Tuple[str, str], str],
        start_state: str,
        accept_states: Sequence[str] = (),
    ) -> "DFA":
        """Build a DFA from a ``{(state, symbol): destination}`` mapping.

        Raises:
            AutomatonError: If a key names an undeclared state or symbol.
        """
        state_index = index_map(states)
        symbol_index = index_map(alphabet)
        table: List[List[Optional[str]]] = [[None] * len(alphabet) for _ in states]
        problems: List[str] = []

        for (state, symbol), target in delta.items():
            if state not in state_index:
                problems.append(f"transition from unknown state {state!r}")
            elif symbol not in symbol_index:
                problems.append(f"transition on unknown symbol {symbol!r}")
            else:
                table[state_index[state]][symbol_index[symbol]] = target

        if problems:
            raise AutomatonError(problems)
        return cls.create(states, alphabet, table, start_state, accept_states)

    @property
    def delta(self) -> Dict[Tuple[str, str], str]:
        """Defined transitions keyed by ``(state, symbol)``."""
        result: Dict[Tuple[str, str], str] = {}
        for state, row in index_map(self.states).items():
            for symbol, col in index_map(self.alphabet).items():
                target = cell(self.transitions, row, col)
                if defined(target):
                    result[(state, symbol)] = target
        return result

    def accepts(self, word: Sequence[str]) -> bool:
        return simulate_dfa(*self._args(), word)

    def trace(self, word: Sequence[str]) -> Trace:
        return trace_dfa(*self._args(), word)

    def _args(self) -> Tuple[Any, ...]:
        return (
            self.states,
            self.alphabet,
            self.transitions,
            self.start_state,
            self.accept_states,
        )

    def _empty_entry(self) -> None:
        return None

    def _drop_target(self, entry: Optional[str], state: str) -> Optional[str]:
        return None if entry == state else entry

    def with_transition(self, source: str, symbol: str, target: str) -> "DFA":
        """Set the destination of ``(source, symbol)`` to ``target``.

        Ignored unless both states are declared and ``symbol`` is in the
        alphabet.
        """
        if (
            source not in self.states
            or target not in self.states
            or symbol not in self.alphabet
        ):
            return self
        table = self._table()
        table[self.states.index(source)][self.alphabet.index(symbol)] = target
        return self._replace(transitions=table)

    def without_transition(self, source: str, symbol: str) -> "DFA":
        """Leave ``(source, symbol)`` without a transition."""
        if source not in self.states or symbol not in self.alphabet:
            return self
        table = self._table()
        table[self.states.index(source)][self.alphabet.index(symbol)] = None
        return self._replace(transitions=table)

    def is_complete(self) -> bool:
        """Whether every (state, symbol) pair has a transition."""
        return all(
            defined(cell(self.transitions, row, col))
            for row in range(len(self.states))
            for col in range(len(self.alphabet))
        )

    def validate(self) -> None:
        """Check the description is well formed.

        Undefined transitions are allowed (they reject); anything that makes
        a lookup ambiguous or points at an undeclared state is reported.

        Raises:
            AutomatonError: Listing every problem found.
        """
        problems = structural_problems(*self._args())
        known = set(self.states)
        for (state, symbol), target in self.delta.items():
            if target not in known:
                problems.append(
                    f"transition {state!r} --{symbol}--> unknown state {target!r}"
                )
        if problems:
            raise AutomatonError(problems)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        transitions: Dict[str, Dict[str, Optional[str]]] = {}
        for state, row in index_map(self.states).items():
            transitions[state] = {
                symbol: cell(self.transitions, row, col)
                for symbol, col in index_map(self.alphabet).items()
            }
        return {
            "type": "dfa",
            "states": list(self.states),
            "alphabet": list(self.alphabet),
            "transitions": transitions,
            "initialState": self.start_state,
            "acceptingStates": list(self.accept_states),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DFA":
        """Create a DFA from the output of :meth:`to_dict`.

        Raises:
            AutomatonError: If the dict is not a DFA description.
        """
        check_dict(data, "dfa")
        rows = data["transitions"]
        table = [
            [(rows.get(state) or {}).get(symbol) for symbol in data["alphabet"]]
            for state in data["states"]
        ]
        return cls.create(
            data["states"],
            data["alphabet"],
            table,
            data["initialState"],
            data.get("acceptingStates") or (),
        )
