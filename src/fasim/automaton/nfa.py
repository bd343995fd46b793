"""Non-deterministic finite automaton evaluation.

The active states are tracked as a set (subset simulation). There are no
epsilon transitions: a state is only ever reached by consuming a symbol.
"""

from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    AbstractSet,
    Any,
    Dict,
    FrozenSet,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Set,
    Tuple,
)

from fasim.automaton.model import AutomatonModel
from fasim.automaton.table import cell, defined, destinations, index_map
from fasim.automaton.validation import check_dict, structural_problems
from fasim.diagnostics.trace import RejectReason, Step, Trace
from fasim.exceptions import AutomatonError

if TYPE_CHECKING:
    from fasim.automaton.dfa import DFA
    from fasim.config import Config

# transitions[state_pos][symbol_pos] -> destination names
NFATable = Sequence[Optional[Sequence[Optional[Iterable[Optional[str]]]]]]


def step(
    active: Iterable[str],
    col: int,
    state_index: Mapping[str, int],
    transitions: NFATable,
) -> Set[str]:
    """Compute the states reachable from ``active`` on the symbol in column ``col``.

    Active states that are not declared contribute nothing.
    """
    reached: Set[str] = set()
    for state in active:
        row = state_index.get(state)
        if row is not None:
            reached |= destinations(cell(transitions, row, col))
    return reached


def simulate_nfa(
    states: Sequence[str],
    alphabet: Sequence[str],
    transitions: NFATable,
    start_state: str,
    accept_states: Sequence[str],
    word: Sequence[str],
) -> bool:
    """Run an NFA over ``word`` and decide acceptance.

    Args:
        states: State names; the position of a name selects its table row.
        alphabet: Input symbols; the position selects the table column.
        transitions: ``transitions[state][symbol]`` collection of destination
            names. None entries, duplicates and empty names are ignored.
        start_state: Name of the initial state.
        accept_states: Names of the accepting states.
        word: A string, or any sequence of symbols.

    Returns:
        True if some run ends in an accepting state. An unknown symbol or an
        empty set of active states rejects immediately.
    """
    symbol_index = index_map(alphabet)
    state_index = index_map(states)
    active = {start_state}

    for symbol in word:
        col = symbol_index.get(symbol)
        if col is None:
            return False
        active = step(active, col, state_index, transitions)
        if not active:
            return False

    return not active.isdisjoint(accept_states)


def trace_nfa(
    states: Sequence[str],
    alphabet: Sequence[str],
    transitions: NFATable,
    start_state: str,
    accept_states: Sequence[str],
    word: Sequence[str],
) -> Trace:
    """Run an NFA like :func:`simulate_nfa`, recording the active set per step."""
    symbol_index = index_map(alphabet)
    state_index = index_map(states)
    active: FrozenSet[str] = frozenset([start_state])
    trace = Trace(word=word, initial=active)

    for i, symbol in enumerate(word):
        col = symbol_index.get(symbol)
        if col is None:
            return trace.halt(RejectReason.UNKNOWN_SYMBOL, i)
        reached = frozenset(step(active, col, state_index, transitions))
        if not reached:
            return trace.halt(RejectReason.NO_ACTIVE_STATES, i)
        trace.steps.append(Step(position=i, symbol=symbol, source=active, target=reached))
        active = reached

    return trace.finish(not active.isdisjoint(accept_states))


@dataclass(frozen=True)
class NFA(AutomatonModel):
    """Non-deterministic Finite Automaton description.

    A plain value bundling the arguments of :func:`simulate_nfa`. Destination
    collections are stored as tuples in the order given.
    """

    states: Tuple[str, ...]
    alphabet: Tuple[str, ...]
    transitions: Tuple[Tuple[Tuple[str, ...], ...], ...]
    start_state: str
    accept_states: Tuple[str, ...] = ()

    @classmethod
    def create(
        cls,
        states: Sequence[str],
        alphabet: Sequence[str],
        transitions: NFATable,
        start_state: str,
        accept_states: Sequence[str] = (),
    ) -> "NFA":
        """Build an NFA from any sequences, freezing them into tuples."""
        table = tuple(
            tuple(tuple(entry) if entry is not None else () for entry in row)
            if row is not None
            else ()
            for row in transitions
        )
        return cls(
            states=tuple(states),
            alphabet=tuple(alphabet),
            transitions=table,
            start_state=start_state,
            accept_states=tuple(accept_states),
        )

    @classmethod
    def from_mapping(
        cls,
        states: Sequence[str],
        alphabet: Sequence[str],
        delta: Mapping[Tuple[str, str], Iterable[str]],
        start_state: str,
        accept_states: Sequence[str] = (),
    ) -> "NFA":
        """Build an NFA from a ``{(state, symbol): destinations}`` mapping.

        Raises:
            AutomatonError: If a key names an undeclared state or symbol.
        """
        state_index = index_map(states)
        symbol_index = index_map(alphabet)
        table: List[List[List[str]]] = [[[] for _ in alphabet] for _ in states]
        problems: List[str] = []

        for (state, symbol), targets in delta.items():
            if state not in state_index:
                problems.append(f"transition from unknown state {state!r}")
            elif symbol not in symbol_index:
                problems.append(f"transition on unknown symbol {symbol!r}")
            else:
                entry = table[state_index[state]][symbol_index[symbol]]
                for target in targets:
                    if target not in entry:
                        entry.append(target)

        if problems:
            raise AutomatonError(problems)
        return cls.create(states, alphabet, table, start_state, accept_states)

    @property
    def delta(self) -> Dict[Tuple[str, str], FrozenSet[str]]:
        """Non-empty transitions keyed by ``(state, symbol)``."""
        result: Dict[Tuple[str, str], FrozenSet[str]] = {}
        for state, row in index_map(self.states).items():
            for symbol, col in index_map(self.alphabet).items():
                targets = destinations(cell(self.transitions, row, col))
                if targets:
                    result[(state, symbol)] = frozenset(targets)
        return result

    def accepts(self, word: Sequence[str]) -> bool:
        return simulate_nfa(*self._args(), word)

    def trace(self, word: Sequence[str]) -> Trace:
        return trace_nfa(*self._args(), word)

    def _args(self) -> Tuple[Any, ...]:
        return (
            self.states,
            self.alphabet,
            self.transitions,
            self.start_state,
            self.accept_states,
        )

    def _empty_entry(self) -> Tuple[str, ...]:
        return ()

    def _drop_target(self, entry: Iterable[str], state: str) -> Tuple[str, ...]:
        return tuple(target for target in entry if target != state)

    def with_transition(self, source: str, symbol: str, target: str) -> "NFA":
        """Add ``target`` to the destinations of ``(source, symbol)``.

        Ignored unless both states are declared and ``symbol`` is in the
        alphabet, or when the transition already exists.
        """
        if (
            source not in self.states
            or target not in self.states
            or symbol not in self.alphabet
        ):
            return self
        table = self._table()
        row = table[self.states.index(source)]
        col = self.alphabet.index(symbol)
        if target in row[col]:
            return self
        row[col] = tuple(row[col]) + (target,)
        return self._replace(transitions=table)

    def without_transition(self, source: str, symbol: str, target: str) -> "NFA":
        """Remove ``target`` from the destinations of ``(source, symbol)``."""
        if source not in self.states or symbol not in self.alphabet:
            return self
        table = self._table()
        row = table[self.states.index(source)]
        col = self.alphabet.index(symbol)
        if target not in row[col]:
            return self
        row[col] = self._drop_target(row[col], target)
        return self._replace(transitions=table)

    def is_deterministic(self) -> bool:
        """Whether no (state, symbol) pair has more than one destination."""
        return all(len(targets) <= 1 for targets in self.delta.values())

    def reachable(self) -> AbstractSet[str]:
        """Names reachable from the start state, the start state included."""
        state_index = index_map(self.states)
        seen = {self.start_state}
        frontier = [self.start_state]
        while frontier:
            state = frontier.pop()
            for col in range(len(self.alphabet)):
                for target in step([state], col, state_index, self.transitions):
                    if target not in seen:
                        seen.add(target)
                        frontier.append(target)
        return frozenset(seen)

    def validate(self) -> None:
        """Check the description is well formed.

        Raises:
            AutomatonError: Listing every problem found.
        """
        problems = structural_problems(*self._args())
        known = set(self.states)
        for (state, symbol), targets in self.delta.items():
            for target in sorted(targets - known):
                problems.append(
                    f"transition {state!r} --{symbol}--> unknown state {target!r}"
                )
        if problems:
            raise AutomatonError(problems)

    def to_dfa(self, config: Optional["Config"] = None) -> "DFA":
        """Convert to an equivalent DFA using the powerset construction."""
        from fasim.automaton.powerset import convert_nfa_to_dfa

        return convert_nfa_to_dfa(*self._args(), config=config)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        transitions: Dict[str, Dict[str, List[str]]] = {}
        for state, row in index_map(self.states).items():
            transitions[state] = {
                symbol: [t for t in (cell(self.transitions, row, col) or ()) if defined(t)]
                for symbol, col in index_map(self.alphabet).items()
            }
        return {
            "type": "nfa",
            "states": list(self.states),
            "alphabet": list(self.alphabet),
            "transitions": transitions,
            "initialState": self.start_state,
            "acceptingStates": list(self.accept_states),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "NFA":
        """Create an NFA from the output of :meth:`to_dict`.

        Raises:
            AutomatonError: If the dict is not an NFA description.
        """
        check_dict(data, "nfa")
        rows = data["transitions"]
        table = [
            [(rows.get(state) or {}).get(symbol) or [] for symbol in data["alphabet"]]
            for state in data["states"]
        ]
        return cls.create(
            data["states"],
            data["alphabet"],
            table,
            data["initialState"],
            data.get("acceptingStates") or (),
        )
