"""NFA to DFA conversion using the powerset (subset) construction."""

import logging
from collections import deque
from typing import Deque, Dict, FrozenSet, List, Mapping, Optional, Sequence, Set, Tuple

from fasim.automaton.dfa import DFA
from fasim.automaton.nfa import NFATable, step
from fasim.automaton.table import index_map
from fasim.config import Config
from fasim.exceptions import ConversionLimitError

logger = logging.getLogger(__name__)

Subset = FrozenSet[str]


def convert_nfa_to_dfa(
    states: Sequence[str],
    alphabet: Sequence[str],
    transitions: NFATable,
    start_state: str,
    accept_states: Sequence[str],
    config: Optional[Config] = None,
) -> DFA:
    """Convert an NFA description into an equivalent DFA.

    Each DFA state stands for one set of NFA states reachable from
    ``{start_state}``. Subsets are discovered breadth-first, trying symbols in
    alphabet order, so the resulting state order is deterministic. A symbol
    that leads to no NFA state at all is left without a transition, which
    rejects just like an NFA run whose active set becomes empty.

    Args:
        states: NFA state names.
        alphabet: Input symbols; reused unchanged as the DFA alphabet.
        transitions: NFA table, ``transitions[state][symbol]`` destinations.
        start_state: NFA start state.
        accept_states: NFA accept states.
        config: Limits and naming; defaults to ``Config.default()``.

    Returns:
        A DFA accepting exactly the inputs :func:`simulate_nfa` accepts.

    Raises:
        ConversionLimitError: If more than ``config.max_dfa_states`` subsets
            are reachable.
    """
    config = config or Config.default()
    state_index = index_map(states)
    symbol_index = index_map(alphabet)
    columns = sorted(set(symbol_index.values()))

    init: Subset = frozenset([start_state])
    queue: Deque[Subset] = deque([init])
    order: List[Subset] = [init]
    seen: Set[Subset] = {init}
    delta: Dict[Tuple[Subset, int], Subset] = {}

    while queue:
        qs = queue.popleft()
        for col in columns:
            target = frozenset(step(qs, col, state_index, transitions))
            if not target:
                continue
            delta[(qs, col)] = target
            if target not in seen:
                if len(seen) >= config.max_dfa_states:
                    logger.debug(
                        "Powerset construction stopped after %d subsets", len(seen)
                    )
                    raise ConversionLimitError(
                        "Too many DFA states in powerset construction",
                        limit=config.max_dfa_states,
                    )
                seen.add(target)
                order.append(target)
                queue.append(target)

    names = _name_subsets(order, state_index, config)
    accepting = set(accept_states)

    table: List[List[Optional[str]]] = []
    for qs in order:
        row: List[Optional[str]] = []
        for symbol in alphabet:
            target = delta.get((qs, symbol_index[symbol]))
            row.append(names[target] if target is not None else None)
        table.append(row)

    logger.debug(
        "Converted NFA with %d states into DFA with %d states",
        len(states),
        len(order),
    )
    return DFA.create(
        states=[names[qs] for qs in order],
        alphabet=alphabet,
        transitions=table,
        start_state=names[init],
        accept_states=[names[qs] for qs in order if not qs.isdisjoint(accepting)],
    )


def _name_subsets(
    subsets: Sequence[Subset], state_index: Mapping[str, int], config: Config
) -> Dict[Subset, str]:
    """Give every subset a distinct, readable name such as ``{A,B}``.

    Members are listed in declaration order; undeclared names come last.
    """
    unknown = len(state_index)
    names: Dict[Subset, str] = {}
    used: Set[str] = set()

    for qs in subsets:
        members = sorted(
            qs, key=lambda member: (state_index.get(member, unknown), str(member))
        )
        name = config.subset_name(tuple(str(member) for member in members))
        while name in used:
            name += "'"
        used.add(name)
        names[qs] = name

    return names
