"""Editing operations shared by the DFA and NFA values.

The values are frozen, so every edit returns a new automaton. An edit that
names an unknown state or symbol, or that would change nothing, returns the
automaton unchanged.
"""

from typing import Any, List, TypeVar

from fasim.automaton.table import grid

A = TypeVar("A", bound="AutomatonModel")


class AutomatonModel:
    """Base of :class:`DFA` and :class:`NFA`.

    Subclasses are frozen dataclasses with ``states``, ``alphabet``,
    ``transitions``, ``start_state`` and ``accept_states`` fields and a
    ``create`` classmethod taking them in that order.
    """

    def _empty_entry(self) -> Any:
        """Table entry meaning "no transition"."""
        raise NotImplementedError

    def _drop_target(self, entry: Any, state: str) -> Any:
        """Return ``entry`` without any transition into ``state``."""
        raise NotImplementedError

    def _table(self) -> List[List[Any]]:
        """Mutable copy of the table, padded to the declared shape."""
        empty = self._empty_entry()
        return [
            [empty if entry is None else entry for entry in row]
            for row in grid(self.transitions, len(self.states), len(self.alphabet))
        ]

    def _replace(self: A, **changes: Any) -> A:
        fields = {
            "states": self.states,
            "alphabet": self.alphabet,
            "transitions": self.transitions,
            "start_state": self.start_state,
            "accept_states": self.accept_states,
        }
        fields.update(changes)
        return self.create(**fields)

    def is_accepting(self, state: str) -> bool:
        return state in self.accept_states

    def with_state(self: A, state: str) -> A:
        """Add ``state`` with no outgoing transitions."""
        if state in self.states:
            return self
        table = self._table()
        table.append([self._empty_entry() for _ in self.alphabet])
        return self._replace(states=self.states + (state,), transitions=table)

    def without_state(self: A, state: str) -> A:
        """Remove ``state`` along with every transition into or out of it.

        A removed start state is replaced by the first remaining state; when
        no state remains the start state is kept as is.
        """
        if state not in self.states:
            return self
        kept = [row for row, name in enumerate(self.states) if name != state]
        table = self._table()
        states = tuple(self.states[row] for row in kept)
        start = self.start_state
        if start == state and states:
            start = states[0]
        return self._replace(
            states=states,
            transitions=[
                [self._drop_target(entry, state) for entry in table[row]] for row in kept
            ],
            start_state=start,
            accept_states=tuple(s for s in self.accept_states if s != state),
        )

    def with_symbol(self: A, symbol: str) -> A:
        """Add ``symbol`` to the alphabet with no transitions on it."""
        if symbol in self.alphabet:
            return self
        table = self._table()
        for row in table:
            row.append(self._empty_entry())
        return self._replace(alphabet=self.alphabet + (symbol,), transitions=table)

    def without_symbol(self: A, symbol: str) -> A:
        """Remove ``symbol`` and its column of transitions."""
        if symbol not in self.alphabet:
            return self
        kept = [col for col, name in enumerate(self.alphabet) if name != symbol]
        return self._replace(
            alphabet=tuple(self.alphabet[col] for col in kept),
            transitions=[[row[col] for col in kept] for row in self._table()],
        )

    def with_start(self: A, state: str) -> A:
        """Make ``state`` the start state; undeclared states are ignored."""
        if state not in self.states:
            return self
        return self._replace(start_state=state)

    def toggle_accepting(self: A, state: str) -> A:
        """Flip whether ``state`` accepts.

        An accepting state is always removed; a non-accepting one is only
        added when declared.
        """
        if state in self.accept_states:
            accept = tuple(s for s in self.accept_states if s != state)
        elif state in self.states:
            accept = self.accept_states + (state,)
        else:
            return self
        return self._replace(accept_states=accept)
