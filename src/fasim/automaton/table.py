"""Lookup helpers shared by the evaluators and the converter.

Transition tables are addressed by position: the row is the state's position
in the states sequence, the column is the symbol's position in the alphabet.
Both positions are resolved by first occurrence, which is what a left-to-right
scan of the sequence would find.
"""

from typing import Any, Dict, Hashable, Iterable, List, Optional, Sequence, Set, TypeVar

T = TypeVar("T", bound=Hashable)


def index_map(items: Sequence[T]) -> Dict[T, int]:
    """Map each item to the position of its first occurrence."""
    positions: Dict[T, int] = {}
    for i, item in enumerate(items):
        if item not in positions:
            positions[item] = i
    return positions


def cell(table: Sequence[Optional[Sequence[Any]]], row: int, col: int) -> Any:
    """Return ``table[row][col]``, or None when the entry does not exist.

    Ragged tables are allowed: a missing or None row, or a row shorter than
    the alphabet, simply has no entry.
    """
    if row >= len(table):
        return None
    line = table[row]
    if line is None or col >= len(line):
        return None
    return line[col]


def defined(name: Optional[str]) -> bool:
    """Whether a destination name denotes an actual transition."""
    return name is not None and name != ""


def destinations(entry: Optional[Iterable[Optional[str]]]) -> Set[str]:
    """Collect the usable destination names of an NFA table entry."""
    if entry is None:
        return set()
    return {name for name in entry if defined(name)}


def grid(table: Sequence[Optional[Sequence[Any]]], rows: int, cols: int) -> List[List[Any]]:
    """Copy ``table`` into a full ``rows`` x ``cols`` list of lists.

    Missing entries of a ragged table come out as None.
    """
    return [[cell(table, row, col) for col in range(cols)] for row in range(rows)]
