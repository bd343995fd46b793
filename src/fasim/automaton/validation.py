"""Structural checks shared by the DFA and NFA descriptions."""

from typing import Any, List, Mapping, Sequence

from fasim.exceptions import AutomatonError

REQUIRED_KEYS = ("type", "states", "alphabet", "transitions", "initialState")


def check_dict(data: Mapping[str, Any], kind: str) -> None:
    """Ensure ``data`` is a serialized automaton of the given ``kind``.

    A null transition row or a null ``acceptingStates`` is read as empty;
    any other value of the wrong shape is reported.

    Raises:
        AutomatonError: On a missing key, a type mismatch or a value of the
            wrong shape.
    """
    if not isinstance(data, Mapping):
        raise AutomatonError([f"expected a mapping, got {type(data).__name__}"])
    missing = [key for key in REQUIRED_KEYS if key not in data]
    if missing:
        raise AutomatonError(f"missing key {key!r}" for key in missing)
    if data["type"] != kind:
        raise AutomatonError([f"expected type {kind!r}, got {data['type']!r}"])

    problems: List[str] = []
    for key in ("states", "alphabet"):
        if not isinstance(data[key], (list, tuple)):
            problems.append(f"{key!r} must be a list")
    accepting = data.get("acceptingStates")
    if accepting is not None and not isinstance(accepting, (list, tuple)):
        problems.append("'acceptingStates' must be a list")
    rows = data["transitions"]
    if not isinstance(rows, Mapping):
        problems.append("'transitions' must be a mapping")
    else:
        for state, row in rows.items():
            if row is not None and not isinstance(row, Mapping):
                problems.append(f"transition row for {state!r} must be a mapping")
    if problems:
        raise AutomatonError(problems)


def structural_problems(
    states: Sequence[str],
    alphabet: Sequence[str],
    transitions: Sequence[Any],
    start_state: str,
    accept_states: Sequence[str],
) -> List[str]:
    """List problems common to both kinds of automaton.

    Destination names are not checked here since their shape differs.
    """
    problems: List[str] = []
    if not states:
        problems.append("states must not be empty")
    if not alphabet:
        problems.append("alphabet must not be empty")
    if len(set(states)) != len(states):
        problems.append("states must be unique")
    if len(set(alphabet)) != len(alphabet):
        problems.append("alphabet symbols must be unique")

    known = set(states)
    if start_state not in known:
        problems.append(f"start state {start_state!r} is not in states")
    for state in accept_states:
        if state not in known:
            problems.append(f"accept state {state!r} is not in states")

    if len(transitions) != len(states):
        problems.append(
            f"transition table has {len(transitions)} rows for {len(states)} states"
        )
    for row, line in enumerate(transitions[: len(states)]):
        if line is not None and len(line) != len(alphabet):
            problems.append(
                f"transition row for {states[row]!r} has {len(line)} entries "
                f"for {len(alphabet)} symbols"
            )
    return problems
