"""Shared automata used across the test suite."""

import pytest

from fasim import DFA, NFA


@pytest.fixture
def ends_in_one():
    """Binary strings ending in '1'."""
    return DFA.create(
        states=["S0", "S1"],
        alphabet=["0", "1"],
        transitions=[["S0", "S1"], ["S0", "S1"]],
        start_state="S0",
        accept_states=["S1"],
    )


@pytest.fixture
def contains_01():
    """Binary strings containing the substring '01'."""
    return NFA.create(
        states=["A", "B", "C"],
        alphabet=["0", "1"],
        transitions=[
            [["A", "B"], ["A"]],
            [[], ["C"]],
            [["C"], ["C"]],
        ],
        start_state="A",
        accept_states=["C"],
    )


@pytest.fixture
def third_from_last_is_one():
    """Binary strings whose third symbol from the end is '1' (8 DFA subsets)."""
    return NFA.from_mapping(
        states=["q0", "q1", "q2", "q3"],
        alphabet=["0", "1"],
        delta={
            ("q0", "0"): ["q0"],
            ("q0", "1"): ["q0", "q1"],
            ("q1", "0"): ["q2"],
            ("q1", "1"): ["q2"],
            ("q2", "0"): ["q3"],
            ("q2", "1"): ["q3"],
        },
        start_state="q0",
        accept_states=["q3"],
    )
