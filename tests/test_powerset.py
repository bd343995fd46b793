"""Tests for the powerset construction.

The central property: the converted DFA accepts exactly the inputs the
source NFA accepts.
"""

import itertools
import logging
import random

import pytest

from fasim import Config, ConversionLimitError, NFA, convert_nfa_to_dfa, simulate_nfa


def words(alphabet, max_length):
    for length in range(max_length + 1):
        for letters in itertools.product(alphabet, repeat=length):
            yield "".join(letters)


def assert_equivalent(nfa, dfa, alphabet, max_length=6):
    for word in words(alphabet, max_length):
        expected = simulate_nfa(
            nfa.states,
            nfa.alphabet,
            nfa.transitions,
            nfa.start_state,
            nfa.accept_states,
            word,
        )
        assert dfa.accepts(word) == expected, f"disagree on {word!r}"


def random_nfa(seed, n_states=4, alphabet=("a", "b"), density=0.3):
    rng = random.Random(seed)
    states = [f"s{i}" for i in range(n_states)]
    table = [
        [[t for t in states if rng.random() < density] for _ in alphabet]
        for _ in states
    ]
    accept = [s for s in states if rng.random() < 0.4]
    return NFA.create(states, alphabet, table, states[0], accept)


class TestContains01:
    def test_subset_states(self, contains_01):
        dfa = contains_01.to_dfa()

        assert dfa.states == ("{A}", "{A,B}", "{A,C}", "{A,B,C}")
        assert dfa.start_state == "{A}"
        assert dfa.accept_states == ("{A,C}", "{A,B,C}")
        assert dfa.transitions == (
            ("{A,B}", "{A}"),
            ("{A,B}", "{A,C}"),
            ("{A,B,C}", "{A,C}"),
            ("{A,B,C}", "{A,C}"),
        )
        assert dfa.is_complete()

    def test_equivalent(self, contains_01):
        assert_equivalent(contains_01, contains_01.to_dfa(), "01x")

    def test_function_matches_method(self, contains_01):
        dfa = convert_nfa_to_dfa(
            contains_01.states,
            contains_01.alphabet,
            contains_01.transitions,
            contains_01.start_state,
            contains_01.accept_states,
        )
        assert dfa == contains_01.to_dfa()

    def test_result_validates(self, contains_01):
        contains_01.to_dfa().validate()


class TestEmptySubset:
    """A step to no NFA state becomes an undefined DFA transition."""

    def test_exact_word(self):
        nfa = NFA.from_mapping(
            ["p", "q", "r"], ["a", "b"], {("p", "a"): ["q"], ("q", "b"): ["r"]}, "p", ["r"]
        )
        dfa = nfa.to_dfa()

        assert dfa.states == ("{p}", "{q}", "{r}")
        assert dfa.transitions == (("{q}", None), (None, "{r}"), (None, None))
        assert not dfa.is_complete()
        assert dfa.accepts("ab")
        assert not dfa.accepts("abb")
        assert_equivalent(nfa, dfa, "ab")

    def test_undeclared_start_state(self):
        nfa = NFA.create(["A"], ["a"], [[["A"]]], "Z", ["Z"])
        dfa = nfa.to_dfa()

        assert dfa.states == ("{Z}",)
        assert dfa.accepts("")
        assert not dfa.accepts("a")


class TestEmptyInput:
    @pytest.mark.parametrize("accept,expected", [(["A"], True), (["B"], False)])
    def test_start_acceptance_preserved(self, accept, expected):
        nfa = NFA.create(["A", "B"], ["a"], [[["B"]], [["A"]]], "A", accept)
        assert nfa.to_dfa().accepts("") is expected


class TestUndeclaredDestinations:
    def test_undeclared_destination_accepts_then_dies(self):
        nfa = NFA.create(["A"], ["0"], [[["Z"]]], "A", ["Z"])
        dfa = nfa.to_dfa()

        assert dfa.states == ("{A}", "{Z}")
        assert dfa.accept_states == ("{Z}",)
        assert dfa.accepts("0")
        assert not dfa.accepts("00")
        assert_equivalent(nfa, dfa, "0")

    def test_undeclared_members_listed_last(self):
        nfa = NFA.create(["B", "A"], ["0"], [[["Y", "A", "B"]], [[]]], "B", [])
        dfa = nfa.to_dfa()

        assert dfa.states == ("{B}", "{B,A,Y}")


class TestNaming:
    def test_collision_is_disambiguated(self):
        nfa = NFA.from_mapping(
            states=["S", "A,B", "A", "B"],
            alphabet=["x", "y"],
            delta={("S", "x"): ["A,B"], ("S", "y"): ["A", "B"]},
            start_state="S",
            accept_states=["A,B"],
        )
        dfa = nfa.to_dfa()

        assert dfa.states == ("{S}", "{A,B}", "{A,B}'")
        assert dfa.accepts("x")
        assert not dfa.accepts("y")

    def test_non_string_names_keep_declaration_order(self):
        """Members are ordered by declaration even when names are not strings."""
        nfa = NFA.create([3, 10], ["a"], [[[10, 3]], [[10]]], 3, [10])
        dfa = nfa.to_dfa()

        assert dfa.states == ("{3}", "{3,10}")
        assert dfa.accepts("a")

    def test_custom_brackets_and_separator(self, contains_01):
        config = Config(state_separator="|", state_brackets=("[", "]"))
        dfa = contains_01.to_dfa(config)

        assert dfa.states == ("[A]", "[A|B]", "[A|C]", "[A|B|C]")


class TestAlphabet:
    def test_duplicate_symbol_columns(self):
        nfa = NFA.create(
            ["A", "B"],
            ["a", "b", "a"],
            [[["A", "B"], ["A"], ["B"]], [[], ["B"], []]],
            "A",
            ["B"],
        )
        dfa = nfa.to_dfa()

        assert dfa.alphabet == ("a", "b", "a")
        assert_equivalent(nfa, dfa, "ab")

    def test_alphabet_preserved(self, contains_01):
        assert contains_01.to_dfa().alphabet == contains_01.alphabet


class TestLimit:
    def test_full_construction(self, third_from_last_is_one):
        dfa = third_from_last_is_one.to_dfa()

        assert len(dfa.states) == 8
        assert_equivalent(third_from_last_is_one, dfa, "01", max_length=7)

    def test_limit_exceeded(self, third_from_last_is_one):
        with pytest.raises(ConversionLimitError) as exc_info:
            third_from_last_is_one.to_dfa(Config(max_dfa_states=4))

        assert exc_info.value.limit == 4
        assert "limit 4" in str(exc_info.value)

    def test_limit_exactly_met(self, third_from_last_is_one):
        dfa = third_from_last_is_one.to_dfa(Config(max_dfa_states=8))
        assert len(dfa.states) == 8


class TestRandomEquivalence:
    """Equivalence over randomly generated NFAs."""

    @pytest.mark.parametrize("seed", range(25))
    def test_random_nfa(self, seed):
        nfa = random_nfa(seed)
        assert_equivalent(nfa, nfa.to_dfa(), "abc", max_length=5)

    @pytest.mark.parametrize("seed", range(5))
    def test_random_nfa_is_deterministic(self, seed):
        nfa = random_nfa(seed, n_states=6)
        assert nfa.to_dfa() == nfa.to_dfa()


class TestLogging:
    def test_debug_summary(self, contains_01, caplog):
        caplog.set_level(logging.DEBUG, logger="fasim.automaton.powerset")
        contains_01.to_dfa()

        assert "Converted NFA with 3 states into DFA with 4 states" in caplog.text
