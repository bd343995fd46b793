"""Automaton module: evaluators, value types and conversion."""

from fasim.automaton.dfa import DFA, simulate_dfa, trace_dfa
from fasim.automaton.nfa import NFA, simulate_nfa, trace_nfa
from fasim.automaton.powerset import convert_nfa_to_dfa

__all__ = [
    "DFA",
    "NFA",
    "simulate_dfa",
    "simulate_nfa",
    "trace_dfa",
    "trace_nfa",
    "convert_nfa_to_dfa",
]
