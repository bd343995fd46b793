"""
fasim - finite automaton simulation.

Evaluates deterministic (DFA) and non-deterministic (NFA) finite automata
over a finite alphabet, and converts NFAs into equivalent DFAs using the
powerset construction.

Example usage:
    >>> from fasim import simulate_dfa
    >>> simulate_dfa(
    ...     ["S0", "S1"], ["0", "1"],
    ...     [["S0", "S1"], ["S0", "S1"]],
    ...     "S0", ["S1"], "101",
    ... )
    True

Working with value types:
    >>> from fasim import NFA
    >>> nfa = NFA.from_mapping(
    ...     ["A", "B"], ["a"], {("A", "a"): ["A", "B"]}, "A", ["B"]
    ... )
    >>> nfa.accepts("aa"), nfa.to_dfa().accepts("aa")
    (True, True)
"""

import logging

from fasim.automaton.dfa import DFA, simulate_dfa, trace_dfa
from fasim.automaton.nfa import NFA, simulate_nfa, trace_nfa
from fasim.automaton.powerset import convert_nfa_to_dfa
from fasim.config import Config
from fasim.diagnostics.trace import RejectReason, Status, Step, Trace
from fasim.exceptions import AutomatonError, ConversionLimitError, FasimError

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Evaluation
    "simulate_dfa",
    "simulate_nfa",
    "trace_dfa",
    "trace_nfa",
    # Conversion
    "convert_nfa_to_dfa",
    # Automata
    "DFA",
    "NFA",
    # Configuration
    "Config",
    # Diagnostics
    "Trace",
    "Step",
    "Status",
    "RejectReason",
    # Exceptions
    "FasimError",
    "AutomatonError",
    "ConversionLimitError",
    # Version
    "__version__",
]
