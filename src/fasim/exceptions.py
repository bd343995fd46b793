"""Custom exceptions for fasim.

Simulation never raises: these are only used by the definition helpers
(validation, construction from mappings or dicts) and by the converter.
"""

from typing import Iterable, List


class FasimError(Exception):
    """Base exception for all fasim errors."""

    pass


class AutomatonError(FasimError):
    """Raised when an automaton description is structurally invalid."""

    def __init__(self, problems: Iterable[str]) -> None:
        self.problems: List[str] = list(problems)
        super().__init__("; ".join(self.problems))

    def __str__(self) -> str:
        if len(self.problems) == 1:
            return f"Invalid automaton: {self.problems[0]}"
        joined = "; ".join(self.problems)
        return f"Invalid automaton ({len(self.problems)} problems): {joined}"


class ConversionLimitError(FasimError):
    """Raised when the powerset construction exceeds the configured size."""

    def __init__(self, message: str, limit: int = -1) -> None:
        self.limit = limit
        super().__init__(message)

    def __str__(self) -> str:
        if self.limit >= 0:
            return f"{super().__str__()} (limit {self.limit})"
        return super().__str__()
