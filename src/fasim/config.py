"""Configuration for fasim."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Config:
    """Settings for the powerset converter.

    Attributes:
        max_dfa_states: Maximum number of subset states the converter may
            discover before giving up.
        state_separator: String placed between member names in a subset name.
        state_brackets: Opening and closing strings around a subset name.
    """

    max_dfa_states: int = 100000
    state_separator: str = ","
    state_brackets: Tuple[str, str] = ("{", "}")

    def __post_init__(self) -> None:
        if self.max_dfa_states <= 0:
            raise ValueError("max_dfa_states must be positive")
        if len(self.state_brackets) != 2:
            raise ValueError("state_brackets must be an (open, close) pair")

    @classmethod
    def default(cls) -> "Config":
        """Create the default configuration."""
        return cls()

    def subset_name(self, members: Tuple[str, ...]) -> str:
        """Render an ordered tuple of NFA state names as one DFA state name."""
        opening, closing = self.state_brackets
        return opening + self.state_separator.join(members) + closing
