from abc import ABC, abstractmethod


class BaseScrambleStrategy(ABC):
    """Contract for all scrambling strategies."""

    @abstractmethod
    def scramble(self, text: str) -> str:
        """Return the irreversible substitute for *text*.

        Implementations must be deterministic: the same input always yields
        the same output for a given configuration.
        """

    @abstractmethod
    def describe(self) -> dict[str, dict[str, str]]:
        """Return the strategy in the same shape as its configuration block."""
