from typing import Any

from pii_enrichment.strategy.base import BaseScrambleStrategy
from pii_enrichment.strategy.exceptions import UnsupportedAlgorithm
from pii_enrichment.strategy.pseudonymize import PseudonymizeStrategy


class StrategyFactory:
    """Creates a scramble strategy from its configuration block."""

    @classmethod
    def create(cls, block: Any) -> BaseScrambleStrategy:
        """Build a strategy from ``{"pseudonymize": {"hashFunction": name}}``.

        This is the inverse of ``BaseScrambleStrategy.describe()``.

        Raises:
            UnsupportedAlgorithm: if the block names no known strategy or
                hash function.
        """
        if not isinstance(block, dict) or "pseudonymize" not in block:
            raise UnsupportedAlgorithm("Strategy block must contain 'pseudonymize'")
        params = block["pseudonymize"]
        hash_function = params.get("hashFunction") if isinstance(params, dict) else None
        if not isinstance(hash_function, str):
            raise UnsupportedAlgorithm(
                "Strategy 'pseudonymize' requires a string 'hashFunction'"
            )
        return PseudonymizeStrategy(hash_function)
