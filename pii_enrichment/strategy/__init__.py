from pii_enrichment.strategy.base import BaseScrambleStrategy
from pii_enrichment.strategy.factory import StrategyFactory
from pii_enrichment.strategy.pseudonymize import PseudonymizeStrategy

__all__ = ["BaseScrambleStrategy", "PseudonymizeStrategy", "StrategyFactory"]
