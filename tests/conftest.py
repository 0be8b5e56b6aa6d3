import pytest

from pii_enrichment.event.mutators import MutatorRegistry, default_registry
from pii_enrichment.strategy.pseudonymize import PseudonymizeStrategy


@pytest.fixture()
def registry() -> MutatorRegistry:
    return default_registry()


@pytest.fixture()
def sha256() -> PseudonymizeStrategy:
    return PseudonymizeStrategy("SHA-256")
