from pii_enrichment.enrichment.exceptions import PiiEnrichmentError


class UnsupportedAlgorithm(PiiEnrichmentError):
    """Raised when a strategy names a hash function that is not available."""
