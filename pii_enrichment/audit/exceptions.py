from pii_enrichment.enrichment.exceptions import PiiEnrichmentError


class AuditFormatError(PiiEnrichmentError):
    """Raised when a serialized audit record cannot be read back."""
