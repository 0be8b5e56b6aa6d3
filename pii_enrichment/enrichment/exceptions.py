class PiiEnrichmentError(Exception):
    """Base exception for all PII enrichment errors."""


class ConfigurationError(PiiEnrichmentError):
    """Raised when the enrichment configuration has one or more problems.

    All problems found while resolving the configuration are collected in
    ``errors`` so they can be reported together.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__(
            "Invalid PII enrichment configuration: " + "; ".join(self.errors)
        )


class MalformedEventField(PiiEnrichmentError):
    """Raised when a JSON event attribute cannot be parsed."""

    def __init__(self, field_name: str, reason: str = "") -> None:
        self.field_name = field_name
        message = f"Field '{field_name}' does not contain valid JSON"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
