class SchemaParseError(ValueError):
    """Raised when a schema key or criterion string cannot be parsed."""
