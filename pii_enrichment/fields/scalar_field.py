from pii_enrichment.fields.models import ScalarField, ScalarModifiedField
from pii_enrichment.strategy.base import BaseScrambleStrategy


def scramble_scalar(
    spec: ScalarField,
    value: str | None,
    strategy: BaseScrambleStrategy,
) -> tuple[str | None, list[ScalarModifiedField]]:
    """Scramble a scalar attribute value.

    Returns:
        (new_value, modified_fields). A ``None`` value is returned unchanged
        with no modified fields.
    """
    if value is None:
        return None, []
    modified_value = strategy.scramble(value)
    return modified_value, [
        ScalarModifiedField(
            field_name=spec.field_name,
            original_value=value,
            modified_value=modified_value,
        )
    ]
