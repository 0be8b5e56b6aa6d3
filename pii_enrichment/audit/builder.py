"""Serialization of the per-event audit record into the ``pii`` attribute."""

import json
from collections.abc import Sequence
from typing import Any

from pii_enrichment.audit.exceptions import AuditFormatError
from pii_enrichment.fields.models import (
    JsonModifiedField,
    ModifiedField,
    PiiModifiedFields,
    ScalarModifiedField,
)
from pii_enrichment.strategy.base import BaseScrambleStrategy
from pii_enrichment.strategy.exceptions import UnsupportedAlgorithm
from pii_enrichment.strategy.factory import StrategyFactory

PII_TRANSFORMATION_SCHEMA = (
    "iglu:com.snowplowanalytics.snowplow/pii_transformation/jsonschema/1-0-0"
)

SCALAR_KIND = "pojo"
JSON_KIND = "json"


class AuditBuilder:
    """Converts modified fields into the self-describing audit document."""

    def build(
        self,
        modified_fields: Sequence[ModifiedField],
        strategy: BaseScrambleStrategy,
    ) -> str | None:
        """Serialize the audit record, or return ``None`` if nothing changed."""
        if not modified_fields:
            return None
        record = PiiModifiedFields(tuple(modified_fields), strategy)
        return json.dumps(self.to_dict(record), separators=(",", ":"), ensure_ascii=False)

    def to_dict(self, record: PiiModifiedFields) -> dict[str, Any]:
        grouped: dict[str, list[dict[str, str]]] = {}
        for modified in record.modified_fields:
            kind, payload = self._field_to_dict(modified)
            grouped.setdefault(kind, []).append(payload)
        return {
            "schema": PII_TRANSFORMATION_SCHEMA,
            "data": {
                "pii": grouped,
                "strategy": record.strategy.describe(),
            },
        }

    def _field_to_dict(self, modified: ModifiedField) -> tuple[str, dict[str, str]]:
        match modified:
            case ScalarModifiedField():
                return SCALAR_KIND, {
                    "fieldName": modified.field_name,
                    "originalValue": modified.original_value,
                    "modifiedValue": modified.modified_value,
                }
            case JsonModifiedField():
                return JSON_KIND, {
                    "fieldName": modified.field_name,
                    "originalValue": modified.original_value,
                    "modifiedValue": modified.modified_value,
                    "jsonPath": modified.json_path,
                    "schema": modified.schema,
                }
            case _:
                raise TypeError(f"Unknown modified field: {modified!r}")


def parse_audit(text: str) -> PiiModifiedFields:
    """Read back a document produced by ``AuditBuilder.build``.

    Scalar entries come first, then JSON entries; order within each group is
    preserved.

    Raises:
        AuditFormatError: if *text* is not a valid audit document.
    """
    try:
        document = json.loads(text)
        data = document["data"]
        grouped = data["pii"]
        fields: list[ModifiedField] = [
            ScalarModifiedField(
                field_name=item["fieldName"],
                original_value=item["originalValue"],
                modified_value=item["modifiedValue"],
            )
            for item in grouped.get(SCALAR_KIND, [])
        ]
        fields.extend(
            JsonModifiedField(
                field_name=item["fieldName"],
                original_value=item["originalValue"],
                modified_value=item["modifiedValue"],
                json_path=item["jsonPath"],
                schema=item["schema"],
            )
            for item in grouped.get(JSON_KIND, [])
        )
        strategy = StrategyFactory.create(data["strategy"])
    except (json.JSONDecodeError, KeyError, TypeError, AttributeError) as exc:
        raise AuditFormatError(f"Invalid PII audit document: {exc}") from exc
    except UnsupportedAlgorithm as exc:
        raise AuditFormatError(f"Invalid PII audit strategy: {exc}") from exc
    if document.get("schema") != PII_TRANSFORMATION_SCHEMA:
        raise AuditFormatError(f"Unexpected audit schema: {document.get('schema')!r}")
    return PiiModifiedFields(tuple(fields), strategy)
