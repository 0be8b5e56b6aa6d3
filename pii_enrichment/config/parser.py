"""Resolution of the raw enrichment configuration into field specifications.

Every problem in the configuration is collected and reported together; no
check stops the others from running.
"""

from dataclasses import dataclass
from typing import Any

from jsonpath_ng.exceptions import JSONPathError
from jsonpath_ng.ext import parse as parse_json_path

from pii_enrichment.config.validation import Validated, collect
from pii_enrichment.event.mutators import MutatorRegistry
from pii_enrichment.fields.models import FieldSpec, JsonField, ScalarField
from pii_enrichment.schema.exceptions import SchemaParseError
from pii_enrichment.schema.models import SchemaCriterion, SchemaKey
from pii_enrichment.strategy.base import BaseScrambleStrategy
from pii_enrichment.strategy.exceptions import UnsupportedAlgorithm
from pii_enrichment.strategy.factory import StrategyFactory

SUPPORTED_SCHEMA = SchemaCriterion(
    "com.snowplowanalytics.snowplow.enrichments",
    "pii_enrichment_config",
    "jsonschema",
    2,
    0,
    0,
)


@dataclass(frozen=True)
class PiiEnrichmentConfig:
    """Resolved, immutable enrichment configuration."""

    enabled: bool
    emit_identification_event: bool
    fields: tuple[FieldSpec, ...]
    strategy: BaseScrambleStrategy


def parse_config(raw: Any, registry: MutatorRegistry) -> Validated[PiiEnrichmentConfig]:
    """Resolve *raw* into a ``PiiEnrichmentConfig``.

    *raw* is either the bare configuration object or a self-describing
    ``{"schema": ..., "data": ...}`` envelope around it. When ``enabled`` is
    false the field list is empty and no identification event is emitted,
    but the strategy is still built.
    """
    envelope = _unwrap(raw)
    if envelope.errors:
        return Validated.fail(*envelope.errors)
    conf = envelope.value

    enabled = _extract_bool(conf, "enabled")
    emit = _extract_bool(conf, "emitIdentificationEvent")
    parameters = conf.get("parameters")
    if not isinstance(parameters, dict):
        parameters = {}
    strategy = _extract_strategy(parameters)
    # Field entries of a disabled enrichment are never resolved.
    fields: Validated[list[FieldSpec]] = (
        _extract_fields(parameters, registry) if enabled.value else Validated.ok([])
    )

    errors = [
        *enabled.errors,
        *emit.errors,
        *strategy.errors,
        *fields.errors,
    ]
    if errors:
        return Validated.fail(*errors)

    field_list = tuple(fields.value or [])
    return Validated.ok(
        PiiEnrichmentConfig(
            enabled=bool(enabled.value),
            emit_identification_event=bool(enabled.value) and bool(emit.value),
            fields=field_list,
            strategy=strategy.unwrap(),
        )
    )


def _unwrap(raw: Any) -> Validated[dict[str, Any]]:
    if not isinstance(raw, dict):
        return Validated.fail("PII configuration must be a JSON object")
    if "schema" not in raw:
        return Validated.ok(raw)
    schema = raw["schema"]
    try:
        key = SchemaKey.parse(schema) if isinstance(schema, str) else None
    except SchemaParseError:
        key = None
    if key is None or not SUPPORTED_SCHEMA.matches(key):
        return Validated.fail(
            f"Schema key {schema!r} is not supported. A 'pii_enrichment_config' "
            f"enrichment must have schema '{SUPPORTED_SCHEMA}'"
        )
    data = raw.get("data")
    if not isinstance(data, dict):
        return Validated.fail("PII configuration 'data' must be a JSON object")
    return Validated.ok(data)


def _extract_bool(conf: dict[str, Any], name: str) -> Validated[bool]:
    value = conf.get(name, False)
    if not isinstance(value, bool):
        return Validated.fail(f"'{name}' must be a boolean, got {value!r}")
    return Validated.ok(value)


def _extract_strategy(parameters: dict[str, Any]) -> Validated[BaseScrambleStrategy]:
    block = parameters.get("strategy")
    if not isinstance(block, dict) or not isinstance(block.get("pseudonymize"), dict):
        return Validated.fail("Missing 'parameters.strategy.pseudonymize.hashFunction'")
    if "hashFunction" not in block["pseudonymize"]:
        return Validated.fail("Missing 'parameters.strategy.pseudonymize.hashFunction'")
    try:
        return Validated.ok(StrategyFactory.create(block))
    except UnsupportedAlgorithm as exc:
        return Validated.fail(f"Could not parse PII enrichment config: {exc}")


def _extract_fields(
    parameters: dict[str, Any], registry: MutatorRegistry
) -> Validated[list[FieldSpec]]:
    entries = parameters.get("pii")
    if not isinstance(entries, list):
        return Validated.fail("'parameters.pii' must be a list of field entries")
    return collect(_extract_field(entry, index, registry) for index, entry in enumerate(entries))


def _extract_field(entry: Any, index: int, registry: MutatorRegistry) -> Validated[FieldSpec]:
    if not isinstance(entry, dict):
        return Validated.fail(f"PII field at index {index} must be an object, got {entry!r}")
    if "pojo" in entry:
        return _extract_scalar_field(entry["pojo"], index, registry)
    if "json" in entry:
        return _extract_json_field(entry["json"], index, registry)
    return Validated.fail(
        f"PII field at index {index} includes neither 'pojo' nor 'json': {entry!r}"
    )


def _extract_scalar_field(
    raw: Any, index: int, registry: MutatorRegistry
) -> Validated[FieldSpec]:
    name = raw.get("field") if isinstance(raw, dict) else None
    if not isinstance(name, str):
        return Validated.fail(f"PII field at index {index}: 'pojo.field' must be a string")
    mutator = registry.scalar_mutator(name)
    if mutator is None:
        return Validated.fail(f"The specified pojo field {name} is not supported")
    return Validated.ok(ScalarField(mutator))


def _extract_json_field(
    raw: Any, index: int, registry: MutatorRegistry
) -> Validated[FieldSpec]:
    if not isinstance(raw, dict):
        return Validated.fail(f"PII field at index {index}: 'json' must be an object")
    errors: list[str] = []

    name = raw.get("field")
    mutator = None
    if not isinstance(name, str):
        errors.append(f"PII field at index {index}: 'json.field' must be a string")
    else:
        mutator = registry.json_mutator(name)
        if mutator is None:
            errors.append(f"The specified json field {name} is not supported")

    criterion_raw = raw.get("schemaCriterion")
    criterion = None
    if not isinstance(criterion_raw, str):
        errors.append(f"PII field at index {index}: 'json.schemaCriterion' must be a string")
    else:
        try:
            criterion = SchemaCriterion.parse(criterion_raw)
        except SchemaParseError as exc:
            errors.append(f"PII field at index {index}: {exc}")

    json_path = raw.get("jsonPath")
    compiled = None
    if not isinstance(json_path, str):
        errors.append(f"PII field at index {index}: 'json.jsonPath' must be a string")
    else:
        try:
            compiled = parse_json_path(json_path)
        except (JSONPathError, ValueError) as exc:
            errors.append(f"PII field at index {index}: invalid jsonPath {json_path!r}: {exc}")

    if errors or mutator is None or criterion is None or not isinstance(json_path, str):
        return Validated.fail(*errors)
    return Validated.ok(JsonField(mutator, criterion, json_path, compiled))
