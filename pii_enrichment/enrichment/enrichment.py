from dataclasses import dataclass
from typing import Any

from pii_enrichment.audit.builder import AuditBuilder
from pii_enrichment.config.parser import PiiEnrichmentConfig, parse_config
from pii_enrichment.event.models import EnrichedEvent
from pii_enrichment.event.mutators import Mutator, MutatorRegistry, default_registry
from pii_enrichment.fields.json_field import scramble_json
from pii_enrichment.fields.models import FieldSpec, JsonField, ModifiedField, ScalarField
from pii_enrichment.fields.scalar_field import scramble_scalar
from pii_enrichment.logging.logger import Log
from pii_enrichment.strategy.base import BaseScrambleStrategy


@dataclass(frozen=True)
class PiiPseudonymizerEnrichment:
    """Scrambles the configured PII fields of an event and records the changes.

    The instance is immutable and may be shared between threads, as long as
    each call to ``transform`` gets its own event.
    """

    fields: tuple[FieldSpec, ...]
    emit_identification_event: bool
    strategy: BaseScrambleStrategy
    registry: MutatorRegistry
    audit_builder: AuditBuilder

    @classmethod
    def from_config(
        cls,
        config: PiiEnrichmentConfig,
        registry: MutatorRegistry,
        audit_builder: AuditBuilder | None = None,
    ) -> "PiiPseudonymizerEnrichment":
        return cls(
            fields=config.fields,
            emit_identification_event=config.emit_identification_event,
            strategy=config.strategy,
            registry=registry,
            audit_builder=audit_builder or AuditBuilder(),
        )

    def transform(self, event: EnrichedEvent) -> None:
        """Scramble every configured field of *event* in place.

        Nothing is written to *event* unless every field was processed, so a
        ``MalformedEventField`` leaves the event untouched.

        Raises:
            MalformedEventField: if a configured JSON attribute is not valid JSON.
        """
        staged: dict[str, tuple[Mutator, str | None]] = {}
        modified_fields: list[ModifiedField] = []

        for spec in self.fields:
            mutator = spec.mutator
            if mutator.field_name in staged:
                current = staged[mutator.field_name][1]
            else:
                current = mutator.get(event)
            new_value, modified = self._apply(spec, current)
            if modified:
                staged[mutator.field_name] = (mutator, new_value)
                modified_fields.extend(modified)

        for mutator, value in staged.values():
            mutator.set(event, value)
        self.registry.audit.set(
            event, self.audit_builder.build(modified_fields, self.strategy)
        )
        Log.debug(
            f"Scrambled {len(modified_fields)} values across {len(staged)} fields"
        )

    def _apply(
        self, spec: FieldSpec, value: str | None
    ) -> tuple[str | None, list[ModifiedField]]:
        match spec:
            case ScalarField():
                new_value, scalar_modified = scramble_scalar(spec, value, self.strategy)
                return new_value, list(scalar_modified)
            case JsonField():
                new_value, json_modified = scramble_json(spec, value, self.strategy)
                return new_value, list(json_modified)
            case _:
                raise TypeError(f"Unknown field specification: {spec!r}")


def build_enrichment(
    raw_config: Any,
    registry: MutatorRegistry | None = None,
) -> PiiPseudonymizerEnrichment:
    """Build the enrichment from a raw configuration document.

    Raises:
        ConfigurationError: listing every problem found in *raw_config*.
    """
    registry = registry or default_registry()
    config = parse_config(raw_config, registry).unwrap()
    Log.info(
        f"PII enrichment configured: enabled={config.enabled}, "
        f"{len(config.fields)} fields, strategy={config.strategy.describe()}"
    )
    return PiiPseudonymizerEnrichment.from_config(config, registry)
