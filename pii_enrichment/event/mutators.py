"""Named accessors for the event attributes the PII stage may touch."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from pii_enrichment.event.models import EnrichedEvent

SCALAR_FIELDS: tuple[str, ...] = (
    "user_id",
    "user_ipaddress",
    "user_fingerprint",
    "domain_userid",
    "domain_sessionid",
    "network_userid",
    "refr_domain_userid",
    "ip_organization",
    "ip_domain",
    "tr_orderid",
    "ti_orderid",
    "mkt_term",
    "mkt_content",
    "mkt_clickid",
    "se_category",
    "se_action",
    "se_label",
    "se_property",
)

JSON_FIELDS: tuple[str, ...] = ("contexts", "derived_contexts", "unstruct_event")

AUDIT_FIELD = "pii"


@dataclass(frozen=True)
class Mutator:
    """Get/set accessor for one named event attribute."""

    field_name: str
    getter: Callable[[EnrichedEvent], str | None] = field(compare=False)
    setter: Callable[[EnrichedEvent, str | None], None] = field(compare=False)

    def get(self, event: EnrichedEvent) -> str | None:
        return self.getter(event)

    def set(self, event: EnrichedEvent, value: str | None) -> None:
        self.setter(event, value)


def attribute_mutator(field_name: str) -> Mutator:
    """Build a mutator that reads and writes ``event.<field_name>``."""
    return Mutator(
        field_name=field_name,
        getter=lambda event: getattr(event, field_name),
        setter=lambda event, value: setattr(event, field_name, value),
    )


class MutatorRegistry:
    """Looks up scalar and JSON mutators by field name.

    The registry lists every field a configuration is allowed to reference;
    an unregistered name is a configuration error.
    """

    def __init__(
        self,
        scalar: Iterable[Mutator],
        json: Iterable[Mutator],
        audit: Mutator,
    ) -> None:
        self._scalar = {m.field_name: m for m in scalar}
        self._json = {m.field_name: m for m in json}
        self._audit = audit

    @property
    def audit(self) -> Mutator:
        return self._audit

    def scalar_mutator(self, field_name: str) -> Mutator | None:
        return self._scalar.get(field_name)

    def json_mutator(self, field_name: str) -> Mutator | None:
        return self._json.get(field_name)

    @property
    def scalar_field_names(self) -> list[str]:
        return sorted(self._scalar)

    @property
    def json_field_names(self) -> list[str]:
        return sorted(self._json)


def default_registry() -> MutatorRegistry:
    """Registry over the attributes of ``EnrichedEvent``."""
    return MutatorRegistry(
        scalar=[attribute_mutator(name) for name in SCALAR_FIELDS],
        json=[attribute_mutator(name) for name in JSON_FIELDS],
        audit=attribute_mutator(AUDIT_FIELD),
    )
