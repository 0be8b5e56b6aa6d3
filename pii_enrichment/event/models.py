from dataclasses import asdict, dataclass, fields
from typing import Any


@dataclass
class EnrichedEvent:
    """Subset of an enriched event that the PII stage may read or write.

    Every attribute is an optional string; a missing attribute and a null one
    are both represented as ``None``.
    """

    event_id: str | None = None
    user_id: str | None = None
    user_ipaddress: str | None = None
    user_fingerprint: str | None = None
    domain_userid: str | None = None
    domain_sessionid: str | None = None
    network_userid: str | None = None
    refr_domain_userid: str | None = None
    ip_organization: str | None = None
    ip_domain: str | None = None
    tr_orderid: str | None = None
    ti_orderid: str | None = None
    mkt_term: str | None = None
    mkt_content: str | None = None
    mkt_clickid: str | None = None
    se_category: str | None = None
    se_action: str | None = None
    se_label: str | None = None
    se_property: str | None = None
    contexts: str | None = None
    derived_contexts: str | None = None
    unstruct_event: str | None = None
    pii: str | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "EnrichedEvent":
        """Build an event from a decoded JSON object, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values: dict[str, str | None] = {}
        for key, value in raw.items():
            if key not in known:
                continue
            if value is not None and not isinstance(value, str):
                raise ValueError(f"Event attribute '{key}' must be a string or null")
            values[key] = value
        return cls(**values)

    def to_dict(self) -> dict[str, str | None]:
        return asdict(self)
