"""Self-describing schema identities and the criteria that select them.

A schema key looks like ``iglu:com.acme/example/jsonschema/1-0-0``. A
criterion has the same shape but any of the three version components may be
``*``, e.g. ``iglu:com.acme/example/jsonschema/1-*-*``. The ``iglu:`` prefix
is optional on input and always present on output.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from pii_enrichment.schema.exceptions import SchemaParseError

_PREFIX = "iglu:"

_KEY_RE = re.compile(
    r"^([a-zA-Z0-9_.\-]+)/([a-zA-Z0-9_\-]+)/([a-zA-Z0-9_\-]+)/"
    r"([1-9][0-9]*)-(0|[1-9][0-9]*)-(0|[1-9][0-9]*)$"
)
_CRITERION_RE = re.compile(
    r"^([a-zA-Z0-9_.\-]+)/([a-zA-Z0-9_\-]+)/([a-zA-Z0-9_\-]+)/"
    r"([1-9][0-9]*|\*)-(0|[1-9][0-9]*|\*)-(0|[1-9][0-9]*|\*)$"
)


def _strip_prefix(value: str) -> str:
    return value[len(_PREFIX):] if value.startswith(_PREFIX) else value


@dataclass(frozen=True)
class SchemaKey:
    """Concrete schema identity declared by a context document."""

    vendor: str
    name: str
    format: str
    model: int
    revision: int
    addition: int

    @classmethod
    def parse(cls, value: str) -> SchemaKey:
        """Parse ``[iglu:]vendor/name/format/M-R-A``.

        Raises:
            SchemaParseError: if *value* is not a valid schema key.
        """
        match = _KEY_RE.match(_strip_prefix(value))
        if match is None:
            raise SchemaParseError(f"Invalid schema key: {value!r}")
        vendor, name, fmt, model, revision, addition = match.groups()
        return cls(vendor, name, fmt, int(model), int(revision), int(addition))

    @property
    def version(self) -> str:
        return f"{self.model}-{self.revision}-{self.addition}"

    def __str__(self) -> str:
        return f"{_PREFIX}{self.vendor}/{self.name}/{self.format}/{self.version}"


@dataclass(frozen=True)
class SchemaCriterion:
    """Selects schema keys by vendor/name/format and version components.

    A version component of ``None`` is a wildcard.
    """

    vendor: str
    name: str
    format: str
    model: int | None = None
    revision: int | None = None
    addition: int | None = None

    @classmethod
    def parse(cls, value: str) -> SchemaCriterion:
        """Parse ``[iglu:]vendor/name/format/M-R-A`` where M, R, A may be ``*``.

        Raises:
            SchemaParseError: if *value* is not a valid criterion.
        """
        match = _CRITERION_RE.match(_strip_prefix(value))
        if match is None:
            raise SchemaParseError(f"Invalid schema criterion: {value!r}")
        vendor, name, fmt, model, revision, addition = match.groups()
        return cls(
            vendor,
            name,
            fmt,
            _version_component(model),
            _version_component(revision),
            _version_component(addition),
        )

    def matches(self, key: SchemaKey) -> bool:
        return (
            self.vendor == key.vendor
            and self.name == key.name
            and self.format == key.format
            and _component_matches(self.model, key.model)
            and _component_matches(self.revision, key.revision)
            and _component_matches(self.addition, key.addition)
        )

    @property
    def version(self) -> str:
        return "-".join(
            "*" if part is None else str(part)
            for part in (self.model, self.revision, self.addition)
        )

    def __str__(self) -> str:
        return f"{_PREFIX}{self.vendor}/{self.name}/{self.format}/{self.version}"


def _version_component(raw: str) -> int | None:
    return None if raw == "*" else int(raw)


def _component_matches(expected: int | None, actual: int) -> bool:
    return expected is None or expected == actual
