from dataclasses import dataclass, field
from typing import Any

from jsonpath_ng.ext import parse as parse_json_path

from pii_enrichment.event.mutators import Mutator
from pii_enrichment.schema.models import SchemaCriterion
from pii_enrichment.strategy.base import BaseScrambleStrategy


@dataclass(frozen=True)
class ScalarField:
    """A scalar event attribute to scramble as a whole."""

    mutator: Mutator

    @property
    def field_name(self) -> str:
        return self.mutator.field_name


@dataclass(frozen=True)
class JsonField:
    """Values inside the context documents of a JSON event attribute.

    Only contexts whose schema matches ``schema_criterion`` are touched, and
    only the values ``json_path`` selects within their ``data``.
    """

    mutator: Mutator
    schema_criterion: SchemaCriterion
    json_path: str
    compiled_path: Any = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.compiled_path is None:
            object.__setattr__(self, "compiled_path", parse_json_path(self.json_path))

    @property
    def field_name(self) -> str:
        return self.mutator.field_name


FieldSpec = ScalarField | JsonField


@dataclass(frozen=True)
class ScalarModifiedField:
    """Record of one scalar attribute that was scrambled."""

    field_name: str
    original_value: str
    modified_value: str


@dataclass(frozen=True)
class JsonModifiedField:
    """Record of one value inside a context document that was scrambled."""

    field_name: str
    original_value: str
    modified_value: str
    json_path: str
    schema: str


ModifiedField = ScalarModifiedField | JsonModifiedField


@dataclass(frozen=True)
class PiiModifiedFields:
    """Everything scrambled in one event, with the strategy used."""

    modified_fields: tuple[ModifiedField, ...]
    strategy: BaseScrambleStrategy
