"""Scrambling of values inside self-describing context documents.

A JSON event attribute holds a document of the form::

    {"schema": "...", "data": [{"schema": "iglu:...", "data": {...}}, ...]}

or, for a single embedded event, ``"data"`` holding one context object
instead of a list. Each context whose ``schema`` matches the field's
criterion has the values selected by the field's JSONPath (evaluated against
the context's ``data``) replaced by their scrambled form.
"""

import copy
import json
from typing import Any

from pii_enrichment.enrichment.exceptions import MalformedEventField
from pii_enrichment.fields.models import JsonField, JsonModifiedField
from pii_enrichment.schema.exceptions import SchemaParseError
from pii_enrichment.schema.models import SchemaKey
from pii_enrichment.strategy.base import BaseScrambleStrategy


def scramble_json(
    spec: JsonField,
    value: str | None,
    strategy: BaseScrambleStrategy,
) -> tuple[str | None, list[JsonModifiedField]]:
    """Scramble the configured values inside a serialized JSON attribute.

    Returns:
        (new_value, modified_fields). When nothing is modified the original
        serialized value is returned as-is.

    Raises:
        MalformedEventField: if *value* is not valid JSON.
    """
    if value is None:
        return None, []
    try:
        document = json.loads(value)
    except json.JSONDecodeError as exc:
        raise MalformedEventField(spec.field_name, str(exc)) from exc

    updated, modified = _scramble_document(document, spec, strategy)
    if not modified:
        return value, []
    return json.dumps(updated, separators=(",", ":"), ensure_ascii=False), modified


def _scramble_document(
    document: Any,
    spec: JsonField,
    strategy: BaseScrambleStrategy,
) -> tuple[Any, list[JsonModifiedField]]:
    if not isinstance(document, dict):
        return document, []
    payload = document.get("data")
    if isinstance(payload, list):
        contexts = payload
    elif isinstance(payload, dict):
        contexts = [payload]
    else:
        return document, []

    updated_contexts: list[Any] = []
    modified: list[JsonModifiedField] = []
    for context in contexts:
        updated, entries = _scramble_context(context, spec, strategy)
        updated_contexts.append(updated)
        modified.extend(entries)

    new_payload = updated_contexts if isinstance(payload, list) else updated_contexts[0]
    return {**document, "data": new_payload}, modified


def _scramble_context(
    context: Any,
    spec: JsonField,
    strategy: BaseScrambleStrategy,
) -> tuple[Any, list[JsonModifiedField]]:
    """Rewrite ``context["data"]`` if the context's schema is in scope."""
    if not isinstance(context, dict) or "data" not in context:
        return context, []
    schema = context.get("schema")
    if not isinstance(schema, str):
        return context, []
    try:
        schema_key = SchemaKey.parse(schema)
    except SchemaParseError:
        return context, []
    if not spec.schema_criterion.matches(schema_key):
        return context, []

    data, modified = scramble_tree(context["data"], spec, schema, strategy)
    if not modified:
        return context, []
    return {**context, "data": data}, modified


def scramble_tree(
    data: Any,
    spec: JsonField,
    schema: str,
    strategy: BaseScrambleStrategy,
) -> tuple[Any, list[JsonModifiedField]]:
    """Apply *strategy* to every value the field's JSONPath selects in *data*.

    *data* itself is not modified; a rewritten copy is returned together
    with one ``JsonModifiedField`` per scrambled value. A path that selects
    nothing, or a location the value cannot be written back to, yields no
    entries.
    """
    tree = copy.deepcopy(data)
    modified: list[JsonModifiedField] = []
    for match in _find(spec, data):
        replacement, entries = _scramble_value(match.value, spec, schema, strategy)
        if not entries:
            continue
        try:
            tree = match.full_path.update(tree, replacement)
        except (TypeError, KeyError, IndexError):
            # Slices wrap scalars in a one-element list that is not in the tree.
            continue
        modified.extend(entries)
    return tree, modified


def _find(spec: JsonField, data: Any) -> list[Any]:
    try:
        return spec.compiled_path.find(data)
    except (TypeError, KeyError, IndexError, AttributeError):
        # Index addressing on an object or a scalar.
        return []


def _scramble_value(
    value: Any,
    spec: JsonField,
    schema: str,
    strategy: BaseScrambleStrategy,
) -> tuple[Any, list[JsonModifiedField]]:
    match value:
        case str():
            new_value = strategy.scramble(value)
            return new_value, [_modified(spec, schema, value, new_value)]
        case list():
            items: list[Any] = []
            entries: list[JsonModifiedField] = []
            for item in value:
                if isinstance(item, str):
                    new_item = strategy.scramble(item)
                    entries.append(_modified(spec, schema, item, new_item))
                    items.append(new_item)
                else:
                    items.append(item)
            return items, entries
        case _:
            return value, []


def _modified(
    spec: JsonField, schema: str, original: str, modified: str
) -> JsonModifiedField:
    return JsonModifiedField(
        field_name=spec.field_name,
        original_value=original,
        modified_value=modified,
        json_path=spec.json_path,
        schema=schema,
    )
