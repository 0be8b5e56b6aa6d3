import pytest

from pii_enrichment.schema.exceptions import SchemaParseError
from pii_enrichment.schema.models import SchemaCriterion, SchemaKey


class TestSchemaKeyParse:
    def test_parses_full_key(self) -> None:
        key = SchemaKey.parse("iglu:com.acme/example/jsonschema/1-2-3")
        assert key == SchemaKey("com.acme", "example", "jsonschema", 1, 2, 3)

    def test_prefix_is_optional(self) -> None:
        assert SchemaKey.parse("com.acme/example/jsonschema/1-0-0") == SchemaKey.parse(
            "iglu:com.acme/example/jsonschema/1-0-0"
        )

    def test_str_round_trips(self) -> None:
        raw = "iglu:com.acme/example/jsonschema/2-1-0"
        assert str(SchemaKey.parse(raw)) == raw

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "iglu:com.acme/example/jsonschema",
            "iglu:com.acme/example/jsonschema/1-0",
            "iglu:com.acme/example/jsonschema/0-0-0",
            "iglu:com.acme/example/jsonschema/1-*-0",
            "iglu:com.acme/example/jsonschema/a-b-c",
        ],
    )
    def test_invalid_keys_raise(self, raw: str) -> None:
        with pytest.raises(SchemaParseError):
            SchemaKey.parse(raw)


class TestSchemaCriterionParse:
    def test_parses_fixed_version(self) -> None:
        criterion = SchemaCriterion.parse("iglu:com.acme/example/jsonschema/1-0-0")
        assert (criterion.model, criterion.revision, criterion.addition) == (1, 0, 0)

    def test_parses_wildcards(self) -> None:
        criterion = SchemaCriterion.parse("iglu:com.acme/example/jsonschema/1-*-*")
        assert criterion.model == 1
        assert criterion.revision is None
        assert criterion.addition is None

    def test_all_wildcards(self) -> None:
        criterion = SchemaCriterion.parse("com.acme/example/jsonschema/*-*-*")
        assert str(criterion) == "iglu:com.acme/example/jsonschema/*-*-*"

    def test_invalid_criterion_raises(self) -> None:
        with pytest.raises(SchemaParseError, match="criterion"):
            SchemaCriterion.parse("com.acme/example/1-0-0")


class TestSchemaCriterionMatches:
    def test_exact_match(self) -> None:
        criterion = SchemaCriterion.parse("iglu:com.acme/example/jsonschema/1-0-0")
        assert criterion.matches(SchemaKey.parse("iglu:com.acme/example/jsonschema/1-0-0"))

    def test_fixed_component_must_be_equal(self) -> None:
        criterion = SchemaCriterion.parse("iglu:com.acme/example/jsonschema/1-0-0")
        assert not criterion.matches(SchemaKey.parse("iglu:com.acme/example/jsonschema/1-0-1"))
        assert not criterion.matches(SchemaKey.parse("iglu:com.acme/example/jsonschema/2-0-0"))

    def test_wildcard_components_match_any(self) -> None:
        criterion = SchemaCriterion.parse("iglu:com.acme/example/jsonschema/1-*-*")
        assert criterion.matches(SchemaKey.parse("iglu:com.acme/example/jsonschema/1-4-7"))
        assert not criterion.matches(SchemaKey.parse("iglu:com.acme/example/jsonschema/2-0-0"))

    def test_only_addition_wildcard(self) -> None:
        criterion = SchemaCriterion.parse("iglu:com.acme/example/jsonschema/1-2-*")
        assert criterion.matches(SchemaKey.parse("iglu:com.acme/example/jsonschema/1-2-9"))
        assert not criterion.matches(SchemaKey.parse("iglu:com.acme/example/jsonschema/1-3-0"))

    @pytest.mark.parametrize(
        "raw",
        [
            "iglu:com.other/example/jsonschema/1-0-0",
            "iglu:com.acme/other/jsonschema/1-0-0",
            "iglu:com.acme/example/thrift/1-0-0",
        ],
    )
    def test_vendor_name_format_must_be_equal(self, raw: str) -> None:
        criterion = SchemaCriterion.parse("iglu:com.acme/example/jsonschema/*-*-*")
        assert not criterion.matches(SchemaKey.parse(raw))
