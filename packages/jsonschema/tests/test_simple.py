"""Tests for the keyword-free schema variants."""

import pytest

from schemaknobs_jsonschema import (
    BooleanSchema,
    EmptySchema,
    FalseSchema,
    NullSchema,
    StringSchema,
    ValidationException,
)


class TestEmptySchema:
    def test_accepts_everything(self, non_string_values):
        """Test that the empty schema accepts any value."""
        for value in non_string_values + ["text"]:
            EmptySchema().validate(value)

    def test_prints_empty_object(self):
        """Test the printed form."""
        assert EmptySchema().to_dict() == {}
        assert EmptySchema.builder().title("Any").build().to_dict() == {"title": "Any"}


class TestFalseSchema:
    def test_rejects_everything(self):
        """Test that every value fails with the 'false' keyword."""
        with pytest.raises(ValidationException) as exc_info:
            FalseSchema().validate("x")
        assert exc_info.value.keywords == ["false"]

    def test_prints_false(self):
        """Test the printed form."""
        assert FalseSchema().to_dict() is False
        assert FalseSchema().to_json() == "false"


class TestNullSchema:
    def test_accepts_only_null(self):
        """Test null validation."""
        NullSchema().validate(None)

        with pytest.raises(ValidationException) as exc_info:
            NullSchema().validate(0)
        assert exc_info.value.violations[0].message == "expected null, got integer"

    def test_prints_type(self):
        assert NullSchema().to_dict() == {"type": "null"}


class TestBooleanSchema:
    def test_accepts_only_booleans(self):
        """Test boolean validation does not accept integers."""
        BooleanSchema().validate(True)
        BooleanSchema().validate(False)
        assert not BooleanSchema().is_valid(1)
        assert not BooleanSchema().is_valid("true")

    def test_prints_type(self):
        assert BooleanSchema.builder().description("flag").build().to_dict() == {
            "description": "flag",
            "type": "boolean",
        }


class TestVariantEquality:
    """Test that variants are only equal to their own kind."""

    def test_same_variant_equal(self):
        assert NullSchema() == NullSchema()
        assert hash(BooleanSchema()) == hash(BooleanSchema())

    def test_base_fields_compared(self):
        assert NullSchema.builder().title("a").build() != NullSchema()

    def test_distinct_variants_not_equal(self):
        """Test that keyword-free variants never compare equal to each other."""
        variants = [EmptySchema(), FalseSchema(), NullSchema(), BooleanSchema(), StringSchema()]
        for i, first in enumerate(variants):
            for j, second in enumerate(variants):
                assert (first == second) is (i == j)
        assert len(set(variants)) == len(variants)


class TestBuilders:
    """Test that every variant is built the same way."""

    @pytest.mark.parametrize(
        "variant", [EmptySchema, FalseSchema, NullSchema, BooleanSchema, StringSchema]
    )
    def test_builder_builds_variant(self, variant):
        """Test that each variant's builder yields an equal default node."""
        assert variant.builder().build() == variant()

    def test_false_schema_builder_keeps_metadata(self):
        """Test that metadata is kept on the node though printed as false."""
        schema = FalseSchema.builder().title("never").build()

        assert schema.title == "never"
        assert schema != FalseSchema()
        assert schema.to_dict() is False
