"""Tests for non-raising validation results."""

from schemaknobs_jsonschema import StringSchema, ValidationResult


class TestValidationResult:
    """Test the result dataclass."""

    def test_success_is_truthy(self):
        result = ValidationResult.success("abc")
        assert result
        assert result.errors == []

    def test_failure_is_falsy(self):
        result = ValidationResult.failure("a", ["#: too short"])
        assert not result
        assert result.errors == ["#: too short"]

    def test_merge(self):
        """Test combining results."""
        merged = ValidationResult.success("a", warnings=["w"]).merge(
            ValidationResult.failure("a", ["#: bad"])
        )

        assert merged.valid is False
        assert merged.value == "a"
        assert merged.errors == ["#: bad"]
        assert merged.warnings == ["w"]


class TestSchemaCheck:
    """Test Schema.check."""

    def test_check_valid(self):
        result = StringSchema.builder().min_length(1).build().check("a")
        assert result.valid
        assert result.value == "a"

    def test_check_collects_all_messages(self):
        """Test that every violation appears in the result."""
        schema = StringSchema.builder().min_length(3).pattern("^[0-9]+$").build()

        result = schema.check("a")

        assert not result
        assert result.errors == [
            "#: expected minLength: 3, actual: 1",
            "#: string [a] does not match pattern ^[0-9]+$",
        ]

    def test_check_type_mismatch(self):
        result = StringSchema().check(None)
        assert result.errors == ["#: expected string, got null"]


def test_version():
    """Test that version is defined."""
    import schemaknobs_jsonschema

    assert schemaknobs_jsonschema.__version__ == "0.1.0"
