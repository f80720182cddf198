"""Tests for the JSON printer."""

import re

import pytest

from schemaknobs_common.exceptions import SerializationError
from schemaknobs_jsonschema import EmptySchema, JSONPrinter, StringSchema


class TestJSONPrinter:
    """Test building JSON values incrementally."""

    def test_object(self):
        """Test keys and values inside an object."""
        printer = JSONPrinter()
        printer.object().key("type").value("string").key("minLength").value(2).end_object()
        assert printer.result == {"type": "string", "minLength": 2}

    def test_if_present_skips_none(self):
        """Test that absent values are omitted."""
        printer = JSONPrinter()
        printer.object().if_present("maxLength", None).if_present("minLength", 0).end_object()
        assert printer.result == {"minLength": 0}

    def test_nested_containers(self):
        """Test arrays within objects."""
        printer = JSONPrinter()
        printer.object().key("enum").array().value("a").value(1).end_array().end_object()
        assert printer.to_json() == '{"enum": ["a", 1]}'

    def test_pattern_printed_as_source(self):
        """Test compiled patterns print their source text."""
        printer = JSONPrinter()
        printer.object().key("pattern").value(re.compile("^a+$")).end_object()
        assert printer.result == {"pattern": "^a+$"}

    def test_schema_value_prints_subtree(self):
        """Test that a node value is printed as a nested object."""
        child = StringSchema.builder().max_length(3).build()
        printer = JSONPrinter()
        printer.object().key("items").value(child).key("extra").value(EmptySchema()).end_object()
        assert printer.result == {"items": {"type": "string", "maxLength": 3}, "extra": {}}

    def test_non_ascii_kept(self):
        """Test that JSON text keeps non-ASCII characters."""
        printer = JSONPrinter()
        printer.value("hé")
        assert printer.to_json() == '"hé"'

    def test_indent(self):
        """Test indented output."""
        printer = JSONPrinter()
        printer.object().key("a").value(1).end_object()
        assert printer.to_json(indent=2) == '{\n  "a": 1\n}'


class TestJSONPrinterMisuse:
    """Test that malformed call sequences fail."""

    def test_value_without_key(self):
        printer = JSONPrinter().object()
        with pytest.raises(SerializationError):
            printer.value(1)

    def test_key_outside_object(self):
        with pytest.raises(SerializationError):
            JSONPrinter().key("a")

    def test_double_key(self):
        printer = JSONPrinter().object().key("a")
        with pytest.raises(SerializationError):
            printer.key("b")

    def test_unbalanced_end(self):
        printer = JSONPrinter().object()
        with pytest.raises(SerializationError):
            printer.end_array()

    def test_dangling_key_on_close(self):
        printer = JSONPrinter().object().key("a")
        with pytest.raises(SerializationError):
            printer.end_object()

    def test_incomplete_result(self):
        printer = JSONPrinter()
        with pytest.raises(SerializationError):
            printer.result
        printer.object()
        with pytest.raises(SerializationError):
            printer.result

    def test_second_root(self):
        printer = JSONPrinter().value(1)
        with pytest.raises(SerializationError):
            printer.value(2)
