"""
Tests for TypeScript declaration generation.
"""

import pytest
from envmage.core.typegen import (
    TypeFormat,
    detect_value_type,
    parse_format,
    render_types,
)


class TestDetectValueType:
    """Test value type inference."""

    @pytest.mark.parametrize("value", ["true", "false", "TRUE", "False"])
    def test_boolean(self, value):
        assert detect_value_type(value) == "boolean"

    @pytest.mark.parametrize("value", ["0", "3000", "-1", "3.14", "0.5", "1e3", "0x1F"])
    def test_number(self, value):
        assert detect_value_type(value) == "number"

    @pytest.mark.parametrize("value", ["012345", "007"])
    def test_zero_padded_is_string(self, value):
        """Zero-padded values look like identifiers, not numbers."""
        assert detect_value_type(value) == "string"

    def test_json_array(self):
        assert detect_value_type('["a", "b"]') == "array"

    def test_json_object(self):
        assert detect_value_type('{"a": 1}') == "object"

    @pytest.mark.parametrize("value", ["", "postgres://localhost", "secret123", '"quoted"', "null"])
    def test_string(self, value):
        assert detect_value_type(value) == "string"


class TestRenderTypes:
    """Test declaration rendering."""

    env = {"DATABASE_URL": "postgres://localhost", "PORT": "3000", "DEBUG": "true", "OPTIONAL": ""}

    def test_interface(self):
        content = render_types(self.env, TypeFormat.INTERFACE)
        assert "export interface Env {" in content
        assert "  DATABASE_URL: string;" in content
        assert "  PORT: number;" in content
        assert "  DEBUG: boolean;" in content
        assert content.endswith("}\n")

    def test_non_strict_empty_values_optional(self):
        content = render_types(self.env, TypeFormat.INTERFACE)
        assert "  OPTIONAL?: string;" in content

    def test_strict_all_required(self):
        content = render_types(self.env, TypeFormat.INTERFACE, strict=True)
        assert "?:" not in content
        assert "  OPTIONAL: string;" in content

    def test_type_alias(self):
        content = render_types(self.env, TypeFormat.TYPE)
        assert "export type Env = {" in content
        assert content.endswith("};\n")

    def test_const(self):
        content = render_types(self.env, TypeFormat.CONST)
        assert "export const env = {" in content
        assert "  DATABASE_URL: process.env.DATABASE_URL," in content
        assert "} as const;" in content
        assert "export type Env = typeof env;" in content

    def test_const_strict(self):
        content = render_types({"PORT": "1"}, TypeFormat.CONST, strict=True)
        assert "  PORT: process.env.PORT as string," in content

    def test_custom_name(self):
        content = render_types({"A": "1"}, TypeFormat.TYPE, name="AppEnv")
        assert "export type AppEnv = {" in content

    def test_non_identifier_key_quoted(self):
        """Keys that are not identifiers are written as string literals."""
        content = render_types({"MY-KEY": "x"}, TypeFormat.CONST)
        assert '"MY-KEY": process.env["MY-KEY"],' in content

    def test_empty_mapping(self):
        content = render_types({}, TypeFormat.INTERFACE)
        assert "export interface Env {\n}" in content


class TestParseFormat:
    """Test format name coercion."""

    def test_names(self):
        assert parse_format("interface") == TypeFormat.INTERFACE
        assert parse_format("CONST") == TypeFormat.CONST
        assert parse_format(TypeFormat.TYPE) == TypeFormat.TYPE

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown type format"):
            parse_format("class")
