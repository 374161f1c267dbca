"""Tests for raw type string parsing."""

import pytest

from schema_export.database.models import BaseType, ParsedType
from schema_export.database.type_parser import parse_type


class TestTypeFamilies:
    """Test mapping of type tokens to base families."""

    @pytest.mark.parametrize("raw_type,expected", [
        ("int(11)", BaseType.INTEGER),
        ("BIGINT", BaseType.INTEGER),
        ("smallint(6)", BaseType.INTEGER),
        ("double", BaseType.FLOAT),
        ("decimal(10,2)", BaseType.FLOAT),
        ("boolean", BaseType.BOOLEAN),
        ("datetime", BaseType.TEMPORAL),
        ("timestamp with time zone", BaseType.TEMPORAL),
        ("varchar(255)", BaseType.TEXT),
        ("longtext", BaseType.TEXT),
        ("enum('draft','published')", BaseType.TEXT),
        ("json", BaseType.JSON),
        ("blob", BaseType.BINARY),
        ("varbinary(16)", BaseType.BINARY),
    ])
    def test_known_families(self, raw_type, expected):
        """Test recognised tokens map to their family."""
        assert parse_type(raw_type).base is expected

    def test_token_is_lowercased(self):
        """Test the leading token is kept lower-cased."""
        assert parse_type("  VARCHAR(10) ").token == "varchar"

    def test_tinyint_one_is_boolean(self):
        """Test tinyint(1) follows the MySQL boolean convention."""
        assert parse_type("tinyint(1)").base is BaseType.BOOLEAN
        assert parse_type("tinyint(4)").base is BaseType.INTEGER

    def test_bit_width(self):
        """Test bit(1) is boolean and wider bit fields are binary."""
        assert parse_type("bit(1)").base is BaseType.BOOLEAN
        assert parse_type("bit(8)").base is BaseType.BINARY


class TestTypeArguments:
    """Test extraction of length, precision, scale and unsigned."""

    def test_length(self):
        parsed = parse_type("varchar(255)")
        assert parsed.length == 255
        assert parsed.precision is None
        assert parsed.scale is None

    def test_decimal_precision_and_scale(self):
        """Test decimal arguments are precision and scale, not a length."""
        parsed = parse_type("decimal(10,2)")
        assert parsed.precision == 10
        assert parsed.scale == 2
        assert parsed.length is None

    def test_decimal_precision_only(self):
        parsed = parse_type("numeric(8)")
        assert parsed.precision == 8
        assert parsed.scale is None

    def test_float_with_two_arguments(self):
        parsed = parse_type("double(8,2)")
        assert parsed.precision == 8
        assert parsed.scale == 2

    def test_float_with_one_argument_is_length(self):
        parsed = parse_type("float(7)")
        assert parsed.length == 7
        assert parsed.precision is None

    def test_unsigned(self):
        parsed = parse_type("int(10) unsigned")
        assert parsed.base is BaseType.INTEGER
        assert parsed.length == 10
        assert parsed.unsigned is True
        assert parse_type("int(10)").unsigned is False

    def test_enum_values_are_not_arguments(self):
        """Test non-numeric argument lists are ignored."""
        parsed = parse_type("enum('a','b')")
        assert parsed.length is None
        assert parsed.precision is None


class TestParserTotality:
    """Test that parsing never fails and is stable."""

    @pytest.mark.parametrize("raw_type", [
        "",
        None,
        "   ",
        "geometry",
        "point(1,2)",
        "123abc",
        "(255)",
        "varchar(",
        "decimal(a,b)",
        "user_defined_type",
        "int[]",
    ])
    def test_never_raises(self, raw_type):
        """Test arbitrary input always yields a ParsedType."""
        assert isinstance(parse_type(raw_type), ParsedType)

    def test_unknown_types(self):
        """Test unrecognised tokens fall back to unknown."""
        assert parse_type("geometry").base is BaseType.UNKNOWN
        assert parse_type("geometry").token == "geometry"
        assert parse_type("").base is BaseType.UNKNOWN
        assert parse_type("").token == ""
        assert parse_type(None).base is BaseType.UNKNOWN

    @pytest.mark.parametrize("raw_type", [
        "int(11)", "decimal(10,2)", "varchar(255)", "tinyint(1)", "int(10) unsigned", "geometry", "",
    ])
    def test_idempotent(self, raw_type):
        """Test parsing the same string twice gives equal results."""
        assert parse_type(raw_type) == parse_type(raw_type)
