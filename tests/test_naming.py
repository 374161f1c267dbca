"""Tests for identifier naming transforms."""

import pytest

from schema_export.database.naming import to_camel_case, to_pascal_case


class TestPascalCase:

    @pytest.mark.parametrize("identifier,expected", [
        ("users", "Users"),
        ("order_items", "OrderItems"),
        ("user_id", "UserId"),
        ("__a__b__", "AB"),
        ("already_Cased", "AlreadyCased"),
        ("x", "X"),
        ("", ""),
        ("_", ""),
    ])
    def test_to_pascal_case(self, identifier, expected):
        assert to_pascal_case(identifier) == expected

    def test_inner_casing_is_kept(self):
        """Test only the first letter of each segment changes."""
        assert to_pascal_case("apiKEY_value") == "ApiKEYValue"


class TestCamelCase:

    @pytest.mark.parametrize("identifier,expected", [
        ("users", "users"),
        ("order_items", "orderItems"),
        ("Order_items", "orderItems"),
        ("", ""),
        ("__", ""),
    ])
    def test_to_camel_case(self, identifier, expected):
        assert to_camel_case(identifier) == expected
