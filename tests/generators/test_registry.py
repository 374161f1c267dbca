"""Tests for dialect dispatch."""

import pytest

from schema_export.errors import UnknownDialectError
from schema_export.generators import GENERATORS, Dialect, generate, get_generator
from schema_export.generators.base import SchemaGenerator
from schema_export.generators.go import GoGenerator
from schema_export.generators.laravel import LaravelModelGenerator

from tests.fixtures import ORDERS_RECORDS, SHOP_RELATIONS, USERS_RECORDS, make_table


class TestDialect:

    def test_every_dialect_has_a_generator(self):
        assert set(GENERATORS) == set(Dialect)
        for generator_cls in GENERATORS.values():
            assert issubclass(generator_cls, SchemaGenerator)
            assert generator_cls.description
            assert generator_cls.file_extension

    @pytest.mark.parametrize("value,expected", [
        ("sql", Dialect.SQL),
        ("PRISMA", Dialect.PRISMA),
        (" laravel_model ", Dialect.LARAVEL_MODEL),
        (Dialect.GO, Dialect.GO),
    ])
    def test_parse(self, value, expected):
        assert Dialect.parse(value) is expected

    def test_parse_unknown(self):
        with pytest.raises(UnknownDialectError) as exc_info:
            Dialect.parse("cobol")
        assert exc_info.value.code == "UNKNOWN_DIALECT"
        assert exc_info.value.details["dialect"] == "cobol"
        assert "sql" in exc_info.value.details["supported"]


class TestGetGenerator:

    def test_options_reach_their_dialect(self):
        generator = get_generator("go", go_package="store", laravel_namespace="Shop\\Models")
        assert isinstance(generator, GoGenerator)
        assert generator.package == "store"

        model_generator = get_generator(Dialect.LARAVEL_MODEL, go_package="store", laravel_namespace="Shop\\Models")
        assert isinstance(model_generator, LaravelModelGenerator)
        assert model_generator.namespace == "Shop\\Models"

    def test_none_options_keep_defaults(self):
        assert get_generator("go", go_package=None).package == "models"

    def test_unknown_target(self, shop_tables):
        with pytest.raises(UnknownDialectError):
            generate("yaml", shop_tables)


class TestDeterminism:
    """Test every dialect renders identical text for identical input."""

    @pytest.mark.parametrize("dialect", list(Dialect))
    def test_deterministic(self, dialect, shop_tables):
        """Test independently built, structurally equal tables render the same."""
        rebuilt = [
            make_table("users", USERS_RECORDS),
            make_table("orders", ORDERS_RECORDS, SHOP_RELATIONS),
        ]
        assert rebuilt == shop_tables
        assert all(a is not b for a, b in zip(rebuilt, shop_tables))

        first = generate(dialect, shop_tables)
        second = generate(dialect, rebuilt)
        assert first == second
        assert first

    @pytest.mark.parametrize("dialect", list(Dialect))
    def test_empty_table_list(self, dialect):
        """Test rendering nothing never fails."""
        assert isinstance(generate(dialect, []), str)
