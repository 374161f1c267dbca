"""Tests for the Laravel migration and model generators."""

import pytest

from schema_export.database.base import ColumnRecord, RelationRecord
from schema_export.database.models import BaseType
from schema_export.generators.base import TIMESTAMP_COLUMNS
from schema_export.generators.laravel import (
    LaravelMigrationGenerator,
    LaravelModelGenerator,
    php_string,
)

from tests.fixtures import make_table


def body_lines(output: str):
    """Schema-builder lines of a rendered migration."""
    return [line.strip() for line in output.splitlines() if line.strip().startswith("$table->")]


class TestPhpString:

    def test_quotes_and_escapes(self):
        assert php_string("users") == "'users'"
        assert php_string("it's") == "'it\\'s'"
        assert php_string("App\\Models") == "'App\\\\Models'"


class TestLaravelMigrationGenerator:
    """Test migration rendering."""

    def test_users_migration(self, users_table):
        """Test identity shorthand, string columns and collapsed timestamps."""
        lines = body_lines(LaravelMigrationGenerator().render([users_table]))

        assert lines == [
            "$table->id();",
            "$table->string('name', 255);",
            "$table->string('email', 255)->unique();",
            "$table->timestamps();",
        ]

    def test_timestamp_columns_collapse(self, users_table):
        output = LaravelMigrationGenerator().render([users_table])
        assert "'created_at'" not in output
        assert "'updated_at'" not in output
        assert output.count("$table->timestamps();") == 1

    def test_orders_migration(self, orders_table):
        lines = body_lines(LaravelMigrationGenerator().render([orders_table]))

        assert lines == [
            "$table->id();",
            "$table->integer('user_id');",
            "$table->decimal('total', 10, 2)->default('0.00');",
            "$table->string('status', 50)->default('pending');",
            "$table->json('metadata')->nullable();",
            "$table->boolean('is_paid')->default('0');",
            "$table->foreign('user_id')->references('id')->on('users')->onDelete('cascade');",
            "$table->timestamps();",
            "$table->softDeletes();",
        ]

    def test_only_created_at_gives_no_timestamps(self):
        """Test timestamps() needs both created_at and updated_at."""
        table = make_table("logs", [
            ColumnRecord(field="id", raw_type="bigint", nullable=False, key="PRI", extra="auto_increment"),
            ColumnRecord(field="created_at", raw_type="timestamp"),
        ])
        output = LaravelMigrationGenerator().render([table])
        assert "timestamps()" not in output
        assert "'created_at'" not in output

    @pytest.mark.parametrize("raw_type,expected", [
        ("bigint(20) unsigned", "$table->unsignedBigInteger('c')->nullable();"),
        ("int unsigned", "$table->unsignedInteger('c')->nullable();"),
        ("text", "$table->text('c')->nullable();"),
        ("char(2)", "$table->char('c', 2)->nullable();"),
        ("date", "$table->date('c')->nullable();"),
        ("datetime", "$table->timestamp('c')->nullable();"),
        ("double", "$table->double('c')->nullable();"),
        ("blob", "$table->binary('c')->nullable();"),
        ("geometry", "$table->string('c') /* geometry */->nullable();"),
    ])
    def test_column_types(self, raw_type, expected):
        table = make_table("t", [ColumnRecord(field="c", raw_type=raw_type)])
        assert body_lines(LaravelMigrationGenerator().render([table])) == [expected]

    def test_named_identity_column(self):
        table = make_table("t", [
            ColumnRecord(field="user_key", raw_type="int", nullable=False, key="PRI", extra="auto_increment"),
        ])
        assert body_lines(LaravelMigrationGenerator().render([table])) == ["$table->id('user_key');"]

    def test_use_current(self):
        table = make_table("t", [ColumnRecord(field="seen_at", raw_type="timestamp", default="CURRENT_TIMESTAMP")])
        assert body_lines(LaravelMigrationGenerator().render([table])) == [
            "$table->timestamp('seen_at')->nullable()->useCurrent();",
        ]

    def test_migration_structure(self, users_table):
        output = LaravelMigrationGenerator().render([users_table])
        assert output.startswith("<?php")
        assert "Schema::create('users', function (Blueprint $table) {" in output
        assert "Schema::dropIfExists('users');" in output


class TestLaravelModelGenerator:
    """Test Eloquent model rendering."""

    def test_fillable_count(self, shop_tables):
        """Test fillable excludes auto-increment and timestamp columns."""
        for table in shop_tables:
            fillable = LaravelModelGenerator.fillable(table)
            expected = (
                len(table.columns)
                - sum(1 for c in table.columns if c.auto_increment)
                - sum(1 for name in TIMESTAMP_COLUMNS if table.has_column(name))
            )
            assert len(fillable) == expected

    def test_orders_fillable(self, orders_table):
        assert LaravelModelGenerator.fillable(orders_table) == ["user_id", "total", "status", "metadata", "is_paid"]

    def test_casts(self, orders_table):
        """Test JSON columns cast to array and boolean columns to boolean."""
        casts = dict(LaravelModelGenerator.casts(orders_table))
        assert casts == {"metadata": "array", "is_paid": "boolean"}
        for col in orders_table.columns:
            if col.parsed_type.base is BaseType.JSON:
                assert casts[col.name] == "array"
            if col.parsed_type.base is BaseType.BOOLEAN:
                assert casts[col.name] == "boolean"

    def test_orders_model(self, orders_table):
        output = LaravelModelGenerator().render([orders_table])

        assert "namespace App\\Models;" in output
        assert "class Orders extends Model" in output
        assert "    use SoftDeletes;" in output
        assert "use Illuminate\\Database\\Eloquent\\Relations\\BelongsTo;" in output
        assert "public $timestamps = false;" not in output
        assert "            'metadata' => 'array'," in output
        assert "    public function users(): BelongsTo" in output
        assert "        return $this->belongsTo(Users::class, 'user_id');" in output

    def test_model_without_timestamps(self):
        table = make_table("tags", [
            ColumnRecord(field="id", raw_type="int", nullable=False, key="PRI", extra="auto_increment"),
            ColumnRecord(field="label", raw_type="varchar(40)"),
        ])
        output = LaravelModelGenerator().render([table])
        assert "public $timestamps = false;" in output
        assert "SoftDeletes" not in output
        assert "BelongsTo" not in output

    def test_custom_namespace(self, users_table):
        output = LaravelModelGenerator(namespace="Shop\\Domain").render([users_table])
        assert "namespace Shop\\Domain;" in output

    def test_relation_method_names_are_unique(self):
        """Test two relations to the same table fall back to column-based names."""
        table = make_table(
            "messages",
            [
                ColumnRecord(field="id", raw_type="int", nullable=False, key="PRI"),
                ColumnRecord(field="sender_id", raw_type="int"),
                ColumnRecord(field="recipient_id", raw_type="int"),
            ],
            [
                RelationRecord("messages", "sender_id", "users", "id"),
                RelationRecord("messages", "recipient_id", "users", "id"),
            ],
        )
        output = LaravelModelGenerator().render([table])
        assert "public function users(): BelongsTo" in output
        assert "public function recipient(): BelongsTo" in output
