"""Tests for the Prisma schema generator."""

import logging
import re

from schema_export.database.base import ColumnRecord, RelationRecord
from schema_export.generators.prisma import PrismaGenerator

from tests.fixtures import make_table


def field_line(output: str, name: str) -> str:
    """Return the field line for ``name`` with runs of spaces collapsed."""
    for line in output.splitlines():
        parts = line.split()
        if parts and parts[0] == name:
            return " ".join(parts)
    raise AssertionError(f"No field {name!r} in:\n{output}")


def model_block(output: str, model: str) -> str:
    match = re.search(rf"^model {model} \{{\n(.*?)^\}}", output, re.M | re.S)
    assert match, f"No model {model} in:\n{output}"
    return match.group(1)


class TestPrismaFields:
    """Test scalar field rendering."""

    def test_users_fields(self, users_table):
        output = PrismaGenerator().render([users_table])

        assert field_line(output, "id") == "id Int @id @default(autoincrement())"
        assert field_line(output, "name") == "name String @db.VarChar(255)"
        assert field_line(output, "email") == "email String @unique @db.VarChar(255)"
        assert field_line(output, "created_at") == "created_at DateTime?"
        assert '  @@map("users")' in output

    def test_orders_fields(self, orders_table):
        block = model_block(PrismaGenerator().render([orders_table]), "Orders")

        assert field_line(block, "user_id") == "user_id Int"
        assert field_line(block, "total") == "total Decimal @default(0.00) @db.Decimal(10, 2)"
        assert field_line(block, "status") == 'status String @default("pending") @db.VarChar(50)'
        assert field_line(block, "metadata") == "metadata Json?"
        assert field_line(block, "is_paid") == "is_paid Boolean @default(false)"
        assert field_line(block, "created_at") == "created_at DateTime? @default(now())"

    def test_columns_are_aligned(self, users_table):
        """Test field types start in the same column on every line."""
        block = model_block(PrismaGenerator().render([users_table]), "Users")
        field_lines = [line for line in block.splitlines() if line.strip() and not line.strip().startswith("@@")]
        type_starts = {line.index(line.split()[1], 2 + len(line.split()[0])) for line in field_lines}
        assert len(type_starts) == 1

    def test_big_integer(self):
        table = make_table("events", [
            ColumnRecord(field="id", raw_type="bigint(20) unsigned", nullable=False, key="PRI", extra="auto_increment"),
        ])
        assert field_line(PrismaGenerator().render([table]), "id") == "id BigInt @id @default(autoincrement())"


class TestPrismaRelations:
    """Test relation fields on both sides."""

    def test_forward_and_back_relation(self, shop_tables):
        output = PrismaGenerator().render(shop_tables)

        orders = model_block(output, "Orders")
        users = model_block(output, "Users")
        assert field_line(orders, "users") == (
            "users Users @relation(fields: [user_id], references: [id], onDelete: Cascade)"
        )
        assert field_line(users, "orders") == "orders Orders[]"

    def test_relation_outside_rendered_set_is_skipped(self, orders_table, caplog):
        with caplog.at_level(logging.WARNING, logger="schema_export.generators.prisma"):
            output = PrismaGenerator().render([orders_table])

        assert "@relation" not in output
        assert "Skipping relation orders.user_id -> users" in caplog.text

    def test_self_relation_is_named(self):
        table = make_table(
            "categories",
            [
                ColumnRecord(field="id", raw_type="int", nullable=False, key="PRI"),
                ColumnRecord(field="parent_id", raw_type="int", key="MUL"),
            ],
            [RelationRecord("categories", "parent_id", "categories", "id")],
        )
        output = PrismaGenerator().render([table])

        assert field_line(output, "categories") == (
            'categories Categories? @relation("Categories_parent_id", fields: [parent_id], '
            "references: [id], onDelete: Cascade)"
        )
        assert field_line(output, "categoriesParent") == (
            'categoriesParent Categories[] @relation("Categories_parent_id")'
        )

    def test_multiple_relations_between_pair_are_named(self, users_table):
        messages = make_table(
            "messages",
            [
                ColumnRecord(field="id", raw_type="int", nullable=False, key="PRI"),
                ColumnRecord(field="sender_id", raw_type="int", nullable=False),
                ColumnRecord(field="recipient_id", raw_type="int", nullable=False),
            ],
            [
                RelationRecord("messages", "sender_id", "users", "id"),
                RelationRecord("messages", "recipient_id", "users", "id"),
            ],
        )
        output = PrismaGenerator().render([users_table, messages])

        block = model_block(output, "Messages")
        assert '@relation("Messages_sender_id", fields: [sender_id]' in field_line(block, "users")
        assert '@relation("Messages_recipient_id", fields: [recipient_id]' in field_line(block, "recipient")

        users = model_block(output, "Users")
        assert field_line(users, "messages") == 'messages Messages[] @relation("Messages_sender_id")'
        assert field_line(users, "messagesRecipient") == (
            'messagesRecipient Messages[] @relation("Messages_recipient_id")'
        )
