"""Tests for the Mermaid ER diagram generator."""

import logging

from schema_export.database.base import ColumnRecord, RelationRecord
from schema_export.generators.mermaid import MermaidGenerator

from tests.fixtures import make_table


class TestMermaidGenerator:

    def test_shop_diagram(self, shop_tables):
        output = MermaidGenerator().render(shop_tables)
        lines = output.splitlines()

        assert lines[0] == "erDiagram"
        assert "    users {" in lines
        assert "        int id PK" in lines
        assert "        varchar email UK" in lines
        assert "        int user_id FK" in lines
        assert "        json metadata" in lines
        assert lines[-1] == '    orders }o--|| users : "references"'

    def test_one_line_per_related_pair(self):
        """Test several relations between two tables give a single relation line."""
        accounts = make_table(
            "accounts",
            [
                ColumnRecord(field="id", raw_type="int", key="PRI"),
                ColumnRecord(field="owner_id", raw_type="int"),
            ],
            [RelationRecord("accounts", "owner_id", "people", "id")],
        )
        people = make_table(
            "people",
            [
                ColumnRecord(field="id", raw_type="int", key="PRI"),
                ColumnRecord(field="primary_account_id", raw_type="int"),
                ColumnRecord(field="backup_account_id", raw_type="int"),
            ],
            [
                RelationRecord("people", "primary_account_id", "accounts", "id"),
                RelationRecord("people", "backup_account_id", "accounts", "id"),
            ],
        )
        output = MermaidGenerator().render([accounts, people])

        relation_lines = [line for line in output.splitlines() if "}o--||" in line]
        assert relation_lines == ['    accounts }o--|| people : "references"']

    def test_relation_source_without_key_is_foreign(self):
        table = make_table(
            "posts",
            [ColumnRecord(field="author_id", raw_type="int")],
            [RelationRecord("posts", "author_id", "posts", "id")],
        )
        assert "        int author_id FK" in MermaidGenerator().render([table])

    def test_unknown_type_label(self):
        table = make_table("t", [ColumnRecord(field="weird", raw_type="")])
        assert "        unknown weird" in MermaidGenerator().render([table])

    def test_relation_outside_diagram_is_skipped(self, orders_table, caplog):
        with caplog.at_level(logging.WARNING, logger="schema_export.generators.mermaid"):
            output = MermaidGenerator().render([orders_table])

        assert "}o--||" not in output
        assert "Skipping relation orders.user_id -> users" in caplog.text
