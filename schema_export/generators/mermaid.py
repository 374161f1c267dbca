"""Mermaid ER diagram generator."""

import logging
from typing import List, Sequence, Set

from ..database.models import BaseType, ColumnKey, ColumnSchema, TableSchema
from .base import SchemaGenerator

logger = logging.getLogger(__name__)


class MermaidGenerator(SchemaGenerator):
    """Generates a Mermaid erDiagram.

    Emits one relation line per unordered pair of related tables, however
    many columns link the pair. Relations to tables outside the rendered set
    are skipped.
    """

    description = "Mermaid (ER Diagram)"
    file_extension = "mmd"

    @staticmethod
    def key_marker(table: TableSchema, col: ColumnSchema) -> str:
        if col.key is ColumnKey.PRIMARY:
            return "PK"
        if col.key is ColumnKey.MULTI or table.relation_for(col.name):
            return "FK"
        if col.key is ColumnKey.UNIQUE:
            return "UK"
        return ""

    @staticmethod
    def attribute_type(col: ColumnSchema) -> str:
        if col.parsed_type.token:
            return col.parsed_type.token
        return BaseType.UNKNOWN.value

    def render(self, tables: Sequence[TableSchema]) -> str:
        lines: List[str] = ["erDiagram"]

        for table in tables:
            lines.append(f"    {table.name} {{")
            for col in table.columns:
                parts = [self.attribute_type(col), col.name]
                marker = self.key_marker(table, col)
                if marker:
                    parts.append(marker)
                lines.append(f"        {' '.join(parts)}")
            lines.append("    }")

        in_set = self.table_names(tables)
        seen: Set[frozenset] = set()
        for table in tables:
            for rel in table.relations:
                if rel.referenced_table not in in_set:
                    logger.warning(
                        "Skipping relation %s.%s -> %s: table not in diagram",
                        table.name, rel.source_column, rel.referenced_table,
                    )
                    continue
                pair = frozenset((table.name, rel.referenced_table))
                if pair in seen:
                    continue
                seen.add(pair)
                lines.append(f'    {table.name} }}o--|| {rel.referenced_table} : "references"')

        return "\n".join(lines)
