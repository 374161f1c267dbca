"""Prisma schema generator."""

import logging
import re
from collections import Counter
from typing import Dict, List, Sequence, Set, Tuple

from ..database.models import BaseType, ColumnSchema, RelationSchema, TableSchema
from ..database.naming import to_camel_case, to_pascal_case
from .base import SchemaGenerator
from .type_maps import PRISMA_TYPES

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"^-?\d+(\.\d+)?$")


def _column_base(column_name: str) -> str:
    return column_name[:-3] if column_name.endswith("_id") else column_name


class PrismaGenerator(SchemaGenerator):
    """Generates Prisma models with relation fields on both sides.

    Relation fields are only emitted when both tables are part of the
    rendered set, since Prisma requires every referenced model to exist.
    """

    description = "Prisma (Schema)"
    file_extension = "prisma"

    def default_attribute(self, col: ColumnSchema) -> str:
        if col.auto_increment:
            return "@default(autoincrement())"
        if col.default is None:
            return ""

        value = col.default.strip()
        base = col.parsed_type.base
        if value.upper() in ("CURRENT_TIMESTAMP", "NOW()", "CURRENT_TIMESTAMP()"):
            return "@default(now())"
        if base is BaseType.BOOLEAN:
            if value.lower() in ("1", "true", "b'1'"):
                return "@default(true)"
            if value.lower() in ("0", "false", "b'0'"):
                return "@default(false)"
        if col.parsed_type.is_numeric and _NUMBER_RE.match(value):
            return f"@default({value})"
        if base is BaseType.TEXT:
            escaped = value.replace("\\", "\\\\").replace('"', '\\"')
            return f'@default("{escaped}")'
        escaped = value.replace('"', '\\"')
        return f'@default(dbgenerated("{escaped}"))'

    def native_attribute(self, col: ColumnSchema) -> str:
        parsed = col.parsed_type
        if parsed.token == "varchar" and parsed.length is not None:
            return f"@db.VarChar({parsed.length})"
        if parsed.token == "char" and parsed.length is not None:
            return f"@db.Char({parsed.length})"
        if PRISMA_TYPES.lookup(parsed) == "Decimal" and parsed.precision is not None and parsed.scale is not None:
            return f"@db.Decimal({parsed.precision}, {parsed.scale})"
        return ""

    def column_field(self, col: ColumnSchema) -> Tuple[str, str, str]:
        field_type = PRISMA_TYPES.lookup(col.parsed_type)
        if col.nullable and not col.is_primary:
            field_type += "?"
        attributes = []
        if col.is_primary:
            attributes.append("@id")
        default = self.default_attribute(col)
        if default:
            attributes.append(default)
        if col.is_unique:
            attributes.append("@unique")
        native = self.native_attribute(col)
        if native:
            attributes.append(native)
        return col.name, field_type, " ".join(attributes)

    @staticmethod
    def relation_name(source_table: str, rel: RelationSchema) -> str:
        return f"{to_pascal_case(source_table)}_{rel.source_column}"

    def render(self, tables: Sequence[TableSchema]) -> str:
        in_set = self.table_names(tables)

        resolved: Dict[str, List[RelationSchema]] = {}
        incoming: Dict[str, List[Tuple[str, RelationSchema]]] = {t.name: [] for t in tables}
        pair_counts: Counter = Counter()
        for table in tables:
            resolved[table.name] = []
            for rel in table.relations:
                if rel.referenced_table not in in_set:
                    logger.warning(
                        "Skipping relation %s.%s -> %s: table not in export set",
                        table.name, rel.source_column, rel.referenced_table,
                    )
                    continue
                resolved[table.name].append(rel)
                incoming[rel.referenced_table].append((table.name, rel))
                pair_counts[frozenset((table.name, rel.referenced_table))] += 1

        def needs_name(source_table: str, rel: RelationSchema) -> bool:
            return source_table == rel.referenced_table or pair_counts[frozenset((source_table, rel.referenced_table))] > 1

        blocks = []
        for table in tables:
            rows: List[Tuple[str, str, str]] = [self.column_field(col) for col in table.columns]
            taken: Set[str] = {col.name for col in table.columns}

            for rel in resolved[table.name]:
                name = self.unique_name(
                    to_camel_case(rel.referenced_table),
                    taken,
                    to_camel_case(_column_base(rel.source_column)),
                )
                taken.add(name)
                source_col = table.column(rel.source_column)
                optional = source_col is None or source_col.nullable
                label = f'"{self.relation_name(table.name, rel)}", ' if needs_name(table.name, rel) else ""
                rows.append((
                    name,
                    to_pascal_case(rel.referenced_table) + ("?" if optional else ""),
                    f"@relation({label}fields: [{rel.source_column}], "
                    f"references: [{rel.referenced_column}], onDelete: Cascade)",
                ))

            for source_table, rel in incoming[table.name]:
                name = self.unique_name(
                    to_camel_case(source_table),
                    taken,
                    to_camel_case(f"{source_table}_{_column_base(rel.source_column)}"),
                )
                taken.add(name)
                attribute = f'@relation("{self.relation_name(source_table, rel)}")' if needs_name(source_table, rel) else ""
                rows.append((name, f"{to_pascal_case(source_table)}[]", attribute))

            name_width = max((len(r[0]) for r in rows), default=0)
            type_width = max((len(r[1]) for r in rows), default=0)
            lines = [f"model {to_pascal_case(table.name)} {{"]
            for name, field_type, attributes in rows:
                line = f"  {name.ljust(name_width)} {field_type.ljust(type_width)} {attributes}"
                lines.append(line.rstrip())
            if rows:
                lines.append("")
            lines.append(f'  @@map("{table.name}")')
            lines.append("}")
            blocks.append("\n".join(lines))

        return self.join_blocks(blocks)
