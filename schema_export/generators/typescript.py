"""TypeScript interface generator."""

import re
from typing import Sequence

from ..database.models import TableSchema
from ..database.naming import to_pascal_case
from .base import SchemaGenerator
from .type_maps import TYPESCRIPT_TYPES

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def property_key(name: str) -> str:
    """Quote property names that are not valid identifiers."""
    if _IDENTIFIER_RE.match(name):
        return name
    return "'" + name.replace("'", "\\'") + "'"


class TypeScriptGenerator(SchemaGenerator):
    """Generates one exported interface per table.

    Nullable columns are typed as a union with null.
    """

    description = "TypeScript (Interfaces)"
    file_extension = "ts"

    def render_table(self, table: TableSchema) -> str:
        lines = [f"export interface {to_pascal_case(table.name)} {{"]
        for col in table.columns:
            rel = table.relation_for(col.name)
            if rel:
                lines.append(f"  /** References {rel.referenced_table}.{rel.referenced_column} */")
            ts_type = TYPESCRIPT_TYPES.lookup(col.parsed_type)
            if col.nullable:
                ts_type += " | null"
            lines.append(f"  {property_key(col.name)}: {ts_type};")
        lines.append("}")
        return "\n".join(lines)

    def render(self, tables: Sequence[TableSchema]) -> str:
        return self.join_blocks([self.render_table(t) for t in tables])
