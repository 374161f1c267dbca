"""Zod validation schema generator."""

from typing import Sequence

from ..database.models import TableSchema
from ..database.naming import to_pascal_case
from .base import SchemaGenerator
from .type_maps import ZOD_TYPES
from .typescript import property_key


class ZodGenerator(SchemaGenerator):
    """Generates a z.object schema and inferred type per table."""

    description = "Zod (Validation Schemas)"
    file_extension = "ts"

    def render_table(self, table: TableSchema) -> str:
        type_name = to_pascal_case(table.name)
        schema_name = f"{type_name}Schema"

        lines = [f"export const {schema_name} = z.object({{"]
        for col in table.columns:
            chain = ZOD_TYPES.lookup(col.parsed_type)
            if col.nullable:
                chain += ".nullable()"
            lines.append(f"  {property_key(col.name)}: {chain},")
        lines.append("});")
        lines.append("")
        lines.append(f"export type {type_name} = z.infer<typeof {schema_name}>;")
        return "\n".join(lines)

    def render(self, tables: Sequence[TableSchema]) -> str:
        return self.join_blocks(["import { z } from 'zod';"] + [self.render_table(t) for t in tables])
