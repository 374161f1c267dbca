"""Go struct generator."""

from typing import List, Sequence, Set

from ..database.models import BaseType, ColumnSchema, TableSchema
from ..database.naming import to_pascal_case
from .base import SchemaGenerator
from .type_maps import GO_NULLABLE, GO_TYPES


class GoGenerator(SchemaGenerator):
    """Generates Go structs with db/json tags.

    Nullable scalars use the matching database/sql Null* wrapper.
    """

    description = "Go (Structs)"
    file_extension = "go"

    def __init__(self, package: str = "models"):
        self.package = package

    def go_type(self, col: ColumnSchema) -> str:
        go_type = GO_TYPES.lookup(col.parsed_type)
        if col.parsed_type.base is BaseType.INTEGER and col.parsed_type.unsigned:
            go_type = "uint64"
        if col.nullable:
            go_type = GO_NULLABLE.get(go_type, "*" + go_type)
        return go_type

    def render_struct(self, table: TableSchema) -> str:
        lines = [f"type {to_pascal_case(table.name)} struct {{"]
        for col in table.columns:
            field_name = to_pascal_case(col.name)
            go_type = self.go_type(col)
            lines.append(f'    {field_name:<20} {go_type:<15} `db:"{col.name}" json:"{col.name}"`')
        lines.append("}")
        return "\n".join(lines)

    def imports(self, tables: Sequence[TableSchema]) -> List[str]:
        used: Set[str] = set()
        for table in tables:
            for col in table.columns:
                go_type = self.go_type(col)
                if go_type.startswith("sql."):
                    used.add("database/sql")
                if "time.Time" in go_type:
                    used.add("time")
        return sorted(used)

    def render(self, tables: Sequence[TableSchema]) -> str:
        header = [f"package {self.package}"]
        imports = self.imports(tables)
        if imports:
            header.append("")
            header.append("import (")
            header.extend(f'    "{path}"' for path in imports)
            header.append(")")
        return self.join_blocks(["\n".join(header)] + [self.render_struct(t) for t in tables])
