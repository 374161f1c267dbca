"""Per-dialect type lookup tables.

Every dialect resolves a column's ParsedType through one TypeMap. Entries are
keyed by type token first and by base family second; the explicit default
covers the ``unknown`` family and anything else left unmapped.
"""

from dataclasses import dataclass, field
from typing import Dict

from ..database.models import BaseType, ParsedType


@dataclass(frozen=True)
class TypeMap:
    """Type lookup table for one dialect."""
    name: str
    families: Dict[BaseType, str]
    default: str
    tokens: Dict[str, str] = field(default_factory=dict)

    def lookup(self, parsed: ParsedType) -> str:
        """Resolve a parsed type to this dialect's type name."""
        if parsed.token in self.tokens and parsed.base is not BaseType.BOOLEAN:
            return self.tokens[parsed.token]
        return self.families.get(parsed.base, self.default)


SQL_TYPES = TypeMap(
    name="sql",
    families={
        BaseType.INTEGER: "INT",
        BaseType.FLOAT: "DOUBLE",
        BaseType.BOOLEAN: "TINYINT",
        BaseType.TEMPORAL: "DATETIME",
        BaseType.TEXT: "VARCHAR",
        BaseType.JSON: "JSON",
        BaseType.BINARY: "BLOB",
    },
    default="TEXT",
)

LARAVEL_TYPES = TypeMap(
    name="laravel_migration",
    families={
        BaseType.INTEGER: "integer",
        BaseType.FLOAT: "double",
        BaseType.BOOLEAN: "boolean",
        BaseType.TEMPORAL: "timestamp",
        BaseType.TEXT: "string",
        BaseType.JSON: "json",
        BaseType.BINARY: "binary",
    },
    default="string",
    tokens={
        "tinyint": "tinyInteger",
        "smallint": "smallInteger",
        "mediumint": "mediumInteger",
        "bigint": "bigInteger",
        "decimal": "decimal",
        "numeric": "decimal",
        "dec": "decimal",
        "fixed": "decimal",
        "float": "float",
        "date": "date",
        "time": "time",
        "year": "year",
        "char": "char",
        "text": "text",
        "tinytext": "tinyText",
        "mediumtext": "mediumText",
        "longtext": "longText",
        "uuid": "uuid",
        "jsonb": "jsonb",
    },
)

# Unsigned variants of the Laravel integer column methods
LARAVEL_UNSIGNED = {
    "tinyInteger": "unsignedTinyInteger",
    "smallInteger": "unsignedSmallInteger",
    "mediumInteger": "unsignedMediumInteger",
    "integer": "unsignedInteger",
    "bigInteger": "unsignedBigInteger",
}

PRISMA_TYPES = TypeMap(
    name="prisma",
    families={
        BaseType.INTEGER: "Int",
        BaseType.FLOAT: "Float",
        BaseType.BOOLEAN: "Boolean",
        BaseType.TEMPORAL: "DateTime",
        BaseType.TEXT: "String",
        BaseType.JSON: "Json",
        BaseType.BINARY: "Bytes",
    },
    default="String",
    tokens={
        "bigint": "BigInt",
        "bigserial": "BigInt",
        "ubigint": "BigInt",
        "hugeint": "BigInt",
        "decimal": "Decimal",
        "numeric": "Decimal",
        "dec": "Decimal",
        "fixed": "Decimal",
        "number": "Decimal",
        "money": "Decimal",
    },
)

TYPESCRIPT_TYPES = TypeMap(
    name="typescript",
    families={
        BaseType.INTEGER: "number",
        BaseType.FLOAT: "number",
        BaseType.BOOLEAN: "boolean",
        BaseType.TEMPORAL: "Date",
        BaseType.TEXT: "string",
        BaseType.JSON: "Record<string, unknown>",
        BaseType.BINARY: "Uint8Array",
    },
    default="string",
)

ZOD_TYPES = TypeMap(
    name="zod",
    families={
        BaseType.INTEGER: "z.number()",
        BaseType.FLOAT: "z.number()",
        BaseType.BOOLEAN: "z.boolean()",
        BaseType.TEMPORAL: "z.date()",
        BaseType.TEXT: "z.string()",
        BaseType.JSON: "z.record(z.unknown())",
        BaseType.BINARY: "z.instanceof(Uint8Array)",
    },
    default="z.string()",
)

GO_TYPES = TypeMap(
    name="go",
    families={
        BaseType.INTEGER: "int64",
        BaseType.FLOAT: "float64",
        BaseType.BOOLEAN: "bool",
        BaseType.TEMPORAL: "time.Time",
        BaseType.TEXT: "string",
        BaseType.JSON: "string",
        BaseType.BINARY: "[]byte",
    },
    default="string",
)

# Nullable wrapper per Go primitive; anything else becomes a pointer
GO_NULLABLE = {
    "string": "sql.NullString",
    "int64": "sql.NullInt64",
    "uint64": "sql.NullInt64",
    "float64": "sql.NullFloat64",
    "bool": "sql.NullBool",
    "time.Time": "sql.NullTime",
}
