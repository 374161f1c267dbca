"""Native DDL generator (CREATE TABLE statements)."""

import re
from typing import List, Sequence, Tuple

from ..database.models import ColumnSchema, ParsedType, TableSchema
from .base import SchemaGenerator
from .type_maps import SQL_TYPES

_NUMBER_RE = re.compile(r"^-?\d+(\.\d+)?$")
_BIT_HEX_RE = re.compile(r"^([bx]'[0-9a-f]*'|0x[0-9a-f]+|0b[01]+)$", re.IGNORECASE)
_RAW_ARGS_RE = re.compile(r"\(.*\)", re.DOTALL)
_ARGS_OR_MODIFIER_RE = re.compile(r"\([^)]*\)|\b(unsigned|zerofill)\b")
_KEYWORD_DEFAULTS = {"NULL", "CURRENT_TIMESTAMP", "CURRENT_DATE", "CURRENT_TIME", "TRUE", "FALSE"}

# Multi-word type names, as (name before the arguments, name after them)
MULTI_WORD_TYPES = {
    "character varying": ("VARCHAR", ""),
    "char varying": ("VARCHAR", ""),
    "bit varying": ("BIT VARYING", ""),
    "double precision": ("DOUBLE PRECISION", ""),
    "timestamp with time zone": ("TIMESTAMP", " WITH TIME ZONE"),
    "timestamp without time zone": ("TIMESTAMP", ""),
    "time with time zone": ("TIME", " WITH TIME ZONE"),
    "time without time zone": ("TIME", ""),
}


def _type_name(parsed: ParsedType, raw_type: str) -> Tuple[str, str]:
    phrase = " ".join(_ARGS_OR_MODIFIER_RE.sub(" ", raw_type.lower()).split())
    if phrase in MULTI_WORD_TYPES:
        return MULTI_WORD_TYPES[phrase]
    return (parsed.token.upper() if parsed.token else SQL_TYPES.lookup(parsed)), ""


def native_type(parsed: ParsedType, raw_type: str = "") -> str:
    """Inverse-map a parsed type to its native type, e.g. DECIMAL(10,2).

    A non-numeric argument list such as the values of ``enum('a','b')`` is
    copied from ``raw_type`` unchanged.
    """
    name, suffix = _type_name(parsed, raw_type)
    if parsed.precision is not None and parsed.scale is not None:
        name += f"({parsed.precision},{parsed.scale})"
    elif parsed.precision is not None:
        name += f"({parsed.precision})"
    elif parsed.length is not None:
        name += f"({parsed.length})"
    else:
        match = _RAW_ARGS_RE.search(raw_type)
        if match:
            name += match.group(0)
    name += suffix
    if parsed.unsigned:
        name += " UNSIGNED"
    return name


def quote_identifier(name: str) -> str:
    return "`" + name.replace("`", "``") + "`"


def format_default(value: str) -> str:
    """Render a default value: numbers, bit and hex literals, keywords and function calls stay bare."""
    stripped = value.strip()
    if (
        _NUMBER_RE.match(stripped)
        or _BIT_HEX_RE.match(stripped)
        or stripped.upper() in _KEYWORD_DEFAULTS
        or stripped.endswith(")")
    ):
        return stripped
    return "'" + value.replace("'", "''") + "'"


class SqlGenerator(SchemaGenerator):
    """Generates CREATE TABLE statements with inline keys and foreign key constraints.

    Every foreign key is emitted with ON DELETE CASCADE regardless of the live
    constraint's delete rule.
    """

    description = "SQL (Create Table)"
    file_extension = "sql"

    def render_column(self, col: ColumnSchema) -> str:
        parts = [quote_identifier(col.name), native_type(col.parsed_type, col.raw_type)]
        if not col.nullable:
            parts.append("NOT NULL")
        if col.default is not None:
            parts.append(f"DEFAULT {format_default(col.default)}")
        for flag in sorted(col.extra_flags):
            if flag.startswith("on update "):
                parts.append(flag.upper())
        if col.auto_increment:
            parts.append("AUTO_INCREMENT")
        # Composite primary keys stay as independently tagged columns
        if col.is_primary:
            parts.append("PRIMARY KEY")
        elif col.is_unique:
            parts.append("UNIQUE")
        return " ".join(parts)

    def render_table(self, table: TableSchema) -> str:
        definitions: List[str] = [self.render_column(col) for col in table.columns]
        for rel in table.relations:
            definitions.append(
                f"CONSTRAINT {quote_identifier(f'fk_{table.name}_{rel.source_column}')} "
                f"FOREIGN KEY ({quote_identifier(rel.source_column)}) "
                f"REFERENCES {quote_identifier(rel.referenced_table)} ({quote_identifier(rel.referenced_column)}) "
                f"ON DELETE CASCADE"
            )

        lines = [f"CREATE TABLE {quote_identifier(table.name)} ("]
        if definitions:
            lines.append(",\n".join(f"  {d}" for d in definitions))
        lines.append(");")
        return "\n".join(lines)

    def render(self, tables: Sequence[TableSchema]) -> str:
        return self.join_blocks([self.render_table(t) for t in tables])
