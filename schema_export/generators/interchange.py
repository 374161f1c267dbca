"""Structural JSON dump of the schema IR and its loader.

The dump is the only format whose shape is a stable contract: loading a
dump yields tables equal to the ones that were dumped.
"""

import json
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from ..database.models import ColumnKey, ColumnSchema, ParsedType, RelationSchema, TableSchema
from ..database.type_parser import parse_type
from ..errors import InterchangeError
from .base import SchemaGenerator


class ParsedTypeDocument(BaseModel):
    """Informational view of the parsed type; recomputed from ``type`` on load."""
    base: str
    length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    unsigned: bool = False

    @classmethod
    def from_parsed(cls, parsed: ParsedType) -> "ParsedTypeDocument":
        return cls(
            base=parsed.base.value,
            length=parsed.length,
            precision=parsed.precision,
            scale=parsed.scale,
            unsigned=parsed.unsigned,
        )


class ColumnDocument(BaseModel):
    name: str
    raw_type: str = Field(alias="type")
    nullable: bool = True
    key: ColumnKey = ColumnKey.NONE
    default: Optional[str] = None
    auto_increment: bool = Field(default=False, alias="autoIncrement")
    extra: List[str] = Field(default_factory=list)
    parsed_type: Optional[ParsedTypeDocument] = Field(default=None, alias="parsedType")

    class Config:
        populate_by_name = True

    @classmethod
    def from_column(cls, col: ColumnSchema) -> "ColumnDocument":
        return cls(
            name=col.name,
            raw_type=col.raw_type,
            nullable=col.nullable,
            key=col.key,
            default=col.default,
            auto_increment=col.auto_increment,
            extra=sorted(col.extra_flags),
            parsed_type=ParsedTypeDocument.from_parsed(col.parsed_type),
        )

    def to_column(self) -> ColumnSchema:
        return ColumnSchema(
            name=self.name,
            raw_type=self.raw_type,
            parsed_type=parse_type(self.raw_type),
            nullable=self.nullable,
            key=self.key,
            default=self.default,
            auto_increment=self.auto_increment,
            extra_flags=frozenset(self.extra),
        )


class RelationDocument(BaseModel):
    column: str
    referenced_table: str = Field(alias="referencedTable")
    referenced_column: str = Field(alias="referencedColumn")

    class Config:
        populate_by_name = True


class TableDocument(BaseModel):
    name: str
    columns: List[ColumnDocument] = Field(default_factory=list)
    relations: List[RelationDocument] = Field(default_factory=list)

    @classmethod
    def from_table(cls, table: TableSchema) -> "TableDocument":
        return cls(
            name=table.name,
            columns=[ColumnDocument.from_column(c) for c in table.columns],
            relations=[
                RelationDocument(
                    column=r.source_column,
                    referenced_table=r.referenced_table,
                    referenced_column=r.referenced_column,
                )
                for r in table.relations
            ],
        )

    def to_table(self) -> TableSchema:
        return TableSchema(
            name=self.name,
            columns=tuple(c.to_column() for c in self.columns),
            relations=tuple(
                RelationSchema(
                    source_column=r.column,
                    referenced_table=r.referenced_table,
                    referenced_column=r.referenced_column,
                )
                for r in self.relations
            ),
        )


_TABLES_ADAPTER = TypeAdapter(List[TableDocument])


def dump_interchange(tables: Sequence[TableSchema]) -> str:
    """Dump tables as pretty-printed JSON."""
    documents = [TableDocument.from_table(t).model_dump(mode="json", by_alias=True) for t in tables]
    return json.dumps(documents, indent=4, ensure_ascii=False)


def load_interchange(text: str) -> List[TableSchema]:
    """Parse a JSON dump back into tables.

    Raises:
        InterchangeError: If the text is not valid JSON or not a table list
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InterchangeError(f"Schema dump is not valid JSON: {e}") from e
    try:
        documents = _TABLES_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise InterchangeError(f"Schema dump has an invalid structure: {e}") from e
    return [doc.to_table() for doc in documents]


class InterchangeGenerator(SchemaGenerator):
    """Generates the structural JSON dump."""

    description = "JSON (Schema Dump)"
    file_extension = "json"

    def render(self, tables: Sequence[TableSchema]) -> str:
        return dump_interchange(tables)
