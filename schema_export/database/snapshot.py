"""Introspector backed by a JSON snapshot of introspection records.

A snapshot mirrors what a live introspection would return:

    {
        "database": "shop",
        "tables": {
            "users": [
                {"field": "id", "type": "int(11)", "null": "NO", "key": "PRI",
                 "default": null, "extra": "auto_increment"}
            ]
        },
        "relations": [
            {"source_table": "orders", "source_column": "user_id",
             "referenced_table": "users", "referenced_column": "id"}
        ]
    }
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..errors import InterchangeError, IntrospectionError
from .base import ColumnRecord, DatabaseIntrospector, RelationRecord

logger = logging.getLogger(__name__)


class SnapshotColumn(BaseModel):
    """Column record in a snapshot file."""
    name: str = Field(alias="field")
    raw_type: str = Field(alias="type")
    nullable: bool = Field(default=True, alias="null")
    key: str = ""
    default: Optional[str] = None
    extra: str = ""

    class Config:
        populate_by_name = True

    @field_validator("nullable", mode="before")
    @classmethod
    def _coerce_null_flag(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper() in ("YES", "Y", "TRUE", "1")
        return value

    @field_validator("default", mode="before")
    @classmethod
    def _coerce_default(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "1" if value else "0"
        return str(value)

    @field_validator("key", "extra", mode="before")
    @classmethod
    def _coerce_empty(cls, value: Any) -> Any:
        return value or ""


class SnapshotRelation(BaseModel):
    """Relation record in a snapshot file."""
    source_table: str
    source_column: str
    referenced_table: str
    referenced_column: str


class Snapshot(BaseModel):
    """Whole snapshot document."""
    database: Optional[str] = None
    tables: Dict[str, List[SnapshotColumn]] = Field(default_factory=dict)
    relations: List[SnapshotRelation] = Field(default_factory=list)


class SnapshotIntrospector(DatabaseIntrospector):
    """Serves introspection records from a snapshot instead of a live database.

    Table order follows the snapshot document. Requests for a table that is not
    in the snapshot fail the same way a live introspection query would.
    """

    def __init__(self, snapshot: Snapshot, source: Optional[str] = None):
        self.snapshot = snapshot
        self.source = source

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: Optional[str] = None) -> "SnapshotIntrospector":
        """Build an introspector from an already decoded snapshot document."""
        try:
            snapshot = Snapshot.model_validate(data)
        except ValidationError as e:
            raise InterchangeError(
                f"Invalid snapshot{f' {source}' if source else ''}: {e}",
                details={"source": source},
            ) from e
        return cls(snapshot, source=source)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "SnapshotIntrospector":
        """Load a snapshot JSON file."""
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise InterchangeError(f"Snapshot file not found: {path}", details={"source": str(path)}) from e
        except json.JSONDecodeError as e:
            raise InterchangeError(f"Snapshot file is not valid JSON: {path}: {e}", details={"source": str(path)}) from e
        logger.debug("Loaded snapshot %s with %d tables", path, len(data.get("tables", {})) if isinstance(data, dict) else 0)
        return cls.from_dict(data, source=str(path))

    def get_database_name(self) -> Optional[str]:
        if self.snapshot.database:
            return self.snapshot.database
        if self.source:
            return Path(self.source).stem
        return None

    def _check_database(self, database: str):
        expected = self.snapshot.database
        if expected and database and database != expected:
            raise IntrospectionError(
                f"Unknown database '{database}' (snapshot holds '{expected}')",
                details={"database": database},
            )

    async def get_tables(self, database: str) -> List[str]:
        self._check_database(database)
        return list(self.snapshot.tables.keys())

    async def get_columns(self, database: str, table: str) -> List[ColumnRecord]:
        self._check_database(database)
        if table not in self.snapshot.tables:
            raise IntrospectionError(
                f"Table '{table}' doesn't exist in database '{database}'",
                details={"database": database, "table": table},
            )
        return [
            ColumnRecord(
                field=col.name,
                raw_type=col.raw_type,
                nullable=col.nullable,
                key=col.key,
                default=col.default,
                extra=col.extra,
            )
            for col in self.snapshot.tables[table]
        ]

    async def get_relations(self, database: str) -> List[RelationRecord]:
        self._check_database(database)
        return [
            RelationRecord(
                source_table=rel.source_table,
                source_column=rel.source_column,
                referenced_table=rel.referenced_table,
                referenced_column=rel.referenced_column,
            )
            for rel in self.snapshot.relations
        ]
