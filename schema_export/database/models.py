"""Schema intermediate representation (IR) models.

The IR is assembled fresh for every export request and is immutable once
built: every model here is a frozen dataclass and collections are tuples.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple


class BaseType(str, Enum):
    """Canonical type families understood by every generator."""
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    TEMPORAL = "temporal"
    TEXT = "text"
    JSON = "json"
    BINARY = "binary"
    UNKNOWN = "unknown"


class ColumnKey(str, Enum):
    """Key flag reported by introspection for a column."""
    NONE = "none"
    PRIMARY = "primary"
    UNIQUE = "unique"
    MULTI = "multi"

    @classmethod
    def from_flag(cls, flag: Optional[str]) -> "ColumnKey":
        """Convert an introspection key flag (``PRI``, ``UNI``, ``MUL``) to a ColumnKey.

        Unrecognised or empty flags map to ``NONE``.
        """
        if not flag:
            return cls.NONE
        normalized = flag.strip().upper()
        if normalized in ("PRI", "PRIMARY", "PRIMARY KEY"):
            return cls.PRIMARY
        if normalized in ("UNI", "UNIQUE"):
            return cls.UNIQUE
        if normalized in ("MUL", "MULTI", "MULTIPLE"):
            return cls.MULTI
        return cls.NONE

    def to_flag(self) -> str:
        """Convert back to the short introspection flag."""
        return {
            ColumnKey.NONE: "",
            ColumnKey.PRIMARY: "PRI",
            ColumnKey.UNIQUE: "UNI",
            ColumnKey.MULTI: "MUL",
        }[self]


@dataclass(frozen=True)
class ParsedType:
    """Canonical form of a raw column type string."""
    base: BaseType
    token: str = ""  # lower-cased leading type token, e.g. 'varchar'
    length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    unsigned: bool = False

    @property
    def is_numeric(self) -> bool:
        return self.base in (BaseType.INTEGER, BaseType.FLOAT)


@dataclass(frozen=True)
class ColumnSchema:
    """Represents a table column."""
    name: str
    raw_type: str
    parsed_type: ParsedType
    nullable: bool = True
    key: ColumnKey = ColumnKey.NONE
    default: Optional[str] = None
    auto_increment: bool = False
    extra_flags: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def is_primary(self) -> bool:
        return self.key is ColumnKey.PRIMARY

    @property
    def is_unique(self) -> bool:
        return self.key is ColumnKey.UNIQUE


@dataclass(frozen=True)
class RelationSchema:
    """A foreign-key-like link from a column of the owning table to another table."""
    source_column: str
    referenced_table: str
    referenced_column: str


@dataclass(frozen=True)
class TableSchema:
    """Represents a table with its columns (in introspection order) and relations."""
    name: str
    columns: Tuple[ColumnSchema, ...] = ()
    relations: Tuple[RelationSchema, ...] = ()

    def column(self, name: str) -> Optional[ColumnSchema]:
        """Find a column by name."""
        for col in self.columns:
            if col.name == name:
                return col
        return None

    def has_column(self, name: str) -> bool:
        return self.column(name) is not None

    def relation_for(self, column_name: str) -> Optional[RelationSchema]:
        """Get the first relation whose source is the given column."""
        for rel in self.relations:
            if rel.source_column == column_name:
                return rel
        return None
