"""Database introspection and schema model module for schema-export.

This module provides the canonical schema IR, the type parser and
naming transforms, and introspection sources (DuckDB and JSON snapshots).
"""

from .models import BaseType, ColumnKey, ParsedType, ColumnSchema, RelationSchema, TableSchema
from .type_parser import parse_type
from .naming import to_pascal_case, to_camel_case
from .base import DatabaseIntrospector, ColumnRecord, RelationRecord
from .snapshot import SnapshotIntrospector
from .duckdb import DuckDBIntrospector

__all__ = [
    # Data models
    "BaseType",
    "ColumnKey",
    "ParsedType",
    "ColumnSchema",
    "RelationSchema",
    "TableSchema",
    # Parsing and naming
    "parse_type",
    "to_pascal_case",
    "to_camel_case",
    # Base classes
    "DatabaseIntrospector",
    "ColumnRecord",
    "RelationRecord",
    # Introspectors
    "SnapshotIntrospector",
    "DuckDBIntrospector",
]
