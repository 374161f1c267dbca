"""DuckDB database introspector."""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Set, Tuple
from pathlib import Path

from ..errors import ConnectionError
from .base import ColumnRecord, DatabaseIntrospector, RelationRecord

logger = logging.getLogger(__name__)


class DuckDBIntrospector(DatabaseIntrospector):
    """Client for introspecting a DuckDB database file.

    Blocking driver calls run in worker threads, each on its own cursor, so
    concurrent column fetches do not share connection state.
    """

    EXCLUDED_SCHEMAS = {'information_schema', 'pg_catalog'}

    def __init__(
        self,
        database_path: Optional[str] = None,
        connection_string: Optional[str] = None,
        schema: str = "main",
        read_only: bool = True,
    ):
        """Initialize DuckDB introspector.

        Args:
            database_path: Path to .duckdb file (can be :memory: for in-memory)
            connection_string: Alternative connection string format
                               (e.g., duckdb:///path/to/db.duckdb)
            schema: Schema whose tables are introspected
            read_only: Open database in read-only mode (default True for introspection)
        """
        self.database_path = database_path
        self.connection_string = connection_string
        self.schema = schema
        self.read_only = read_only
        self._connection = None
        self._database_name = self._extract_database_name()

    def _extract_database_name(self) -> str:
        """Extract database name from path or connection string."""
        if self.database_path:
            if self.database_path == ':memory:':
                return 'memory'
            return Path(self.database_path).stem
        elif self.connection_string:
            # Format: duckdb:///path/to/file.duckdb
            if ':///' in self.connection_string:
                path_part = self.connection_string.split(':///')[-1]
                if '?' in path_part:
                    path_part = path_part.split('?')[0]
                return Path(path_part).stem
        return 'duckdb_database'

    def get_database_name(self) -> str:
        return self._database_name

    def _resolve_path(self) -> str:
        if self.database_path:
            return self.database_path
        if self.connection_string:
            path = self.connection_string
            if path.startswith('duckdb:///'):
                path = path[10:]
            elif path.startswith('duckdb://'):
                path = path[9:]
            if '?' in path:
                path = path.split('?')[0]
            return path
        return ':memory:'

    def connect(self):
        """Connect to the DuckDB database file."""
        if self._connection is not None:
            return self._connection

        try:
            import duckdb
        except ImportError:
            raise ImportError(
                "duckdb is required. "
                "Install it with: pip install duckdb"
            )

        path = self._resolve_path()
        try:
            if path == ':memory:':
                self._connection = duckdb.connect(path)
            else:
                self._connection = duckdb.connect(path, read_only=self.read_only)
        except duckdb.Error as e:
            raise ConnectionError(f"Cannot open DuckDB database {path}: {e}", details={"path": path}) from e

        logger.debug("Connected to DuckDB database %s", path)
        return self._connection

    def close(self):
        """Close the DuckDB connection."""
        if self._connection:
            self._connection.close()
            self._connection = None

    @staticmethod
    def _execute_query(cursor, sql: str, params: Optional[List[Any]] = None) -> List[Tuple]:
        """Execute a SQL query on the given cursor and return all rows."""
        return cursor.execute(sql, params or []).fetchall()

    async def _in_thread(self, func, *args):
        # Cursors are created on the loop thread and used by exactly one worker
        cursor = self.connect().cursor()
        try:
            return await asyncio.to_thread(func, cursor, *args)
        finally:
            cursor.close()

    async def _query(self, sql: str, params: Optional[List[Any]] = None) -> List[Tuple]:
        return await self._in_thread(self._execute_query, sql, params)

    async def get_tables(self, database: str) -> List[str]:
        rows = await self._query(
            """
            SELECT table_name
            FROM information_schema.tables
            WHERE table_schema = ?
              AND table_type = 'BASE TABLE'
            ORDER BY table_name
            """,
            [self.schema],
        )
        return [row[0] for row in rows]

    def _constraint_columns(self, cursor, table: str) -> Dict[str, Set[str]]:
        """Map constraint type -> set of columns covered by that constraint type."""
        rows = self._execute_query(
            cursor,
            """
            SELECT constraint_type, constraint_column_names
            FROM duckdb_constraints()
            WHERE schema_name = ?
              AND table_name = ?
            """,
            [self.schema, table],
        )
        constraints: Dict[str, Set[str]] = {}
        for constraint_type, column_names in rows:
            names = column_names if isinstance(column_names, list) else [column_names]
            constraints.setdefault(constraint_type, set()).update(names)
        return constraints

    def _fetch_columns(self, cursor, table: str) -> List[ColumnRecord]:
        rows = self._execute_query(
            cursor,
            """
            SELECT column_name, data_type, is_nullable, column_default
            FROM information_schema.columns
            WHERE table_schema = ?
              AND table_name = ?
            ORDER BY ordinal_position
            """,
            [self.schema, table],
        )
        if not rows:
            raise LookupError(f"Table '{self.schema}.{table}' does not exist")

        constraints = self._constraint_columns(cursor, table)
        primary = constraints.get('PRIMARY KEY', set())
        unique = constraints.get('UNIQUE', set())
        foreign = constraints.get('FOREIGN KEY', set())

        columns = []
        for name, data_type, is_nullable, column_default in rows:
            if name in primary:
                key = 'PRI'
            elif name in unique:
                key = 'UNI'
            elif name in foreign:
                key = 'MUL'
            else:
                key = ''

            extra = ''
            default = column_default
            # Sequences back DuckDB's closest thing to auto_increment
            if isinstance(default, str) and default.lower().startswith('nextval('):
                extra = 'auto_increment'
                default = None

            columns.append(ColumnRecord(
                field=name,
                raw_type=data_type,
                nullable=(is_nullable == 'YES'),
                key=key,
                default=default,
                extra=extra,
            ))
        return columns

    async def get_columns(self, database: str, table: str) -> List[ColumnRecord]:
        return await self._in_thread(self._fetch_columns, table)

    async def get_relations(self, database: str) -> List[RelationRecord]:
        rows = await self._query(
            """
            SELECT table_name, constraint_column_names, referenced_table, referenced_column_names
            FROM duckdb_constraints()
            WHERE schema_name = ?
              AND constraint_type = 'FOREIGN KEY'
            ORDER BY table_name, constraint_index
            """,
            [self.schema],
        )
        relations = []
        for table_name, source_columns, referenced_table, referenced_columns in rows:
            for source_column, referenced_column in zip(source_columns, referenced_columns):
                relations.append(RelationRecord(
                    source_table=table_name,
                    source_column=source_column,
                    referenced_table=referenced_table,
                    referenced_column=referenced_column,
                ))
        return relations
