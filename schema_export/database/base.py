"""Abstract base class for database introspection."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, List


@dataclass
class ColumnRecord:
    """Raw column metadata as returned by introspection."""
    field: str
    raw_type: str
    nullable: bool = True
    key: str = ""  # 'PRI', 'UNI', 'MUL' or ''
    default: Optional[str] = None
    extra: str = ""  # e.g. 'auto_increment', 'on update CURRENT_TIMESTAMP'


@dataclass
class RelationRecord:
    """Raw foreign key metadata as returned by introspection."""
    source_table: str
    source_column: str
    referenced_table: str
    referenced_column: str


class DatabaseIntrospector(ABC):
    """Abstract base class for database introspection.

    Subclasses must implement the abstract methods to provide
    database-specific introspection logic. Column order returned by
    ``get_columns`` is the authoritative column order.
    """

    @abstractmethod
    async def get_tables(self, database: str) -> List[str]:
        """Get all table names in the database.

        Args:
            database: Database name

        Returns:
            List of table names
        """
        pass

    @abstractmethod
    async def get_columns(self, database: str, table: str) -> List[ColumnRecord]:
        """Get all columns for a table.

        Args:
            database: Database name
            table: Table name

        Returns:
            List of ColumnRecord objects in ordinal order
        """
        pass

    @abstractmethod
    async def get_relations(self, database: str) -> List[RelationRecord]:
        """Get every foreign key relation in the database.

        Args:
            database: Database name

        Returns:
            List of RelationRecord objects for all tables
        """
        pass

    def get_database_name(self) -> Optional[str]:
        """Get the default database name, if the source implies one."""
        return None

    def close(self):
        """Release any underlying connection."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
