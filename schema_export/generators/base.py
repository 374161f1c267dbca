"""Base class for dialect generators."""

from abc import ABC, abstractmethod
from typing import Iterable, List, Sequence, Set

from ..database.models import TableSchema


# Columns managed by ORM timestamp and soft-delete conventions
CREATED_AT = "created_at"
UPDATED_AT = "updated_at"
DELETED_AT = "deleted_at"
TIMESTAMP_COLUMNS = (CREATED_AT, UPDATED_AT, DELETED_AT)


class SchemaGenerator(ABC):
    """Renders a list of tables into one output dialect.

    Implementations are pure: the same tables always render to the same text
    and rendering never performs I/O.
    """

    #: Short description shown by the CLI
    description: str = ""
    #: File extension used when the output is saved
    file_extension: str = "txt"

    @abstractmethod
    def render(self, tables: Sequence[TableSchema]) -> str:
        """Render the tables to text."""
        pass

    @staticmethod
    def has_timestamps(table: TableSchema) -> bool:
        """True when both created_at and updated_at columns are present."""
        return table.has_column(CREATED_AT) and table.has_column(UPDATED_AT)

    @staticmethod
    def has_soft_deletes(table: TableSchema) -> bool:
        return table.has_column(DELETED_AT)

    @staticmethod
    def table_names(tables: Iterable[TableSchema]) -> Set[str]:
        return {t.name for t in tables}

    @staticmethod
    def unique_name(candidate: str, taken: Set[str], fallback: str) -> str:
        """Pick ``candidate``, else ``fallback``, else ``fallback`` with a numeric suffix."""
        for name in (candidate, fallback):
            if name and name not in taken:
                return name
        index = 2
        while f"{fallback}{index}" in taken:
            index += 1
        return f"{fallback}{index}"

    @staticmethod
    def join_blocks(blocks: List[str]) -> str:
        return "\n\n".join(blocks)
