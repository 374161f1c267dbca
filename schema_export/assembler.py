"""Assembly of introspection records into the schema IR."""

import asyncio
import logging
import re
from typing import Dict, FrozenSet, List, Sequence, Tuple

from .database.base import ColumnRecord, DatabaseIntrospector, RelationRecord
from .database.models import ColumnKey, ColumnSchema, RelationSchema, TableSchema
from .database.type_parser import parse_type
from .errors import IntrospectionError

logger = logging.getLogger(__name__)

_ON_UPDATE_RE = re.compile(r"on\s+update\s+.+$", re.IGNORECASE)


def parse_extra(extra: str) -> Tuple[bool, FrozenSet[str]]:
    """Split an introspection ``extra`` string into (auto_increment, other flags).

    ``on update <expr>`` is kept as a single flag; the remaining words are
    individual flags. Flags are lower-cased.
    """
    text = (extra or "").strip()
    flags = set()

    match = _ON_UPDATE_RE.search(text)
    if match:
        flags.add(" ".join(match.group(0).lower().split()))
        text = text[:match.start()]

    for word in text.split():
        flags.add(word.lower())

    auto_increment = "auto_increment" in flags
    flags.discard("auto_increment")
    return auto_increment, frozenset(flags)


def build_column(record: ColumnRecord) -> ColumnSchema:
    """Convert a raw column record to a ColumnSchema."""
    auto_increment, extra_flags = parse_extra(record.extra)
    return ColumnSchema(
        name=record.field,
        raw_type=record.raw_type,
        parsed_type=parse_type(record.raw_type),
        nullable=record.nullable,
        key=ColumnKey.from_flag(record.key),
        default=record.default,
        auto_increment=auto_increment,
        extra_flags=extra_flags,
    )


def partition_relations(records: Sequence[RelationRecord]) -> Dict[str, List[RelationSchema]]:
    """Group relation records by the table owning the source column."""
    by_table: Dict[str, List[RelationSchema]] = {}
    for rec in records:
        by_table.setdefault(rec.source_table, []).append(RelationSchema(
            source_column=rec.source_column,
            referenced_table=rec.referenced_table,
            referenced_column=rec.referenced_column,
        ))
    return by_table


class SchemaAssembler:
    """Builds TableSchema lists from an introspection source.

    The relation fetch runs once per database and every table's column
    fetch runs concurrently. If any fetch fails the whole assembly fails
    and no partial result is returned.
    """

    def __init__(self, introspector: DatabaseIntrospector):
        self.introspector = introspector

    async def assemble(self, db_name: str, table_names: Sequence[str]) -> List[TableSchema]:
        """Assemble the IR for the requested tables.

        Args:
            db_name: Database name
            table_names: Tables to assemble; the result follows this order

        Returns:
            List of TableSchema objects in requested order

        Raises:
            IntrospectionError: If any introspection call fails
        """
        ordered = list(dict.fromkeys(table_names))
        if not ordered:
            return []

        column_tasks = [
            asyncio.ensure_future(self.introspector.get_columns(db_name, name))
            for name in ordered
        ]
        try:
            relation_records = await self.introspector.get_relations(db_name)
            column_sets = await asyncio.gather(*column_tasks)
        except asyncio.CancelledError:
            for task in column_tasks:
                task.cancel()
            raise
        except Exception as e:
            for task in column_tasks:
                task.cancel()
            # Consume the outcome of every task so none is left unretrieved
            await asyncio.gather(*column_tasks, return_exceptions=True)
            logger.debug("Assembly of %s failed: %s", db_name, e)
            raise IntrospectionError(
                f"Failed to load schema for '{db_name}': {e}",
                details={"database": db_name, "tables": ordered, "error_type": type(e).__name__},
            ) from e

        relations = partition_relations(relation_records)
        tables = [
            TableSchema(
                name=name,
                columns=tuple(build_column(rec) for rec in records),
                relations=tuple(relations.get(name, [])),
            )
            for name, records in zip(ordered, column_sets)
        ]

        logger.debug(
            "Assembled %d tables (%d columns, %d relations) from %s",
            len(tables),
            sum(len(t.columns) for t in tables),
            sum(len(t.relations) for t in tables),
            db_name,
        )
        return tables
