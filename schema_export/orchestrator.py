"""Export orchestration: table selection, assembly, dispatch."""

import itertools
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple, Union

from .assembler import SchemaAssembler
from .database.base import DatabaseIntrospector
from .database.models import TableSchema
from .errors import GenerationError, SchemaExportError, ValidationError
from .generators.registry import Dialect, get_generator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationRequest:
    """An assembled schema paired with the dialect to render it in."""
    target: Dialect
    tables: Tuple[TableSchema, ...]


@dataclass(frozen=True)
class ExportRequest:
    """Tables of one database selected for export to a dialect."""
    database: str
    tables: Tuple[str, ...]
    target: Union[Dialect, str]

    def __post_init__(self):
        object.__setattr__(self, "tables", tuple(self.tables))


@dataclass
class ExportResult:
    """Outcome of one export: text on success, a message on failure.

    A stale result belongs to a request that was superseded by a newer one
    before it finished and carries neither text nor error.
    """
    request_id: int
    target: Optional[Dialect]
    text: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    stale: bool = False
    table_count: int = 0
    column_count: int = 0
    relation_count: int = 0

    @property
    def ok(self) -> bool:
        return self.text is not None and not self.stale


class ExportOrchestrator:
    """Drives SELECT -> ASSEMBLE -> DISPATCH -> RETURN for export requests.

    Overlapping requests follow last-request-wins: a request whose assembly
    completes after a newer request has started is returned as stale.
    Failures are reported in the result rather than raised.
    """

    def __init__(
        self,
        introspector: DatabaseIntrospector,
        generator_options: Optional[Dict[str, str]] = None,
    ):
        self.assembler = SchemaAssembler(introspector)
        self.generator_options = generator_options or {}
        self._request_ids = itertools.count(1)
        self._latest_request_id = 0

    def render(self, request: GenerationRequest) -> str:
        """Render an already assembled request."""
        generator = get_generator(request.target, **self.generator_options)
        try:
            return generator.render(request.tables)
        except Exception as e:
            raise GenerationError(
                f"Failed to render {request.target.value}: {e}",
                details={"target": request.target.value, "error_type": type(e).__name__},
            ) from e

    async def export(self, request: ExportRequest) -> ExportResult:
        """Run one export request.

        Args:
            request: Database, ordered table names and target dialect

        Returns:
            ExportResult with the rendered text, an error message, or the stale flag
        """
        request_id = next(self._request_ids)
        self._latest_request_id = request_id

        # SELECT
        try:
            target = Dialect.parse(request.target)
            if not request.tables:
                raise ValidationError("No tables selected for export")
        except SchemaExportError as e:
            return ExportResult(request_id=request_id, target=None, error=e.message, error_code=e.code)

        # ASSEMBLE
        try:
            tables = await self.assembler.assemble(request.database, request.tables)
        except SchemaExportError as e:
            if request_id != self._latest_request_id:
                return ExportResult(request_id=request_id, target=target, stale=True)
            logger.warning("Export %d failed during assembly: %s", request_id, e.message)
            return ExportResult(request_id=request_id, target=target, error=e.message, error_code=e.code)

        if request_id != self._latest_request_id:
            logger.debug("Discarding export %d, superseded by %d", request_id, self._latest_request_id)
            return ExportResult(request_id=request_id, target=target, stale=True)

        result = ExportResult(
            request_id=request_id,
            target=target,
            table_count=len(tables),
            column_count=sum(len(t.columns) for t in tables),
            relation_count=sum(len(t.relations) for t in tables),
        )

        # DISPATCH
        try:
            result.text = self.render(GenerationRequest(target=target, tables=tuple(tables)))
        except GenerationError as e:
            logger.error("Export %d failed during rendering: %s", request_id, e.message)
            result.error = e.message
            result.error_code = e.code
        return result


async def export_tables(
    introspector: DatabaseIntrospector,
    database: str,
    tables: Sequence[str],
    target: Union[Dialect, str],
    **generator_options,
) -> ExportResult:
    """Convenience wrapper running a single export request."""
    orchestrator = ExportOrchestrator(introspector, generator_options=generator_options)
    return await orchestrator.export(ExportRequest(database=database, tables=tuple(tables), target=target))
