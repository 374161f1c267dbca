"""Export run logging service.

Provides a high-level interface for recording export runs, including
automatic environment capture and error handling. Failures of the history
database never break the export itself.
"""

import logging
import os
import sys
import time
import traceback
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from schema_export.logging.run_db import RunDatabase

logger = logging.getLogger(__name__)

# Global logger instance
_run_logger: Optional["RunLogger"] = None


def get_run_logger() -> "RunLogger":
    """Get or create the global run logger instance."""
    global _run_logger
    if _run_logger is None:
        from schema_export.config import settings

        _run_logger = RunLogger(
            db_path=settings.run_logging_db_path,
            enabled=settings.run_logging_enabled,
            retention_days=settings.run_logging_retention_days,
        )
    return _run_logger


@dataclass
class RunContext:
    """Context for one export run, populated while the run progresses."""

    run_id: str
    command: str
    dialect: Optional[str] = None
    source_type: Optional[str] = None
    source_path: Optional[str] = None
    database_name: Optional[str] = None
    tables_requested: List[str] = field(default_factory=list)
    start_time: float = field(default_factory=time.time)

    tables_count: int = 0
    columns_count: int = 0
    relations_count: int = 0
    output_path: Optional[str] = None
    output_bytes: Optional[int] = None


class RunLogger:
    """High-level logger for export runs.

    Example usage:
        run_logger = get_run_logger()

        with run_logger.log_run(command="generate", dialect="prisma") as ctx:
            result = ...
            ctx.tables_count = result.table_count
            ctx.output_bytes = len(result.text.encode("utf-8"))
    """

    def __init__(self, db_path: Optional[str] = None, enabled: bool = True, retention_days: int = 30):
        """Initialize the run logger.

        Args:
            db_path: Path to the SQLite database. If None, uses default.
            enabled: Whether logging is enabled.
            retention_days: Age after which entries are removed on startup.
        """
        self.enabled = enabled
        self._db: Optional[RunDatabase] = None

        if self.enabled:
            try:
                self._db = RunDatabase(db_path)
                self._db.initialize()
                self._db.cleanup_old_runs(retention_days)
            except Exception as e:
                logger.warning("Failed to initialize run history: %s", e)
                self.enabled = False

    @property
    def db(self) -> Optional[RunDatabase]:
        return self._db

    def _get_environment_info(self) -> Dict[str, str]:
        return {
            "python_version": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
            "package_version": self._get_package_version(),
            "working_directory": os.getcwd(),
        }

    def _get_package_version(self) -> str:
        try:
            from importlib.metadata import version
            return version("schema-export")
        except Exception:
            return "unknown"

    @contextmanager
    def log_run(
        self,
        command: str,
        dialect: Optional[str] = None,
        source_type: Optional[str] = None,
        source_path: Optional[str] = None,
        database_name: Optional[str] = None,
        tables_requested: Optional[List[str]] = None,
    ):
        """Context manager for logging an export run.

        Yields:
            RunContext that can be updated during the run
        """
        run_id = str(uuid.uuid4())[:8]
        ctx = RunContext(
            run_id=run_id,
            command=command,
            dialect=dialect,
            source_type=source_type,
            source_path=source_path,
            database_name=database_name,
            tables_requested=list(tables_requested or []),
        )

        if not self.enabled or self._db is None:
            yield ctx
            return

        try:
            self._db.insert_run(
                run_id=run_id,
                command=command,
                dialect=dialect,
                source_type=source_type,
                source_path=source_path,
                database_name=database_name,
                tables_requested=ctx.tables_requested,
                **self._get_environment_info(),
            )
        except Exception as e:
            logger.warning("Failed to log run start: %s", e)

        try:
            yield ctx
        except Exception as e:
            duration_ms = int((time.time() - ctx.start_time) * 1000)
            try:
                self._db.update_error(
                    run_id=run_id,
                    error_message=str(e),
                    error_type=type(e).__name__,
                    error_traceback=traceback.format_exc(),
                    duration_ms=duration_ms,
                )
            except Exception as log_err:
                logger.warning("Failed to log run error: %s", log_err)
            logger.debug("Run %s failed after %dms: %s", run_id, duration_ms, e)
            raise

        duration_ms = int((time.time() - ctx.start_time) * 1000)
        try:
            self._db.update_results(
                run_id=run_id,
                tables_count=ctx.tables_count,
                columns_count=ctx.columns_count,
                relations_count=ctx.relations_count,
                output_path=ctx.output_path,
                output_bytes=ctx.output_bytes,
            )
            self._db.update_success(run_id, duration_ms)
        except Exception as e:
            logger.warning("Failed to log run result: %s", e)
        logger.debug("Run %s completed in %dms", run_id, duration_ms)

    def query_runs(self, **filters: Any) -> List[Dict[str, Any]]:
        if not self.enabled or not self._db:
            return []
        return self._db.query_runs(**filters)

    def get_stats(self, since_hours: int = 24) -> Dict[str, Any]:
        if not self.enabled or not self._db:
            return {"error": "Run history not enabled"}
        return self._db.get_stats(since_hours=since_hours)

    def get_run(self, run_id: str) -> Optional[Dict[str, Any]]:
        if not self.enabled or not self._db:
            return None
        return self._db.get_run_by_id(run_id)


def log_export_run(command: str, **kwargs: Any):
    """Convenience function to get a run logging context manager.

    Example:
        with log_export_run("generate", dialect="go", database_name="shop") as ctx:
            ctx.tables_count = 3
    """
    return get_run_logger().log_run(command=command, **kwargs)
