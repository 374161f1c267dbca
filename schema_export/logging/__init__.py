"""Run history module for schema-export.

Records every CLI export run in a local SQLite database to help with
debugging and auditing.
"""

from schema_export.logging.run_db import RunDatabase, get_default_run_db_path
from schema_export.logging.run_service import (
    RunLogger,
    RunContext,
    get_run_logger,
    log_export_run,
)

__all__ = [
    "RunDatabase",
    "get_default_run_db_path",
    "RunLogger",
    "RunContext",
    "get_run_logger",
    "log_export_run",
]
