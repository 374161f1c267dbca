"""Database operations for export run history."""

import sqlite3
import logging
import json
from pathlib import Path
from typing import Optional, List, Dict, Any
from datetime import datetime, timedelta, timezone

logger = logging.getLogger(__name__)


# SQL schema for export run history
SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS export_runs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    run_id TEXT UNIQUE NOT NULL,
    timestamp DATETIME DEFAULT CURRENT_TIMESTAMP,
    command TEXT NOT NULL,
    dialect TEXT,
    source_type TEXT,  -- 'duckdb', 'snapshot'
    source_path TEXT,
    database_name TEXT,
    tables_requested TEXT,  -- JSON array
    status TEXT DEFAULT 'started',  -- 'started', 'success', 'error'
    duration_ms INTEGER,

    -- Assembly results
    tables_count INTEGER,
    columns_count INTEGER,
    relations_count INTEGER,

    -- Output
    output_path TEXT,
    output_bytes INTEGER,

    -- Error information
    error_message TEXT,
    error_type TEXT,
    error_traceback TEXT,

    -- Environment info
    python_version TEXT,
    package_version TEXT,
    working_directory TEXT
);

CREATE INDEX IF NOT EXISTS idx_export_runs_timestamp ON export_runs(timestamp);
CREATE INDEX IF NOT EXISTS idx_export_runs_status ON export_runs(status);
CREATE INDEX IF NOT EXISTS idx_export_runs_dialect ON export_runs(dialect);
"""


def get_default_run_db_path() -> str:
    """Get the default database path (~/.schema-export/runs.db)."""
    app_dir = Path.home() / ".schema-export"
    app_dir.mkdir(exist_ok=True)
    return str(app_dir / "runs.db")


def _since(hours: int) -> str:
    # Matches the format of SQLite's CURRENT_TIMESTAMP so text comparison works
    return (datetime.now(timezone.utc) - timedelta(hours=hours)).strftime("%Y-%m-%d %H:%M:%S")


class RunDatabase:
    """SQLite database for export run history."""

    def __init__(self, db_path: Optional[str] = None):
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database file. If None, uses default.
        """
        self.db_path = db_path or get_default_run_db_path()
        self._connection: Optional[sqlite3.Connection] = None
        self._initialized = False

    def _get_connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = sqlite3.connect(
                self.db_path,
                check_same_thread=False,
                isolation_level=None,  # Auto-commit mode
            )
            self._connection.row_factory = sqlite3.Row
        return self._connection

    def initialize(self) -> None:
        """Initialize database schema."""
        if self._initialized:
            return

        try:
            conn = self._get_connection()
            conn.executescript(SCHEMA_SQL)
            self._initialized = True
            logger.debug("Run history database initialized at %s", self.db_path)
        except Exception as e:
            logger.error("Failed to initialize run history database: %s", e)
            raise

    def close(self) -> None:
        """Close database connection."""
        if self._connection:
            self._connection.close()
            self._connection = None
            self._initialized = False

    def insert_run(
        self,
        run_id: str,
        command: str,
        dialect: Optional[str] = None,
        source_type: Optional[str] = None,
        source_path: Optional[str] = None,
        database_name: Optional[str] = None,
        tables_requested: Optional[List[str]] = None,
        python_version: Optional[str] = None,
        package_version: Optional[str] = None,
        working_directory: Optional[str] = None,
    ) -> int:
        """Insert a new run entry.

        Returns:
            The row ID of the inserted entry
        """
        self.initialize()
        conn = self._get_connection()

        cursor = conn.execute(
            """
            INSERT INTO export_runs (
                run_id, command, dialect, source_type, source_path,
                database_name, tables_requested, status,
                python_version, package_version, working_directory
            )
            VALUES (?, ?, ?, ?, ?, ?, ?, 'started', ?, ?, ?)
            """,
            (
                run_id, command, dialect, source_type, source_path,
                database_name, json.dumps(tables_requested) if tables_requested else None,
                python_version, package_version, working_directory,
            ),
        )
        return cursor.lastrowid

    def update_results(
        self,
        run_id: str,
        tables_count: int,
        columns_count: int,
        relations_count: int,
        output_path: Optional[str] = None,
        output_bytes: Optional[int] = None,
    ) -> None:
        """Update run with assembly and output results."""
        conn = self._get_connection()
        conn.execute(
            """
            UPDATE export_runs
            SET tables_count = ?, columns_count = ?, relations_count = ?,
                output_path = ?, output_bytes = ?
            WHERE run_id = ?
            """,
            (tables_count, columns_count, relations_count, output_path, output_bytes, run_id),
        )

    def update_success(self, run_id: str, duration_ms: int) -> None:
        """Mark run as successful."""
        conn = self._get_connection()
        conn.execute(
            "UPDATE export_runs SET status = 'success', duration_ms = ? WHERE run_id = ?",
            (duration_ms, run_id),
        )

    def update_error(
        self,
        run_id: str,
        error_message: str,
        error_type: Optional[str] = None,
        error_traceback: Optional[str] = None,
        duration_ms: Optional[int] = None,
    ) -> None:
        """Mark run as failed with error details."""
        conn = self._get_connection()
        conn.execute(
            """
            UPDATE export_runs
            SET status = 'error', error_message = ?, error_type = ?,
                error_traceback = ?, duration_ms = ?
            WHERE run_id = ?
            """,
            (error_message, error_type, error_traceback, duration_ms, run_id),
        )

    def query_runs(
        self,
        dialect: Optional[str] = None,
        status: Optional[str] = None,
        since_hours: int = 24,
        limit: int = 100,
    ) -> List[Dict[str, Any]]:
        """Query run entries with optional filters, newest first."""
        self.initialize()
        conn = self._get_connection()

        conditions = ["timestamp >= ?"]
        params: List[Any] = [_since(since_hours)]

        if dialect:
            conditions.append("dialect = ?")
            params.append(dialect)

        if status:
            conditions.append("status = ?")
            params.append(status)

        where_clause = " AND ".join(conditions)
        params.append(limit)
        cursor = conn.execute(
            f"""
            SELECT * FROM export_runs
            WHERE {where_clause}
            ORDER BY timestamp DESC, id DESC
            LIMIT ?
            """,
            params,
        )
        return [dict(row) for row in cursor.fetchall()]

    def get_run_by_id(self, run_id: str) -> Optional[Dict[str, Any]]:
        """Get a specific run by ID."""
        self.initialize()
        conn = self._get_connection()

        cursor = conn.execute("SELECT * FROM export_runs WHERE run_id = ?", (run_id,))
        row = cursor.fetchone()
        return dict(row) if row else None

    def get_stats(self, since_hours: int = 24) -> Dict[str, Any]:
        """Get statistics about export runs."""
        self.initialize()
        conn = self._get_connection()
        since_time = _since(since_hours)

        row = conn.execute(
            """
            SELECT
                COUNT(*) as total,
                SUM(CASE WHEN status = 'success' THEN 1 ELSE 0 END) as success_count,
                SUM(CASE WHEN status = 'error' THEN 1 ELSE 0 END) as error_count,
                AVG(duration_ms) as avg_duration_ms,
                SUM(tables_count) as total_tables
            FROM export_runs
            WHERE timestamp >= ?
            """,
            (since_time,),
        ).fetchone()

        by_dialect = [
            dict(r) for r in conn.execute(
                """
                SELECT dialect, COUNT(*) as count,
                       SUM(CASE WHEN status = 'error' THEN 1 ELSE 0 END) as errors
                FROM export_runs
                WHERE timestamp >= ? AND dialect IS NOT NULL
                GROUP BY dialect
                ORDER BY count DESC, dialect
                """,
                (since_time,),
            ).fetchall()
        ]

        return {
            "total_runs": row["total"] or 0,
            "success_count": row["success_count"] or 0,
            "error_count": row["error_count"] or 0,
            "avg_duration_ms": round(row["avg_duration_ms"] or 0, 2),
            "total_tables_exported": row["total_tables"] or 0,
            "since_hours": since_hours,
            "by_dialect": by_dialect,
        }

    def cleanup_old_runs(self, retention_days: int = 30) -> int:
        """Delete runs older than retention period.

        Returns:
            Number of deleted rows
        """
        self.initialize()
        conn = self._get_connection()

        cursor = conn.execute(
            "DELETE FROM export_runs WHERE timestamp < ?",
            (_since(retention_days * 24),),
        )
        deleted = cursor.rowcount
        if deleted > 0:
            logger.info("Cleaned up %d old export run entries", deleted)
        return deleted

    def __enter__(self):
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
