"""Generate command - renders introspected tables in an output dialect."""

import asyncio
import os
from typing import Dict, List, Optional, Tuple

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from ..config import settings
from ..database import DatabaseIntrospector, DuckDBIntrospector, SnapshotIntrospector
from ..errors import SchemaExportError, ValidationError
from ..logging import log_export_run
from ..orchestrator import ExportOrchestrator, ExportRequest, ExportResult

# Status output goes to stderr so generated code can be piped
console = Console(stderr=True)


def open_introspector(
    snapshot: Optional[str],
    duckdb_path: Optional[str],
) -> Tuple[DatabaseIntrospector, str, str]:
    """Open the introspection source chosen on the command line.

    Returns:
        Tuple of (introspector, source_type, source_path)
    """
    if snapshot and duckdb_path:
        raise ValidationError("Use either --snapshot or --duckdb, not both")

    if snapshot:
        return SnapshotIntrospector.from_file(snapshot), "snapshot", snapshot

    path = duckdb_path or settings.duckdb_path
    if not path:
        raise ValidationError(
            "No schema source given. Pass --snapshot or --duckdb, "
            "or set SCHEMA_EXPORT_DUCKDB_PATH"
        )
    return DuckDBIntrospector(database_path=path, read_only=True), "duckdb", path


async def run_export(
    introspector: DatabaseIntrospector,
    database: str,
    tables: List[str],
    target: str,
    generator_options: Optional[Dict[str, str]] = None,
) -> ExportResult:
    """Export the given tables, or every table in the database when none are given."""
    if not tables:
        tables = await introspector.get_tables(database)
    orchestrator = ExportOrchestrator(introspector, generator_options=generator_options)
    return await orchestrator.export(
        ExportRequest(database=database, tables=tuple(tables), target=target)
    )


def generate(
    target: Optional[str] = typer.Argument(None, help="Output dialect (see 'schema-export dialects')"),
    tables: Optional[List[str]] = typer.Argument(None, help="Tables to export, in order (default: all)"),
    snapshot: Optional[str] = typer.Option(None, "--snapshot", "-s", help="JSON snapshot of introspection records"),
    duckdb_path: Optional[str] = typer.Option(None, "--duckdb", help="Path to a DuckDB database file"),
    database: Optional[str] = typer.Option(None, "--database", "-d", help="Database name (defaults to the source's name)"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write output to this file instead of stdout"),
    go_package: Optional[str] = typer.Option(None, "--go-package", help="Package name for Go output"),
    laravel_namespace: Optional[str] = typer.Option(None, "--laravel-namespace", help="Namespace for Laravel models"),
):
    """
    Generate code for database tables in the chosen dialect.

    Examples:
        schema-export generate sql --snapshot shop.json
        schema-export generate prisma users orders --duckdb ./shop.duckdb
        schema-export generate go --snapshot shop.json --go-package store -o models.go
    """
    target = target or settings.default_dialect
    options = settings.generator_options()
    if go_package:
        options["go_package"] = go_package
    if laravel_namespace:
        options["laravel_namespace"] = laravel_namespace

    try:
        introspector, source_type, source_path = open_introspector(snapshot, duckdb_path)
    except ImportError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)
    except SchemaExportError as e:
        console.print(f"[red]Error: {escape(e.message)}[/red]")
        raise typer.Exit(1)

    db_name = database or introspector.get_database_name() or ""

    console.print(Panel(
        f"[bold blue]Exporting schema[/bold blue]\n"
        f"Source: {source_type} ({source_path})\n"
        f"Database: {db_name}\n"
        f"Target: {target}",
        title="schema-export",
    ))

    try:
        with log_export_run(
            "generate",
            dialect=target,
            source_type=source_type,
            source_path=source_path,
            database_name=db_name,
            tables_requested=tables or [],
        ) as ctx:
            try:
                result = asyncio.run(run_export(introspector, db_name, tables or [], target, options))
            finally:
                introspector.close()

            if result.error:
                raise SchemaExportError(result.error, code=result.error_code or "SCHEMA_EXPORT_ERROR")

            ctx.tables_count = result.table_count
            ctx.columns_count = result.column_count
            ctx.relations_count = result.relation_count
            ctx.output_bytes = len(result.text.encode("utf-8"))

            if output:
                directory = os.path.dirname(output)
                if directory:
                    os.makedirs(directory, exist_ok=True)
                with open(output, "w", encoding="utf-8") as f:
                    f.write(result.text)
                    f.write("\n")
                ctx.output_path = output
    except ImportError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)
    except SchemaExportError as e:
        console.print(f"[red]Error: {escape(e.message)}[/red]")
        raise typer.Exit(1)

    console.print(
        f"[green]Exported {result.table_count} tables "
        f"({result.column_count} columns, {result.relation_count} relations) "
        f"as {result.target.value}[/green]"
    )
    if output:
        console.print(f"[green]Saved {output}[/green]")
    else:
        typer.echo(result.text)
