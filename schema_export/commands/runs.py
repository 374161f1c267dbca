"""Run history commands - inspect previously recorded export runs."""

import json
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..logging import get_run_logger

app = typer.Typer(help="Inspect the export run history")
console = Console()

STATUS_STYLES = {
    "success": "green",
    "error": "red",
    "started": "yellow",
}


@app.command("list")
def list_runs(
    dialect: Optional[str] = typer.Option(None, "--dialect", "-t", help="Filter by dialect"),
    status: Optional[str] = typer.Option(None, "--status", help="Filter by status (success, error, started)"),
    since_hours: int = typer.Option(24, "--since", help="Only runs from the last N hours"),
    limit: int = typer.Option(20, "--limit", "-n", help="Maximum number of runs to show"),
):
    """List recent export runs."""
    run_logger = get_run_logger()
    if not run_logger.enabled:
        console.print("[yellow]Run history is disabled[/yellow]")
        return

    runs = run_logger.query_runs(dialect=dialect, status=status, since_hours=since_hours, limit=limit)
    if not runs:
        console.print(f"[yellow]No runs in the last {since_hours} hours[/yellow]")
        return

    table = Table(title="Export Runs")
    table.add_column("Run", style="cyan")
    table.add_column("Timestamp")
    table.add_column("Dialect", style="magenta")
    table.add_column("Database")
    table.add_column("Tables", justify="right")
    table.add_column("Status")
    table.add_column("Duration", justify="right")

    for run in runs:
        status_value = run["status"] or ""
        style = STATUS_STYLES.get(status_value, "white")
        duration = f"{run['duration_ms']}ms" if run["duration_ms"] is not None else "-"
        table.add_row(
            run["run_id"],
            run["timestamp"] or "",
            run["dialect"] or "-",
            run["database_name"] or "-",
            str(run["tables_count"] or 0),
            f"[{style}]{status_value}[/{style}]",
            duration,
        )

    console.print(table)


@app.command("show")
def show_run(
    run_id: str = typer.Argument(..., help="Run ID to show"),
):
    """Show the details of one export run."""
    run = get_run_logger().get_run(run_id)
    if run is None:
        console.print(f"[red]Run not found: {escape(run_id)}[/red]")
        raise typer.Exit(1)

    tables = json.loads(run["tables_requested"]) if run["tables_requested"] else []
    lines = [
        f"Command: {run['command']}",
        f"Timestamp: {run['timestamp']}",
        f"Status: {run['status']}",
        f"Dialect: {run['dialect'] or '-'}",
        f"Source: {run['source_type'] or '-'} ({run['source_path'] or '-'})",
        f"Database: {run['database_name'] or '-'}",
        f"Tables requested: {', '.join(tables) if tables else 'all'}",
        f"Exported: {run['tables_count'] or 0} tables, {run['columns_count'] or 0} columns, "
        f"{run['relations_count'] or 0} relations",
        f"Output: {run['output_path'] or 'stdout'} ({run['output_bytes'] or 0} bytes)",
        f"Duration: {run['duration_ms'] if run['duration_ms'] is not None else '-'}ms",
    ]
    if run["error_message"]:
        lines.append(f"Error: {run['error_type']}: {run['error_message']}")

    console.print(Panel(escape("\n".join(lines)), title=f"Run {escape(run_id)}"))


@app.command("stats")
def stats(
    since_hours: int = typer.Option(24, "--since", help="Statistics window in hours"),
):
    """Show export run statistics."""
    result = get_run_logger().get_stats(since_hours=since_hours)
    if "error" in result:
        console.print(f"[yellow]{result['error']}[/yellow]")
        return

    console.print(f"[bold]Export runs in the last {since_hours} hours[/bold]")
    console.print(f"  Total runs: {result['total_runs']}")
    console.print(f"  Succeeded: [green]{result['success_count']}[/green]")
    console.print(f"  Failed: [red]{result['error_count']}[/red]")
    console.print(f"  Average duration: {result['avg_duration_ms']}ms")
    console.print(f"  Tables exported: {result['total_tables_exported']}")

    if result["by_dialect"]:
        table = Table(title="By Dialect")
        table.add_column("Dialect", style="cyan")
        table.add_column("Runs", justify="right")
        table.add_column("Errors", justify="right", style="red")
        for row in result["by_dialect"]:
            table.add_row(row["dialect"], str(row["count"]), str(row["errors"] or 0))
        console.print(table)
