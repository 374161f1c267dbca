"""schema-export - Main entry point."""

import logging

import typer
from rich.console import Console
from rich.table import Table

from .commands import generate, runs
from .config import settings
from .generators import GENERATORS

app = typer.Typer(
    name="schema-export",
    help="Export database schemas as DDL, ORM code, type definitions and diagrams",
    add_completion=False,
)

# Add subcommands
app.command("generate")(generate.generate)
app.add_typer(runs.app, name="runs")

console = Console()


@app.command()
def config():
    """Show current configuration."""
    console.print("[bold]Current Configuration[/bold]")
    console.print(f"  Default dialect: {settings.default_dialect}")
    console.print(f"  Go package: {settings.go_package}")
    console.print(f"  Laravel namespace: {settings.laravel_namespace}", markup=False)
    console.print(f"  DuckDB path: {settings.duckdb_path or 'Not set'}")
    console.print(f"  Log level: {settings.log_level}")
    console.print(f"  Run history: {'Enabled' if settings.run_logging_enabled else 'Disabled'}")
    console.print(f"  Run history database: {settings.run_logging_db_path or '~/.schema-export/runs.db'}")
    console.print(f"  Run history retention: {settings.run_logging_retention_days} days")


@app.command()
def dialects():
    """List the supported output dialects."""
    table = Table(title="Output Dialects")
    table.add_column("Dialect", style="cyan")
    table.add_column("Description", style="green")
    table.add_column("Extension", style="magenta")

    for dialect, generator_cls in GENERATORS.items():
        table.add_row(dialect.value, generator_cls.description, f".{generator_cls.file_extension}")

    console.print(table)


@app.callback()
def main():
    """
    schema-export - Render database schemas in other dialects.

    Examples:

        schema-export generate prisma users orders --snapshot shop.json

        schema-export generate mermaid --duckdb ./analytics.duckdb -o erd.mmd

        schema-export runs list --status error
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


if __name__ == "__main__":
    app()
