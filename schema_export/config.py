"""Configuration management for schema-export."""

import os
from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional


def _find_env_file() -> Optional[str]:
    """Find .env file in multiple locations.

    Search order:
    1. Current working directory
    2. ~/.schema-export/.env
    3. Package directory (where this file is located)
    """
    if os.path.exists(".env"):
        return ".env"

    user_env = Path.home() / ".schema-export" / ".env"
    if user_env.exists():
        return str(user_env)

    package_dir = Path(__file__).parent.parent
    package_env = package_dir / ".env"
    if package_env.exists():
        return str(package_env)

    return None


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Generation defaults
    default_dialect: str = Field(
        default="sql",
        description="Dialect used when none is given on the command line"
    )
    go_package: str = Field(
        default="models",
        description="Package name for generated Go structs"
    )
    laravel_namespace: str = Field(
        default="App\\Models",
        description="Namespace for generated Eloquent models"
    )

    # Introspection source
    duckdb_path: Optional[str] = Field(
        default=None,
        description="DuckDB database file used when no source is given"
    )

    log_level: str = Field(
        default="WARNING",
        description="Logging level for the schema_export loggers"
    )

    # Run history configuration
    run_logging_enabled: bool = Field(
        default=True,
        description="Record export runs in the run history database"
    )
    run_logging_db_path: Optional[str] = Field(
        default=None,
        description="Path to run history database (default: ~/.schema-export/runs.db)"
    )
    run_logging_retention_days: int = Field(
        default=30,
        description="Number of days to retain run history entries"
    )

    class Config:
        env_file = _find_env_file()
        env_file_encoding = "utf-8"
        env_prefix = "SCHEMA_EXPORT_"

    def generator_options(self) -> dict:
        """Options forwarded to dialect generators."""
        return {
            "go_package": self.go_package,
            "laravel_namespace": self.laravel_namespace,
        }


# Global settings instance
settings = Settings()
