"""Closed registry of output dialects and their generators."""

from enum import Enum
from typing import Dict, Sequence, Type, Union

from ..database.models import TableSchema
from ..errors import UnknownDialectError
from .base import SchemaGenerator
from .go import GoGenerator
from .interchange import InterchangeGenerator
from .laravel import LaravelMigrationGenerator, LaravelModelGenerator
from .mermaid import MermaidGenerator
from .prisma import PrismaGenerator
from .sql import SqlGenerator
from .typescript import TypeScriptGenerator
from .zod import ZodGenerator


class Dialect(str, Enum):
    """Supported output dialects."""
    SQL = "sql"
    LARAVEL_MIGRATION = "laravel_migration"
    LARAVEL_MODEL = "laravel_model"
    PRISMA = "prisma"
    TYPESCRIPT = "typescript"
    GO = "go"
    ZOD = "zod"
    MERMAID = "mermaid"
    JSON = "json"

    @classmethod
    def parse(cls, value: Union[str, "Dialect"]) -> "Dialect":
        """Coerce a dialect id to a Dialect."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnknownDialectError(str(value), details={"supported": [d.value for d in cls]})


GENERATORS: Dict[Dialect, Type[SchemaGenerator]] = {
    Dialect.SQL: SqlGenerator,
    Dialect.LARAVEL_MIGRATION: LaravelMigrationGenerator,
    Dialect.LARAVEL_MODEL: LaravelModelGenerator,
    Dialect.PRISMA: PrismaGenerator,
    Dialect.TYPESCRIPT: TypeScriptGenerator,
    Dialect.GO: GoGenerator,
    Dialect.ZOD: ZodGenerator,
    Dialect.MERMAID: MermaidGenerator,
    Dialect.JSON: InterchangeGenerator,
}

_missing = set(Dialect) - set(GENERATORS)
if _missing:
    raise RuntimeError(f"No generator registered for: {sorted(d.value for d in _missing)}")

# Constructor options accepted per dialect
DIALECT_OPTIONS: Dict[Dialect, Dict[str, str]] = {
    Dialect.LARAVEL_MODEL: {"laravel_namespace": "namespace"},
    Dialect.GO: {"go_package": "package"},
}


def get_generator(target: Union[str, Dialect], **options) -> SchemaGenerator:
    """Instantiate the generator for a dialect.

    Options that do not apply to the dialect are ignored, so callers can pass
    every configured option regardless of the target.

    Args:
        target: Dialect or dialect id
        **options: ``laravel_namespace`` and ``go_package``

    Raises:
        UnknownDialectError: If the target is not a supported dialect
    """
    dialect = Dialect.parse(target)
    kwargs = {
        param: options[option]
        for option, param in DIALECT_OPTIONS.get(dialect, {}).items()
        if options.get(option) is not None
    }
    return GENERATORS[dialect](**kwargs)


def generate(target: Union[str, Dialect], tables: Sequence[TableSchema], **options) -> str:
    """Render tables in the requested dialect."""
    return get_generator(target, **options).render(tables)
