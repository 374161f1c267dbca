"""Code generation module for schema-export.

This module renders the schema IR into nine output dialects: native DDL,
Laravel migrations and models, Prisma, TypeScript, Go, Zod, Mermaid ERD
and a structural JSON dump.
"""

from .base import SchemaGenerator
from .registry import Dialect, GENERATORS, get_generator, generate
from .interchange import dump_interchange, load_interchange

__all__ = [
    "SchemaGenerator",
    "Dialect",
    "GENERATORS",
    "get_generator",
    "generate",
    "dump_interchange",
    "load_interchange",
]
