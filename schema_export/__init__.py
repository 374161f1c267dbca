"""schema-export: render database schemas as DDL, ORM code, types and diagrams."""

__version__ = "0.1.0"
