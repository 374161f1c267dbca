"""Error types for schema-export."""

from typing import Optional, Dict, Any


class SchemaExportError(Exception):
    """Base exception for schema-export errors."""

    def __init__(self, message: str, code: str = "SCHEMA_EXPORT_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for structured output."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConnectionError(SchemaExportError):
    """Error connecting to the database."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONNECTION_ERROR", details=details)


class IntrospectionError(SchemaExportError):
    """An introspection call failed while assembling the schema."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="INTROSPECTION_ERROR", details=details)


class GenerationError(SchemaExportError):
    """Error while rendering a dialect."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="GENERATION_ERROR", details=details)


class UnknownDialectError(SchemaExportError):
    """Requested target is not one of the supported dialects."""

    def __init__(self, dialect: str, details: Optional[Dict[str, Any]] = None):
        details = details or {}
        details["dialect"] = dialect
        super().__init__(f"Unknown dialect: {dialect}", code="UNKNOWN_DIALECT", details=details)
        self.dialect = dialect


class InterchangeError(SchemaExportError):
    """Malformed JSON schema dump or snapshot."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="INTERCHANGE_ERROR", details=details)


class ValidationError(SchemaExportError):
    """Invalid export request."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="VALIDATION_ERROR", details=details)
