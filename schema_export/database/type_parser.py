"""Parsing of raw database column type strings."""

import re
from typing import Dict, List, Optional

from .models import BaseType, ParsedType


_TOKEN_RE = re.compile(r"^\s*([a-z]+)")
_ARGS_RE = re.compile(r"\(([^)]*)\)")

TYPE_FAMILIES: Dict[str, BaseType] = {
    # Integer types
    "tinyint": BaseType.INTEGER,
    "smallint": BaseType.INTEGER,
    "mediumint": BaseType.INTEGER,
    "int": BaseType.INTEGER,
    "integer": BaseType.INTEGER,
    "bigint": BaseType.INTEGER,
    "hugeint": BaseType.INTEGER,
    "serial": BaseType.INTEGER,
    "smallserial": BaseType.INTEGER,
    "bigserial": BaseType.INTEGER,
    "year": BaseType.INTEGER,
    "utinyint": BaseType.INTEGER,
    "usmallint": BaseType.INTEGER,
    "uinteger": BaseType.INTEGER,
    "ubigint": BaseType.INTEGER,

    # Floating point and fixed point types
    "float": BaseType.FLOAT,
    "double": BaseType.FLOAT,
    "real": BaseType.FLOAT,
    "decimal": BaseType.FLOAT,
    "numeric": BaseType.FLOAT,
    "dec": BaseType.FLOAT,
    "fixed": BaseType.FLOAT,
    "number": BaseType.FLOAT,
    "money": BaseType.FLOAT,

    # Boolean
    "bool": BaseType.BOOLEAN,
    "boolean": BaseType.BOOLEAN,
    "bit": BaseType.BOOLEAN,

    # Date/Time types
    "date": BaseType.TEMPORAL,
    "datetime": BaseType.TEMPORAL,
    "timestamp": BaseType.TEMPORAL,
    "timestamptz": BaseType.TEMPORAL,
    "time": BaseType.TEMPORAL,
    "timetz": BaseType.TEMPORAL,

    # String types
    "char": BaseType.TEXT,
    "character": BaseType.TEXT,
    "varchar": BaseType.TEXT,
    "nchar": BaseType.TEXT,
    "nvarchar": BaseType.TEXT,
    "tinytext": BaseType.TEXT,
    "text": BaseType.TEXT,
    "mediumtext": BaseType.TEXT,
    "longtext": BaseType.TEXT,
    "string": BaseType.TEXT,
    "citext": BaseType.TEXT,
    "clob": BaseType.TEXT,
    "uuid": BaseType.TEXT,
    "enum": BaseType.TEXT,
    "set": BaseType.TEXT,
    "interval": BaseType.TEXT,

    # JSON
    "json": BaseType.JSON,
    "jsonb": BaseType.JSON,

    # Binary types
    "binary": BaseType.BINARY,
    "varbinary": BaseType.BINARY,
    "tinyblob": BaseType.BINARY,
    "blob": BaseType.BINARY,
    "mediumblob": BaseType.BINARY,
    "longblob": BaseType.BINARY,
    "bytea": BaseType.BINARY,
}

# Tokens whose argument list is (precision, scale) rather than a length
DECIMAL_TOKENS = {"decimal", "numeric", "dec", "fixed", "number"}
# Floating point tokens that take (precision, scale) only when given two arguments
FLOAT_TOKENS = {"float", "double", "real"}


def _parse_args(normalized: str) -> List[int]:
    match = _ARGS_RE.search(normalized)
    if not match:
        return []
    args = []
    for part in match.group(1).split(","):
        part = part.strip()
        if not part.isdigit():
            # enum('a','b') and friends carry no numeric arguments
            return []
        args.append(int(part))
    return args


def parse_type(raw_type: Optional[str]) -> ParsedType:
    """Parse a raw column type string into a ParsedType.

    Never raises: anything that is not recognised maps to ``BaseType.UNKNOWN``.
    Parsing the same raw string always yields an equal result.

    Args:
        raw_type: Type string as reported by introspection, e.g.
            ``'varchar(255)'``, ``'decimal(10,2)'`` or ``'int(10) unsigned'``

    Returns:
        ParsedType with the base family and any numeric arguments
    """
    normalized = (raw_type or "").strip().lower()
    match = _TOKEN_RE.match(normalized)
    token = match.group(1) if match else ""
    base = TYPE_FAMILIES.get(token, BaseType.UNKNOWN)

    args = _parse_args(normalized)
    length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None

    if token in DECIMAL_TOKENS or (token in FLOAT_TOKENS and len(args) == 2):
        if args:
            precision = args[0]
        if len(args) > 1:
            scale = args[1]
    elif args:
        length = args[0]

    # MySQL convention: tinyint(1) is a boolean, bit(n > 1) is a bit field
    if token == "tinyint" and length == 1:
        base = BaseType.BOOLEAN
    elif token == "bit" and length is not None and length > 1:
        base = BaseType.BINARY

    return ParsedType(
        base=base,
        token=token,
        length=length,
        precision=precision,
        scale=scale,
        unsigned="unsigned" in normalized,
    )
