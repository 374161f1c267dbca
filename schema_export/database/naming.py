"""Identifier naming convention transforms."""


def _segments(identifier: str):
    return [part for part in identifier.split("_") if part]


def to_pascal_case(identifier: str) -> str:
    """Convert snake_case to PascalCase (order_items -> OrderItems).

    Only the first letter of each segment is changed, so already cased
    segments keep their inner casing.
    """
    return "".join(part[0].upper() + part[1:] for part in _segments(identifier))


def to_camel_case(identifier: str) -> str:
    """Convert snake_case to camelCase (order_items -> orderItems)."""
    pascal = to_pascal_case(identifier)
    if not pascal:
        return pascal
    return pascal[0].lower() + pascal[1:]
