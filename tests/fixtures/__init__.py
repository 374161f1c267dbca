"""Test fixtures package."""

from .mock_introspector import MockIntrospector
from .schemas import (
    SHOP_SNAPSHOT,
    USERS_RECORDS,
    ORDERS_RECORDS,
    SHOP_RELATIONS,
    make_table,
)

__all__ = [
    "MockIntrospector",
    "SHOP_SNAPSHOT",
    "USERS_RECORDS",
    "ORDERS_RECORDS",
    "SHOP_RELATIONS",
    "make_table",
]
