"""Shared pytest fixtures for schema-export tests."""

import copy
import json

import pytest

from schema_export.database import SnapshotIntrospector
from schema_export.logging.run_db import RunDatabase

from tests.fixtures import (
    MockIntrospector,
    SHOP_SNAPSHOT,
    USERS_RECORDS,
    ORDERS_RECORDS,
    SHOP_RELATIONS,
    make_table,
)


@pytest.fixture
def users_table():
    """users: id, name, unique email and both timestamp columns, no relations."""
    return make_table("users", USERS_RECORDS)


@pytest.fixture
def orders_table():
    """orders: references users.id and carries every timestamp column."""
    return make_table("orders", ORDERS_RECORDS, SHOP_RELATIONS)


@pytest.fixture
def shop_tables(users_table, orders_table):
    return [users_table, orders_table]


@pytest.fixture
def mock_introspector():
    """Create a fresh MockIntrospector holding the shop database."""
    return MockIntrospector(
        tables={"users": list(USERS_RECORDS), "orders": list(ORDERS_RECORDS)},
        relations=list(SHOP_RELATIONS),
    )


@pytest.fixture
def shop_snapshot():
    """A deep copy of the shop snapshot document, safe to modify."""
    return copy.deepcopy(SHOP_SNAPSHOT)


@pytest.fixture
def snapshot_introspector(shop_snapshot):
    return SnapshotIntrospector.from_dict(shop_snapshot)


@pytest.fixture
def snapshot_file(tmp_path, shop_snapshot):
    """Write the shop snapshot to a temporary JSON file."""
    path = tmp_path / "shop.json"
    path.write_text(json.dumps(shop_snapshot), encoding="utf-8")
    return path


@pytest.fixture
def run_db(tmp_path):
    """Run history database in a temporary directory."""
    db = RunDatabase(str(tmp_path / "runs.db"))
    db.initialize()
    yield db
    db.close()
