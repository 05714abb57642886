"""Shared fixtures for schema engine tests."""

import pytest

from ddlschema_core import Database, SchemaConfig
from tests import builders as b


@pytest.fixture
def database() -> Database:
    return Database()


@pytest.fixture
def strict_database() -> Database:
    return Database(config=SchemaConfig(strict=True))


@pytest.fixture
def users(database):
    """``users(id PK autoincrement, email UNIQUE, name)`` registered in ``database``."""
    return database.build_table(
        b.create_table(
            "users",
            b.column("id", autoincrement=True, primary=True, nullable=False),
            b.column("email", "varchar", {"length": 255}, unique=True),
            b.column("name", "varchar", {"length": 100}),
        )
    )


@pytest.fixture
def orders(database, users):
    """``orders`` referencing ``users`` through an explicit foreign key."""
    return database.build_table(
        b.create_table(
            "orders",
            b.column("id", primary=True),
            b.column("user_id"),
            b.column("status", "varchar", {"length": 20}),
            b.column("note", "text"),
            b.foreign_key(["user_id"], "users", ["id"], name="fk_orders_user",
                          on=[{"trigger": "delete", "action": "cascade"}]),
            b.key("index", ["status"], name="ix_status"),
            b.key("fulltextIndex", ["note"], name="ft_note"),
        )
    )
