"""DDL Schema Database - Table catalog consulted for cross-table lookups.

Tables hold only a weak reference to their database and use it to resolve
foreign key targets. The database owns the tables.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional

from ddlschema_core.ast import StatementId
from ddlschema_core.config import SchemaConfig
from ddlschema_core.table import Table

logger = logging.getLogger(__name__)


class TableCatalog(ABC):
    """Lookups a table may make against the database that holds it."""

    @abstractmethod
    def get_table(self, name: str) -> Optional[Table]:
        """Resolve a table by name."""

    @abstractmethod
    def get_tables(self) -> List[Table]:
        """List all tables, in creation order."""


class Database(TableCatalog):
    """Collection of tables built from table-definition statements."""

    def __init__(self, tables: Optional[List[Table]] = None, config: Optional[SchemaConfig] = None):
        """Initialize database.

        Args:
            tables: Initial tables
            config: Engine settings handed to tables built here
        """
        self.config = config or SchemaConfig()
        self.tables: List[Table] = []
        for table in tables or []:
            self.add_table(table)

    def get_table(self, name: str) -> Optional[Table]:
        """Get table by name."""
        for table in self.tables:
            if table.name == name:
                return table
        return None

    def get_tables(self) -> List[Table]:
        return list(self.tables)

    def add_table(self, table: Table) -> bool:
        """Add a table, unless one with the same name exists."""
        if self.get_table(table.name) is not None:
            logger.log(self.config.rejection_level, f"Table {table.name} already exists, not adding")
            return False
        table.set_database(self)
        self.tables.append(table)
        return True

    def drop_table(self, name: str) -> bool:
        """Remove a table by name."""
        table = self.get_table(name)
        if table is None:
            return False
        self.tables.remove(table)
        table.set_database(None)
        return True

    def build_table(self, node: Mapping[str, Any]) -> Optional[Table]:
        """Build a table from a CREATE TABLE node and add it.

        Args:
            node: ``P_CREATE_TABLE_COMMON`` or ``P_CREATE_TABLE_LIKE`` node

        Returns:
            Added table, or None if the node is not recognized, names an
            unknown LIKE source, or names an existing table
        """
        statement = StatementId.of(node)
        if statement is StatementId.CREATE_TABLE_COMMON:
            table = Table.from_common_def(node, self, self.config)
        elif statement is StatementId.CREATE_TABLE_LIKE:
            table = Table.from_alike_def(node, self.tables)
        else:
            logger.debug(f"Skipping unrecognized statement {node.get('id')!r}")
            return None

        if table is None or not self.add_table(table):
            return None
        return table

    def to_dict(self) -> List[Dict[str, Any]]:
        return [t.to_dict() for t in self.tables]


__all__ = ["TableCatalog", "Database"]
