"""DDL Schema Core - Table schema model built from parsed SQL DDL.

Turns the tagged AST of ``CREATE TABLE`` statements into a table model
that keeps its own integrity while it is altered:

- Columns with declared types and options
- Primary, unique and foreign keys
- Plain, fulltext and spatial indexes
- Table options
- Cascading column drops and validated key/index insertion
- Plain nested-mapping serialization and deep cloning

Architecture:
    ┌─────────────────────────────────────────────────────────────────┐
    │                        DDL Schema Core                         │
    ├─────────────────────────────────────────────────────────────────┤
    │  ┌─────────────┐  ┌─────────────┐  ┌─────────────┐             │
    │  │  Tagged     │  │   Table     │  │  Database   │             │
    │  │    AST      │──│  (columns,  │──│  (catalog)  │             │
    │  │             │  │ keys, idx)  │  │             │             │
    │  └─────────────┘  └─────────────┘  └─────────────┘             │
    │                          │                                      │
    │  ┌─────────────┐  ┌─────────────┐  ┌─────────────┐             │
    │  │   Column    │  │  Keys and   │  │   Table     │             │
    │  │  Datatype   │──│  Indexes    │──│  Options    │             │
    │  └─────────────┘  └─────────────┘  └─────────────┘             │
    └─────────────────────────────────────────────────────────────────┘

Usage:
    from ddlschema_core import Database

    db = Database()
    users = db.build_table(create_users_node)
    users.drop_column(users.get_column("nickname"))
    print(users.to_dict())

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

__version__ = "1.0.0"
__author__ = "BlackRoad OS, Inc."
__email__ = "engineering@blackroad.io"

from ddlschema_core.ast import DefinitionKind, StatementId
from ddlschema_core.columns import Column, ColumnOptions, extract_constraints
from ddlschema_core.config import SchemaConfig
from ddlschema_core.database import Database, TableCatalog
from ddlschema_core.errors import (
    MutationResult,
    Rejection,
    SchemaError,
    SchemaIntegrityError,
    UnknownDefinitionError,
    UnknownStatementError,
)
from ddlschema_core.keys import (
    ForeignKey,
    FulltextIndex,
    Index,
    IndexColumn,
    PrimaryKey,
    Reference,
    ReferentialAction,
    SpatialIndex,
    UniqueKey,
)
from ddlschema_core.options import TableOptions
from ddlschema_core.table import ColumnPosition, IndexType, Table
from ddlschema_core.types import Datatype

__all__ = [
    # Version
    "__version__",

    # Core
    "Table",
    "Database",
    "TableCatalog",
    "ColumnPosition",
    "IndexType",

    # AST
    "StatementId",
    "DefinitionKind",

    # Columns
    "Column",
    "ColumnOptions",
    "Datatype",
    "extract_constraints",

    # Keys and indexes
    "PrimaryKey",
    "ForeignKey",
    "UniqueKey",
    "Index",
    "FulltextIndex",
    "SpatialIndex",
    "IndexColumn",
    "Reference",
    "ReferentialAction",
    "TableOptions",

    # Config and errors
    "SchemaConfig",
    "MutationResult",
    "Rejection",
    "SchemaError",
    "SchemaIntegrityError",
    "UnknownDefinitionError",
    "UnknownStatementError",
]
