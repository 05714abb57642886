"""DDL Schema Table - Table model and integrity-checked mutation.

A ``Table`` owns an ordered list of columns and the collections of keys
and indexes defined over them. Every mutation validates before it
changes anything, so the table is never left referencing a column it does
not have:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                             Table                                  │
    ├─────────────────────────────────────────────────────────────────────┤
    │  ┌─────────────┐  ┌─────────────┐  ┌─────────────┐                 │
    │  │  Columns    │  │    Keys     │  │  Indexes    │                 │
    │  │  (ordered)  │──│ PK, FK, UQ  │──│ plain, FT,  │                 │
    │  │             │  │             │  │  spatial    │                 │
    │  └─────────────┘  └─────────────┘  └─────────────┘                 │
    │         │               │                                           │
    │  ┌─────────────┐  ┌─────────────┐                                   │
    │  │   Inline    │  │  Database   │  (weak reference, lookups only)   │
    │  │ extraction  │  │   catalog   │                                   │
    │  └─────────────┘  └─────────────┘                                   │
    └─────────────────────────────────────────────────────────────────────┘

Refused mutations return a falsy ``MutationResult`` and leave the table
unchanged; a strict ``SchemaConfig`` raises ``SchemaIntegrityError``
instead.

Usage:
    table = Table.from_common_def(node, database)
    table.drop_column(table.get_column("email"))
    json = table.to_dict()

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import weakref
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Union

from ddlschema_core.ast import DefinitionKind, StatementId, node_def, node_list
from ddlschema_core.columns import Column, InlineDeclarations, extract_constraints
from ddlschema_core.config import SchemaConfig
from ddlschema_core.errors import (
    MutationResult,
    Rejection,
    SchemaIntegrityError,
    UnknownStatementError,
)
from ddlschema_core.keys import (
    ForeignKey,
    FulltextIndex,
    Index,
    PrimaryKey,
    SpatialIndex,
    UniqueKey,
)
from ddlschema_core.options import TableOptions

if TYPE_CHECKING:
    from ddlschema_core.database import TableCatalog

logger = logging.getLogger(__name__)

AnyIndex = Union[UniqueKey, Index, FulltextIndex, SpatialIndex]


# =============================================================================
# Positions and Index Types
# =============================================================================


@dataclass(frozen=True)
class ColumnPosition:
    """Where to place a column.

    ``after=None`` means before every other column. Appending needs no
    position at all: operations take ``None`` for it.
    """

    after: Optional[str] = None

    @classmethod
    def first(cls) -> ColumnPosition:
        return cls(after=None)

    @classmethod
    def after_column(cls, name: str) -> ColumnPosition:
        return cls(after=name)

    @property
    def is_first(self) -> bool:
        return self.after is None


class IndexType(Enum):
    """Collections holding named indexes, in lookup priority order."""

    UNIQUE_KEY = "unique_keys"
    INDEX = "indexes"
    FULLTEXT_INDEX = "fulltext_indexes"
    SPATIAL_INDEX = "spatial_indexes"


def _remove_by_identity(items: List[Any], item: Any) -> bool:
    for i, candidate in enumerate(items):
        if candidate is item:
            del items[i]
            return True
    return False


# =============================================================================
# Table
# =============================================================================


class Table:
    """Table definition.

    Columns, keys and indexes as declared by a table-definition statement
    and altered afterwards.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        database: Optional[TableCatalog] = None,
        config: Optional[SchemaConfig] = None,
    ):
        """Initialize table.

        Args:
            name: Table name
            database: Catalog used to resolve other tables (not owned)
            config: Engine settings, defaults to ``SchemaConfig()``
        """
        self.name = name
        self.config = config or SchemaConfig()
        self._database_ref: Optional[weakref.ReferenceType] = None
        self.columns: List[Column] = []
        self.options: Optional[TableOptions] = None
        self.primary_key: Optional[PrimaryKey] = None
        self.foreign_keys: List[ForeignKey] = []
        self.unique_keys: List[UniqueKey] = []
        self.indexes: List[Index] = []
        self.fulltext_indexes: List[FulltextIndex] = []
        self.spatial_indexes: List[SpatialIndex] = []

        if database is not None:
            self.set_database(database)

    def __repr__(self) -> str:
        return f"Table({self.name!r}, columns={[c.name for c in self.columns]})"

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_common_def(
        cls,
        node: Mapping[str, Any],
        database: Optional[TableCatalog] = None,
        config: Optional[SchemaConfig] = None,
    ) -> Optional[Table]:
        """Create a table from a ``P_CREATE_TABLE_COMMON`` node.

        Args:
            node: Tagged statement node
            database: Catalog the table belongs to
            config: Engine settings

        Returns:
            Created table, or None if the node is not a common table definition
        """
        if StatementId.of(node) is not StatementId.CREATE_TABLE_COMMON:
            return None

        json = node_def(node)
        table = cls(json["table"], database=database, config=config)

        if json.get("tableOptions"):
            table.options = TableOptions.from_def(json["tableOptions"])

        for fragment in node_list(json.get("columnsDef")):
            kind, payload = DefinitionKind.of(fragment)
            _DEFINITION_HANDLERS[kind](table, payload)

        return table

    @classmethod
    def from_alike_def(cls, node: Mapping[str, Any], tables: Optional[List[Table]] = None) -> Optional[Table]:
        """Create a table from a ``P_CREATE_TABLE_LIKE`` node.

        Args:
            node: Tagged statement node
            tables: Already existing tables

        Returns:
            Copy of the named table under the new name, or None if there is
            no such table

        Raises:
            UnknownStatementError: If the node is not a CREATE TABLE LIKE
        """
        if StatementId.of(node) is not StatementId.CREATE_TABLE_LIKE:
            raise UnknownStatementError(f"Unknown json id to build table from: {node.get('id')}")

        json = node_def(node)
        alike = next((t for t in tables or [] if t.name == json["like"]), None)
        if alike is None:
            logger.debug(f"CREATE TABLE {json['table']} LIKE unknown table {json['like']}")
            return None

        table = alike.clone()
        table.name = json["table"]
        return table

    def _ignore_check(self, json: Any) -> None:
        logger.debug(f"Table {self.name}: check constraint not modeled, skipping")

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Convert table to a nested mapping, omitting empty collections."""
        json: Dict[str, Any] = {
            "name": self.name,
            "columns": [c.to_dict() for c in self.columns],
        }

        if self.primary_key is not None:
            json["primaryKey"] = self.primary_key.to_dict()
        if self.foreign_keys:
            json["foreignKeys"] = [k.to_dict() for k in self.foreign_keys]
        if self.unique_keys:
            json["uniqueKeys"] = [k.to_dict() for k in self.unique_keys]
        if self.indexes:
            json["indexes"] = [i.to_dict() for i in self.indexes]
        if self.spatial_indexes:
            json["spatialIndexes"] = [i.to_dict() for i in self.spatial_indexes]
        if self.fulltext_indexes:
            json["fulltextIndexes"] = [i.to_dict() for i in self.fulltext_indexes]
        if self.options is not None:
            json["options"] = self.options.to_dict()

        return json

    def clone(self) -> Table:
        """Create a deep copy sharing only the database reference and config."""
        table = Table(self.name, config=self.config)
        table._database_ref = self._database_ref
        table.columns = [c.clone() for c in self.columns]
        table.options = self.options.clone() if self.options is not None else None
        table.primary_key = self.primary_key.clone() if self.primary_key is not None else None
        table.foreign_keys = [k.clone() for k in self.foreign_keys]
        table.unique_keys = [k.clone() for k in self.unique_keys]
        table.indexes = [i.clone() for i in self.indexes]
        table.fulltext_indexes = [i.clone() for i in self.fulltext_indexes]
        table.spatial_indexes = [i.clone() for i in self.spatial_indexes]
        return table

    # -------------------------------------------------------------------------
    # Database
    # -------------------------------------------------------------------------

    @property
    def database(self) -> Optional[TableCatalog]:
        if self._database_ref is None:
            return None
        return self._database_ref()

    def set_database(self, database: Optional[TableCatalog]) -> None:
        self._database_ref = weakref.ref(database) if database is not None else None

    def get_table(self, name: str) -> Optional[Table]:
        database = self.database
        return database.get_table(name) if database is not None else None

    def get_tables(self) -> List[Table]:
        database = self.database
        return database.get_tables() if database is not None else []

    # -------------------------------------------------------------------------
    # Rejections
    # -------------------------------------------------------------------------

    def _reject(self, reason: Rejection, detail: str = "") -> MutationResult:
        logger.log(self.config.rejection_level, f"Table {self.name}: rejected ({reason.value}) {detail}")
        if self.config.strict:
            raise SchemaIntegrityError(self.name, reason, detail)
        return MutationResult.rejected(reason)

    # -------------------------------------------------------------------------
    # Columns
    # -------------------------------------------------------------------------

    def get_column(self, name: str) -> Optional[Column]:
        """Get column by name."""
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def _column_index(self, name: str) -> Optional[int]:
        for i, column in enumerate(self.columns):
            if column.name == name:
                return i
        return None

    def add_column(self, column: Column, position: Optional[ColumnPosition] = None) -> MutationResult:
        """Add a column, then extract its inline keys into the table.

        Args:
            column: Column to add
            position: None to append, ``ColumnPosition.first()`` to prepend,
                or ``ColumnPosition.after_column(name)``

        Returns:
            Result of inserting the column
        """
        if self.get_column(column.name) is not None:
            return self._reject(Rejection.DUPLICATE_COLUMN, column.name)

        if position is None:
            index = len(self.columns)
        elif position.is_first:
            index = 0
        else:
            ref = self._column_index(position.after)
            if ref is None:
                return self._reject(Rejection.UNKNOWN_POSITION, f"after {position.after}")
            index = ref + 1

        # Strict rejections of inline keys undo the whole addition.
        inline, primary_key = column.inline, self.primary_key
        foreign_keys, unique_keys = list(self.foreign_keys), list(self.unique_keys)
        self.columns.insert(index, column)
        try:
            self._extract_column_features(column)
        except SchemaIntegrityError:
            del self.columns[index]
            column.inline = inline
            self.primary_key = primary_key
            self.foreign_keys[:] = foreign_keys
            self.unique_keys[:] = unique_keys
            raise
        return MutationResult.ok()

    def _extract_column_features(self, column: Column) -> None:
        extracted = extract_constraints(column)
        column.inline = InlineDeclarations()

        if extracted.primary_key is not None:
            self.set_primary_key(extracted.primary_key)
        if extracted.foreign_key is not None:
            self.push_foreign_key(extracted.foreign_key)
        if extracted.unique_key is not None:
            self.push_unique_key(extracted.unique_key)

    def move_column(self, column: Column, position: Optional[ColumnPosition]) -> MutationResult:
        """Move a column by dropping it and adding it back at ``position``.

        The drop cascades, so keys and indexes on the column are removed.
        The position is validated first and a sole column stays in place.
        """
        if self._column_index(column.name) is None:
            return self._reject(Rejection.UNKNOWN_COLUMN, column.name)

        if position is not None and not position.is_first:
            if position.after == column.name or self.get_column(position.after) is None:
                return self._reject(Rejection.UNKNOWN_POSITION, f"after {position.after}")

        if len(self.columns) == 1:
            return MutationResult.ok()

        self.drop_column(column)
        return self.add_column(column, position)

    def get_column_position(self, column: Column) -> Optional[ColumnPosition]:
        """Describe a column's position as accepted by ``add_column``.

        Returns:
            ``ColumnPosition.first()`` for the first column, None for the
            last one (append), the preceding column otherwise

        Raises:
            ValueError: If the column is not on this table
        """
        index = self._column_index(column.name)
        if index is None:
            raise ValueError(f"Table {self.name} has no column {column.name}")
        if index == 0:
            return ColumnPosition.first()
        if index + 1 == len(self.columns):
            return None
        return ColumnPosition.after_column(self.columns[index - 1].name)

    def drop_column(self, column: Column) -> MutationResult:
        """Drop a column and remove it from every key and index.

        Keys and indexes left without columns are removed. The last column
        of a table cannot be dropped.
        """
        index = self._column_index(column.name)
        if index is None:
            return self._reject(Rejection.UNKNOWN_COLUMN, column.name)
        if len(self.columns) == 1:
            return self._reject(Rejection.LAST_COLUMN, column.name)

        del self.columns[index]
        name = column.name

        for collection in (self.fulltext_indexes, self.spatial_indexes, self.indexes, self.unique_keys):
            for entity in list(collection):
                if entity.drop_column(name) and not entity.columns:
                    _remove_by_identity(collection, entity)
                    logger.debug(f"Table {self.name}: dropped {type(entity).__name__} {entity.name or ''} with column {name}")

        for key in list(self.foreign_keys):
            if key.drop_column(name) and not key.columns:
                _remove_by_identity(self.foreign_keys, key)
                logger.debug(f"Table {self.name}: dropped foreign key {key.name or ''} with column {name}")

        if self.primary_key is not None:
            if self.primary_key.drop_column(name) and not self.primary_key.columns:
                self.primary_key = None
                logger.debug(f"Table {self.name}: dropped primary key with column {name}")

        return MutationResult.ok()

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get_index_type(self, name: str) -> Optional[IndexType]:
        """Get which index collection stores an index with the given name."""
        for index_type in IndexType:
            if any(i.name == name for i in getattr(self, index_type.value)):
                return index_type
        return None

    def get_index(self, name: str) -> Optional[AnyIndex]:
        """Get unique key or index by name."""
        index_type = self.get_index_type(name)
        if index_type is None:
            return None
        return next(i for i in getattr(self, index_type.value) if i.name == name)

    def get_foreign_key(self, name: str) -> Optional[ForeignKey]:
        for key in self.foreign_keys:
            if key.name == name:
                return key
        return None

    def has_foreign_key(self, name: str) -> bool:
        return self.get_foreign_key(name) is not None

    def _name_taken(self, name: Optional[str]) -> bool:
        if not name:
            return False
        if self.get_index(name) is not None or self.has_foreign_key(name):
            return True
        return self.primary_key is not None and self.primary_key.name == name

    # -------------------------------------------------------------------------
    # Keys and Indexes
    # -------------------------------------------------------------------------

    def set_primary_key(self, primary_key: PrimaryKey) -> MutationResult:
        """Set the table's primary key, unless it already has one."""
        if self.primary_key is not None:
            return self._reject(Rejection.PRIMARY_KEY_EXISTS)
        if self._name_taken(primary_key.name):
            return self._reject(Rejection.DUPLICATE_NAME, primary_key.name)
        if not primary_key.has_all_columns_from_table(self):
            return self._reject(Rejection.MISSING_COLUMN, f"primary key {primary_key.column_names}")

        self.primary_key = primary_key
        return MutationResult.ok()

    def drop_primary_key(self) -> MutationResult:
        """Drop the primary key, unless one of its columns is autoincrement."""
        if self.primary_key is None:
            return self._reject(Rejection.NO_PRIMARY_KEY)
        if any(c.is_autoincrement for c in self.primary_key.get_columns_from_table(self)):
            return self._reject(Rejection.AUTOINCREMENT_PRIMARY_KEY)

        self.primary_key = None
        return MutationResult.ok()

    def push_foreign_key(self, foreign_key: ForeignKey) -> MutationResult:
        """Add a foreign key whose columns and target table resolve."""
        if self._name_taken(foreign_key.name):
            return self._reject(Rejection.DUPLICATE_NAME, foreign_key.name)
        if not foreign_key.has_all_columns_from_table(self):
            return self._reject(Rejection.MISSING_COLUMN, f"foreign key {foreign_key.column_names}")
        if self.database is None:
            return self._reject(Rejection.NO_DATABASE, f"foreign key {foreign_key.name or ''}")

        referenced = foreign_key.get_referenced_table(self.get_tables())
        if referenced is None:
            target = foreign_key.reference.table if foreign_key.reference else None
            return self._reject(Rejection.MISSING_REFERENCED_TABLE, str(target))
        if not foreign_key.has_matching_column_count():
            return self._reject(Rejection.COLUMN_COUNT_MISMATCH, f"foreign key {foreign_key.column_names}")
        if not foreign_key.has_all_columns_from_ref_table(referenced):
            return self._reject(Rejection.MISSING_REFERENCED_COLUMN, f"{referenced.name} {foreign_key.reference.column_names}")

        self.foreign_keys.append(foreign_key)
        return MutationResult.ok()

    def drop_foreign_key(self, foreign_key: ForeignKey) -> MutationResult:
        if not _remove_by_identity(self.foreign_keys, foreign_key):
            return self._reject(Rejection.UNKNOWN_ENTITY, f"foreign key {foreign_key.name or ''}")
        return MutationResult.ok()

    def _push_index(self, collection: List[Any], index: AnyIndex) -> MutationResult:
        if self._name_taken(index.name):
            return self._reject(Rejection.DUPLICATE_NAME, index.name)
        if not index.has_all_columns_from_table(self):
            return self._reject(Rejection.MISSING_COLUMN, f"{type(index).__name__} {index.column_names}")

        collection.append(index)
        return MutationResult.ok()

    def push_unique_key(self, unique_key: UniqueKey) -> MutationResult:
        return self._push_index(self.unique_keys, unique_key)

    def push_index(self, index: Index) -> MutationResult:
        return self._push_index(self.indexes, index)

    def push_fulltext_index(self, fulltext_index: FulltextIndex) -> MutationResult:
        return self._push_index(self.fulltext_indexes, fulltext_index)

    def push_spatial_index(self, spatial_index: SpatialIndex) -> MutationResult:
        return self._push_index(self.spatial_indexes, spatial_index)

    def drop_index(self, index: AnyIndex) -> MutationResult:
        """Remove a unique key or index from whichever collection holds it."""
        for index_type in IndexType:
            if _remove_by_identity(getattr(self, index_type.value), index):
                return MutationResult.ok()
        return self._reject(Rejection.UNKNOWN_ENTITY, f"index {index.name or ''}")


_DEFINITION_HANDLERS: Dict[DefinitionKind, Callable[[Table, Any], Any]] = {
    DefinitionKind.COLUMN: lambda table, json: table.add_column(Column.from_def(json)),
    DefinitionKind.PRIMARY_KEY: lambda table, json: table.set_primary_key(PrimaryKey.from_def(json)),
    DefinitionKind.FOREIGN_KEY: lambda table, json: table.push_foreign_key(ForeignKey.from_def(json)),
    DefinitionKind.UNIQUE_KEY: lambda table, json: table.push_unique_key(UniqueKey.from_def(json)),
    DefinitionKind.INDEX: lambda table, json: table.push_index(Index.from_def(json)),
    DefinitionKind.FULLTEXT_INDEX: lambda table, json: table.push_fulltext_index(FulltextIndex.from_def(json)),
    DefinitionKind.SPATIAL_INDEX: lambda table, json: table.push_spatial_index(SpatialIndex.from_def(json)),
    DefinitionKind.CHECK: Table._ignore_check,
}


__all__ = ["Table", "ColumnPosition", "IndexType"]
