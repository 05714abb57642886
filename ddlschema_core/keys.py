"""DDL Schema Keys - Primary, unique and foreign keys, and indexes.

Every key or index references columns of its table by name through an
ordered list of ``IndexColumn``. The table validates those references when
the entity is pushed and asks the entity to forget a column when that
column is dropped; an entity left without columns is removed by the table.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Dict, List, Mapping, Optional

if TYPE_CHECKING:
    from ddlschema_core.columns import Column
    from ddlschema_core.table import Table


# =============================================================================
# Key Parts
# =============================================================================


@dataclass
class IndexColumn:
    """A column referenced by a key, with optional prefix length and order."""

    column: str
    length: Optional[int] = None
    sort: Optional[str] = None

    @classmethod
    def from_def(cls, json: Any) -> IndexColumn:
        if isinstance(json, str):
            return cls(column=json)
        sort = json.get("sort")
        return cls(
            column=json["column"],
            length=json.get("length"),
            sort=sort.lower() if sort else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        json: Dict[str, Any] = {"column": self.column}
        if self.length is not None:
            json["length"] = self.length
        if self.sort is not None:
            json["sort"] = self.sort
        return json


@dataclass
class IndexOptions:
    """Options trailing an index definition."""

    key_block_size: Optional[int] = None
    index_type: Optional[str] = None
    parser: Optional[str] = None
    comment: Optional[str] = None
    visible: Optional[bool] = None
    algorithm: Optional[str] = None
    lock: Optional[str] = None

    _KEYS: ClassVar[Dict[str, str]] = {
        "keyBlockSize": "key_block_size",
        "indexType": "index_type",
        "parser": "parser",
        "comment": "comment",
        "visible": "visible",
        "algorithm": "algorithm",
        "lock": "lock",
    }

    @classmethod
    def from_def(cls, json: Mapping[str, Any]) -> IndexOptions:
        return cls(**{attr: json[key] for key, attr in cls._KEYS.items() if key in json})

    def to_dict(self) -> Dict[str, Any]:
        return {
            key: getattr(self, attr)
            for key, attr in self._KEYS.items()
            if getattr(self, attr) is not None
        }

    def is_empty(self) -> bool:
        return not self.to_dict()


def _columns_from_def(json: Mapping[str, Any]) -> List[IndexColumn]:
    return [IndexColumn.from_def(c) for c in json.get("columns") or []]


# =============================================================================
# Keys and Indexes
# =============================================================================


@dataclass
class Key:
    """Base for entities holding an ordered list of column references."""

    columns: List[IndexColumn] = field(default_factory=list)
    name: Optional[str] = None
    index_type: Optional[str] = None
    options: Optional[IndexOptions] = None

    @classmethod
    def from_def(cls, json: Mapping[str, Any]):
        """Create the entity from its create-definition payload.

        Args:
            json: Payload found under the definition kind key

        Returns:
            New key or index
        """
        options = json.get("options")
        return cls(
            columns=_columns_from_def(json),
            name=json.get("name"),
            index_type=json.get("indexType"),
            options=IndexOptions.from_def(options) if options else None,
        )

    @classmethod
    def on_column(cls, column_name: str):
        """Create a single-column entity, as declared inline on a column."""
        return cls(columns=[IndexColumn(column_name)])

    @property
    def column_names(self) -> List[str]:
        return [c.column for c in self.columns]

    def has_column(self, name: str) -> bool:
        return name in self.column_names

    def has_all_columns_from_table(self, table: Table) -> bool:
        """Whether every referenced column exists on the given table."""
        return bool(self.columns) and all(table.get_column(name) for name in self.column_names)

    def get_columns_from_table(self, table: Table) -> List[Column]:
        """Return the table's columns referenced by this entity, skipping missing ones."""
        columns = [table.get_column(name) for name in self.column_names]
        return [c for c in columns if c is not None]

    def drop_column(self, name: str) -> bool:
        """Forget a column. Returns whether the column was referenced."""
        kept = [c for c in self.columns if c.column != name]
        dropped = len(kept) != len(self.columns)
        self.columns = kept
        return dropped

    def to_dict(self) -> Dict[str, Any]:
        json: Dict[str, Any] = {}
        if self.name:
            json["name"] = self.name
        json["columns"] = [c.to_dict() for c in self.columns]
        if self.index_type:
            json["indexType"] = self.index_type
        if self.options is not None and not self.options.is_empty():
            json["options"] = self.options.to_dict()
        return json

    def clone(self):
        return copy.deepcopy(self)


class PrimaryKey(Key):
    """Primary key constraint."""


class UniqueKey(Key):
    """Unique key constraint."""


class Index(Key):
    """Plain (non-unique) index."""


class FulltextIndex(Key):
    """Fulltext index."""


class SpatialIndex(Key):
    """Spatial index."""


# =============================================================================
# Foreign Keys
# =============================================================================


class ReferentialAction(Enum):
    """Referential action for foreign keys."""

    CASCADE = "cascade"
    RESTRICT = "restrict"
    SET_NULL = "set null"
    SET_DEFAULT = "set default"
    NO_ACTION = "no action"

    @classmethod
    def parse(cls, value: str) -> ReferentialAction:
        normalized = " ".join(str(value).replace("_", " ").lower().split())
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unknown referential action: {value!r}") from None


@dataclass
class ReferentialTrigger:
    """An ``ON DELETE`` / ``ON UPDATE`` clause."""

    trigger: str
    action: ReferentialAction

    @classmethod
    def from_def(cls, json: Mapping[str, Any]) -> ReferentialTrigger:
        trigger = str(json["trigger"]).lower()
        if trigger not in ("delete", "update"):
            raise ValueError(f"Unknown referential trigger: {json['trigger']!r}")
        return cls(trigger=trigger, action=ReferentialAction.parse(json["action"]))

    def to_dict(self) -> Dict[str, Any]:
        return {"trigger": self.trigger, "action": self.action.value}


@dataclass
class Reference:
    """Target side of a foreign key."""

    table: str
    columns: List[IndexColumn] = field(default_factory=list)
    match: Optional[str] = None
    on: List[ReferentialTrigger] = field(default_factory=list)

    @classmethod
    def from_def(cls, json: Mapping[str, Any]) -> Reference:
        match = json.get("match")
        return cls(
            table=json["table"],
            columns=_columns_from_def(json),
            match=match.lower() if match else None,
            on=[ReferentialTrigger.from_def(t) for t in json.get("on") or []],
        )

    @property
    def column_names(self) -> List[str]:
        return [c.column for c in self.columns]

    def action_for(self, trigger: str) -> Optional[ReferentialAction]:
        for clause in self.on:
            if clause.trigger == trigger:
                return clause.action
        return None

    def to_dict(self) -> Dict[str, Any]:
        json: Dict[str, Any] = {
            "table": self.table,
            "columns": [c.to_dict() for c in self.columns],
        }
        if self.match:
            json["match"] = self.match
        if self.on:
            json["on"] = [t.to_dict() for t in self.on]
        return json


@dataclass
class ForeignKey(Key):
    """Foreign key constraint."""

    reference: Optional[Reference] = None

    @classmethod
    def from_def(cls, json: Mapping[str, Any]) -> ForeignKey:
        return cls(
            columns=_columns_from_def(json),
            name=json.get("name"),
            reference=Reference.from_def(json["reference"]),
        )

    @classmethod
    def on_column(cls, column_name: str, reference: Optional[Reference] = None) -> ForeignKey:
        return cls(columns=[IndexColumn(column_name)], reference=reference)

    def get_referenced_table(self, tables: List[Table]) -> Optional[Table]:
        """Find the referenced table among the given tables."""
        if self.reference is None:
            return None
        for table in tables:
            if table.name == self.reference.table:
                return table
        return None

    def has_matching_column_count(self) -> bool:
        return (
            self.reference is not None
            and bool(self.columns)
            and len(self.columns) == len(self.reference.columns)
        )

    def has_all_columns_from_ref_table(self, table: Table) -> bool:
        """Whether every target column exists on the referenced table."""
        if self.reference is None or not self.reference.columns:
            return False
        return all(table.get_column(name) for name in self.reference.column_names)

    def drop_column(self, name: str) -> bool:
        """Forget a local column together with the target column paired to it."""
        if self.reference is None or len(self.reference.columns) != len(self.columns):
            return super().drop_column(name)

        pairs = [
            (local, target)
            for local, target in zip(self.columns, self.reference.columns)
            if local.column != name
        ]
        if len(pairs) == len(self.columns):
            return False
        self.columns = [local for local, _ in pairs]
        self.reference.columns = [target for _, target in pairs]
        return True

    def to_dict(self) -> Dict[str, Any]:
        json: Dict[str, Any] = {}
        if self.name:
            json["name"] = self.name
        json["columns"] = [c.to_dict() for c in self.columns]
        if self.reference is not None:
            json["reference"] = self.reference.to_dict()
        return json


__all__ = [
    "IndexColumn",
    "IndexOptions",
    "Key",
    "PrimaryKey",
    "UniqueKey",
    "Index",
    "FulltextIndex",
    "SpatialIndex",
    "ReferentialAction",
    "ReferentialTrigger",
    "Reference",
    "ForeignKey",
]
