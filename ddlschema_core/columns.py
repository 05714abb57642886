"""DDL Schema Columns - Column definitions and inline constraint extraction.

A column definition may declare ``PRIMARY KEY``, ``UNIQUE`` or a
``REFERENCES`` clause inline. Those declarations are kept on the column
only until the column is inserted into a table, where
``extract_constraints`` turns them into table-level keys and the column is
cleared of them.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Mapping, Optional

from ddlschema_core.ast import merged_items
from ddlschema_core.keys import ForeignKey, PrimaryKey, Reference, UniqueKey
from ddlschema_core.types import Datatype

logger = logging.getLogger(__name__)


@dataclass
class ColumnOptions:
    """Per-column options that stay on the column."""

    nullable: Optional[bool] = None
    default: Any = None
    autoincrement: Optional[bool] = None
    comment: Optional[str] = None
    collation: Optional[str] = None
    invisible: Optional[bool] = None
    format: Optional[str] = None
    storage: Optional[str] = None
    on_update: Optional[str] = None

    _KEYS: ClassVar[Dict[str, str]] = {
        "nullable": "nullable",
        "default": "default",
        "autoincrement": "autoincrement",
        "comment": "comment",
        "collation": "collation",
        "invisible": "invisible",
        "format": "format",
        "storage": "storage",
        "onUpdate": "on_update",
    }

    def to_dict(self) -> Dict[str, Any]:
        return {
            key: getattr(self, attr)
            for key, attr in self._KEYS.items()
            if getattr(self, attr) is not None
        }


@dataclass
class InlineDeclarations:
    """Constraints declared inline on a column definition."""

    primary: bool = False
    unique: bool = False
    reference: Optional[Reference] = None

    def is_empty(self) -> bool:
        return not (self.primary or self.unique or self.reference is not None)


@dataclass
class Column:
    """Column definition.

    Defines a column in a table with its declared type and options.
    """

    name: str
    type: Datatype
    options: ColumnOptions = field(default_factory=ColumnOptions)
    inline: InlineDeclarations = field(default_factory=InlineDeclarations)

    @classmethod
    def from_def(cls, json: Mapping[str, Any]) -> Column:
        """Create a column from a column create-definition payload.

        Args:
            json: Mapping with ``name`` and a ``def`` holding ``datatype``
                and the optional ``columnDefinition`` list

        Returns:
            New column, still carrying its inline declarations
        """
        body = json.get("def") or {}
        column = cls(name=json["name"], type=Datatype.from_def(body["datatype"]))

        for key, value in merged_items(body.get("columnDefinition") or []):
            if key == "primary":
                column.inline.primary = bool(value)
            elif key == "unique":
                column.inline.unique = bool(value)
            elif key == "reference":
                column.inline.reference = Reference.from_def(value)
            elif key in ColumnOptions._KEYS:
                setattr(column.options, ColumnOptions._KEYS[key], value)
            else:
                logger.debug(f"Ignoring unknown option {key!r} on column {column.name}")

        return column

    @property
    def is_autoincrement(self) -> bool:
        return bool(self.options.autoincrement)

    def to_dict(self) -> Dict[str, Any]:
        json: Dict[str, Any] = {"name": self.name, "type": self.type.to_dict()}
        options = self.options.to_dict()
        if options:
            json["options"] = options
        return json

    def clone(self) -> Column:
        return copy.deepcopy(self)


@dataclass
class ExtractedConstraints:
    """Table-level keys produced from a column's inline declarations."""

    primary_key: Optional[PrimaryKey] = None
    foreign_key: Optional[ForeignKey] = None
    unique_key: Optional[UniqueKey] = None


def extract_constraints(column: Column) -> ExtractedConstraints:
    """Build table-level keys from a column's inline declarations.

    The column itself is not modified.
    """
    inline = column.inline
    extracted = ExtractedConstraints()
    if inline.primary:
        extracted.primary_key = PrimaryKey.on_column(column.name)
    if inline.reference is not None:
        extracted.foreign_key = ForeignKey.on_column(column.name, copy.deepcopy(inline.reference))
    if inline.unique:
        extracted.unique_key = UniqueKey.on_column(column.name)
    return extracted


__all__ = [
    "ColumnOptions",
    "InlineDeclarations",
    "Column",
    "ExtractedConstraints",
    "extract_constraints",
]
