"""DDL Schema AST - Tag vocabulary for parsed table definitions.

The grammar hands the engine plain nested mappings. Every node carries an
``id`` tag naming what it is and a ``def`` payload whose shape depends on
the tag:

    {"id": "P_CREATE_TABLE_COMMON", "def": {"table": ..., "columnsDef": ...}}
    {"id": "O_CREATE_TABLE_CREATE_DEFINITION", "def": {"column": {...}}}

Statement tags and definition kinds are closed enumerations so that
dispatch over them is exhaustive.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterator, List, Mapping, Optional, Tuple

from ddlschema_core.errors import UnknownDefinitionError


class StatementId(Enum):
    """Tags of the statement-level nodes the engine consumes."""

    CREATE_TABLE_COMMON = "P_CREATE_TABLE_COMMON"
    CREATE_TABLE_LIKE = "P_CREATE_TABLE_LIKE"

    @classmethod
    def of(cls, node: Mapping[str, Any]) -> Optional[StatementId]:
        """Return the statement tag of a node, or None if unrecognized."""
        try:
            return cls(node.get("id"))
        except ValueError:
            return None


class DefinitionKind(Enum):
    """Kinds of create-definition fragments inside a table definition.

    The value is the key under which the fragment's payload is stored in
    its ``def`` mapping.
    """

    COLUMN = "column"
    PRIMARY_KEY = "primaryKey"
    FOREIGN_KEY = "foreignKey"
    UNIQUE_KEY = "uniqueKey"
    INDEX = "index"
    FULLTEXT_INDEX = "fulltextIndex"
    SPATIAL_INDEX = "spatialIndex"
    CHECK = "check"

    @classmethod
    def of(cls, fragment: Mapping[str, Any]) -> Tuple[DefinitionKind, Any]:
        """Resolve a create-definition fragment to its kind and payload.

        Args:
            fragment: An ``O_CREATE_TABLE_CREATE_DEFINITION`` node

        Returns:
            Tuple of (kind, payload)

        Raises:
            UnknownDefinitionError: If no known kind is present
        """
        body = node_def(fragment) or {}
        for kind in cls:
            payload = body.get(kind.value)
            if payload is not None:
                return kind, payload
        raise UnknownDefinitionError(f"Unknown create definition: {sorted(body)}")


def node_def(node: Optional[Mapping[str, Any]]) -> Any:
    """Return the ``def`` payload of a node (None-safe)."""
    if node is None:
        return None
    return node.get("def")


def node_list(node: Optional[Mapping[str, Any]]) -> List[Any]:
    """Return the ``def`` payload of a list-carrying node, or an empty list."""
    payload = node_def(node)
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise ValueError(f"Expected list payload in node {node.get('id')!r}")
    return payload


def merged_items(node: Optional[Mapping[str, Any]]) -> Iterator[Tuple[str, Any]]:
    """Iterate key/value pairs of a list of single-setting nodes.

    Column definitions and table options arrive as a list of nodes, each
    carrying one or more settings in its ``def`` mapping. A plain list of
    such nodes (without the enclosing tagged node) is accepted too.
    """
    items = node if isinstance(node, list) else node_list(node)
    for item in items:
        for key, value in (node_def(item) or {}).items():
            yield key, value


__all__ = [
    "StatementId",
    "DefinitionKind",
    "node_def",
    "node_list",
    "merged_items",
]
