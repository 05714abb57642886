"""DDL Schema Types - Declared column data types.

A ``Datatype`` records what a column definition declared: the type name
and whichever size, precision, sign and character-set attributes the
statement spelled out. Attributes that were not declared are not
serialized.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ddlschema_core.ast import node_def


@dataclass
class Datatype:
    """Declared data type of a column."""

    datatype: str
    width: Optional[int] = None
    digits: Optional[int] = None
    decimals: Optional[int] = None
    length: Optional[int] = None
    fractional: Optional[int] = None
    unsigned: Optional[bool] = None
    zerofill: Optional[bool] = None
    values: Optional[List[str]] = None
    charset: Optional[str] = None
    collation: Optional[str] = None
    extras: Dict[str, Any] = field(default_factory=dict)

    _KEYS = (
        "width", "digits", "decimals", "length", "fractional",
        "unsigned", "zerofill", "values", "charset", "collation",
    )

    @classmethod
    def from_def(cls, node: Mapping[str, Any]) -> Datatype:
        """Create a datatype from an ``O_DATATYPE`` node.

        Args:
            node: Tagged datatype node

        Returns:
            Parsed datatype
        """
        payload = dict(node_def(node) or {})
        name = payload.pop("datatype", None)
        if not name:
            raise ValueError(f"Datatype node without a type name: {node!r}")

        kwargs = {key: payload.pop(key) for key in cls._KEYS if key in payload}
        if kwargs.get("values") is not None:
            kwargs["values"] = list(kwargs["values"])
        return cls(datatype=str(name).lower(), extras=payload, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        json: Dict[str, Any] = {"datatype": self.datatype}
        for key in self._KEYS:
            value = getattr(self, key)
            if value is not None:
                json[key] = list(value) if key == "values" else value
        json.update(self.extras)
        return json

    def clone(self) -> Datatype:
        return copy.deepcopy(self)


__all__ = ["Datatype"]
