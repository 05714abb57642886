"""DDL Schema Options - Table-level options.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional

from ddlschema_core.ast import merged_items

logger = logging.getLogger(__name__)


@dataclass
class TableOptions:
    """Engine, charset, comment and similar table settings."""

    autoincrement: Optional[int] = None
    avg_row_length: Optional[int] = None
    charset: Optional[str] = None
    checksum: Optional[int] = None
    collation: Optional[str] = None
    comment: Optional[str] = None
    compression: Optional[str] = None
    connection: Optional[str] = None
    data_directory: Optional[str] = None
    index_directory: Optional[str] = None
    delay_key_write: Optional[int] = None
    encryption: Optional[str] = None
    engine: Optional[str] = None
    insert_method: Optional[str] = None
    key_block_size: Optional[int] = None
    max_rows: Optional[int] = None
    min_rows: Optional[int] = None
    pack_keys: Optional[str] = None
    row_format: Optional[str] = None
    stats_auto_recalc: Optional[str] = None
    stats_persistent: Optional[str] = None
    stats_sample_pages: Optional[int] = None
    tablespace: Optional[str] = None
    union: Optional[list] = None

    _KEYS: ClassVar[Dict[str, str]] = {
        "autoincrement": "autoincrement",
        "avgRowLength": "avg_row_length",
        "charset": "charset",
        "checksum": "checksum",
        "collation": "collation",
        "comment": "comment",
        "compression": "compression",
        "connection": "connection",
        "dataDirectory": "data_directory",
        "indexDirectory": "index_directory",
        "delayKeyWrite": "delay_key_write",
        "encryption": "encryption",
        "engine": "engine",
        "insertMethod": "insert_method",
        "keyBlockSize": "key_block_size",
        "maxRows": "max_rows",
        "minRows": "min_rows",
        "packKeys": "pack_keys",
        "rowFormat": "row_format",
        "statsAutoRecalc": "stats_auto_recalc",
        "statsPersistent": "stats_persistent",
        "statsSamplePages": "stats_sample_pages",
        "tablespace": "tablespace",
        "union": "union",
    }

    @classmethod
    def from_def(cls, node: Any) -> TableOptions:
        """Create table options from a ``P_CREATE_TABLE_OPTIONS`` node.

        Later settings override earlier ones, as in the statement itself.
        """
        options = cls()
        for key, value in merged_items(node):
            attr = cls._KEYS.get(key)
            if attr is None:
                logger.debug(f"Ignoring unknown table option {key!r}")
                continue
            setattr(options, attr, value)
        return options

    def to_dict(self) -> Dict[str, Any]:
        return {
            key: copy.deepcopy(getattr(self, attr))
            for key, attr in self._KEYS.items()
            if getattr(self, attr) is not None
        }

    def is_empty(self) -> bool:
        return not self.to_dict()

    def clone(self) -> TableOptions:
        return copy.deepcopy(self)


__all__ = ["TableOptions"]
