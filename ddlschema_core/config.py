"""DDL Schema Config - Engine behaviour settings.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, MutableMapping

import yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "DDLSCHEMA_"
_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class SchemaConfig:
    """Configuration for table construction and mutation."""

    # Raise SchemaIntegrityError instead of silently rejecting.
    strict: bool = False
    rejection_log_level: str = "DEBUG"

    def __post_init__(self):
        level = logging.getLevelName(self.rejection_log_level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {self.rejection_log_level}")
        self.rejection_log_level = self.rejection_log_level.upper()

    @property
    def rejection_level(self) -> int:
        """Numeric logging level used for rejections."""
        return logging.getLevelName(self.rejection_log_level)

    @classmethod
    def from_dict(cls, data: MutableMapping[str, Any]) -> SchemaConfig:
        """Build configuration from a mapping, refusing unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown schema config keys: {', '.join(unknown)}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Path) -> SchemaConfig:
        """Load configuration from YAML file."""
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, MutableMapping):
            raise ValueError("Schema config must be a mapping at the top level")

        config = cls.from_dict(data)
        logger.debug(f"Loaded schema config from {path}: {config}")
        return config

    @classmethod
    def from_env(cls) -> SchemaConfig:
        """Load configuration from environment variables."""
        kwargs: Dict[str, Any] = {}
        strict = os.getenv(f"{ENV_PREFIX}STRICT")
        if strict is not None:
            kwargs["strict"] = strict.strip().lower() in _TRUTHY
        level = os.getenv(f"{ENV_PREFIX}REJECTION_LOG_LEVEL")
        if level:
            kwargs["rejection_log_level"] = level
        return cls(**kwargs)


__all__ = ["SchemaConfig", "ENV_PREFIX"]
