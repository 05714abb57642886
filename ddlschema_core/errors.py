"""DDL Schema Errors - Rejection codes, mutation results and exceptions.

Two regimes coexist:

- Integrity violations found while building or mutating a table are
  rejections. The model is left unchanged and the operation returns a
  falsy ``MutationResult`` carrying a ``Rejection`` code. Under a strict
  ``SchemaConfig`` the same rejection is raised as ``SchemaIntegrityError``.
- Contract violations by the caller (an unrecognized statement tag on the
  CREATE TABLE LIKE path, an unknown definition fragment) always raise.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Rejection(Enum):
    """Reason a mutation was refused."""

    DUPLICATE_COLUMN = "duplicate_column"
    UNKNOWN_COLUMN = "unknown_column"
    UNKNOWN_POSITION = "unknown_position"
    LAST_COLUMN = "last_column"
    DUPLICATE_NAME = "duplicate_name"
    MISSING_COLUMN = "missing_column"
    NO_DATABASE = "no_database"
    MISSING_REFERENCED_TABLE = "missing_referenced_table"
    MISSING_REFERENCED_COLUMN = "missing_referenced_column"
    COLUMN_COUNT_MISMATCH = "column_count_mismatch"
    PRIMARY_KEY_EXISTS = "primary_key_exists"
    NO_PRIMARY_KEY = "no_primary_key"
    AUTOINCREMENT_PRIMARY_KEY = "autoincrement_primary_key"
    UNKNOWN_ENTITY = "unknown_entity"


@dataclass(frozen=True)
class MutationResult:
    """Outcome of a table mutation. Truthy when the mutation was applied."""

    applied: bool
    reason: Optional[Rejection] = None

    @classmethod
    def ok(cls) -> MutationResult:
        return cls(applied=True)

    @classmethod
    def rejected(cls, reason: Rejection) -> MutationResult:
        return cls(applied=False, reason=reason)

    def __bool__(self) -> bool:
        return self.applied


class SchemaError(Exception):
    """Base class for schema engine errors."""


class UnknownStatementError(SchemaError, TypeError):
    """Raised when a statement node carries a tag the operation cannot build from."""


class UnknownDefinitionError(SchemaError, TypeError):
    """Raised when a create-definition fragment is of no known kind."""


class SchemaIntegrityError(SchemaError):
    """Raised in strict mode instead of silently rejecting a mutation."""

    def __init__(self, table: Optional[str], reason: Rejection, detail: str = ""):
        self.table = table
        self.reason = reason
        self.detail = detail
        message = f"Table {table!r}: {reason.value}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


__all__ = [
    "Rejection",
    "MutationResult",
    "SchemaError",
    "UnknownStatementError",
    "UnknownDefinitionError",
    "SchemaIntegrityError",
]
