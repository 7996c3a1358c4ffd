# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import InvariantViolation, InvariantViolationError
from .todos.entities import (
    UNSET,
    Priority,
    SortOrder,
    Todo,
    TodoDraft,
    TodoPage,
    TodoPatch,
    TodoQuery,
    TodoSortField,
    TodoStats,
)
from .users.entities import IssuedToken, TokenClaims, User

__all__ = [
    "UNSET",
    "InvariantViolation",
    "InvariantViolationError",
    "IssuedToken",
    "Priority",
    "SortOrder",
    "Todo",
    "TodoDraft",
    "TodoPage",
    "TodoPatch",
    "TodoQuery",
    "TodoSortField",
    "TodoStats",
    "TokenClaims",
    "User",
]
