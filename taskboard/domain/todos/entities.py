# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Todo entities and the read/write contracts around them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from datetime import date, datetime
from enum import StrEnum
from typing import Any, Final

from taskboard.domain.exceptions import InvariantViolation

TITLE_MAX_LENGTH: Final = 200
DESCRIPTION_MAX_LENGTH: Final = 1000
CATEGORY_MAX_LENGTH: Final = 50
DEFAULT_PAGE_SIZE: Final = 5
MAX_PAGE_SIZE: Final = 100
# ids and offsets are bound as signed 64-bit integers
MAX_ROW_ID: Final = 2**63 - 1
MAX_PAGE: Final = MAX_ROW_ID // MAX_PAGE_SIZE


class Priority(StrEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANKS[self]

    @classmethod
    def parse(cls, raw: object) -> Priority | None:
        """Case-insensitive lookup; unknown values yield ``None`` instead of failing."""

        if isinstance(raw, Priority):
            return raw
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw.strip().upper())
        except ValueError:
            return None


_PRIORITY_RANKS: Final = {
    Priority.LOW: 0,
    Priority.MEDIUM: 1,
    Priority.HIGH: 2,
    Priority.URGENT: 3,
}


class TodoSortField(StrEnum):
    CREATED_AT = "createdAt"
    DUE_DATE = "dueDate"
    PRIORITY = "priority"
    TITLE = "title"


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


class _Unset:
    """Marker for a patch field that was not supplied."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _Unset()


@dataclass(slots=True, frozen=True)
class Todo:

    id: int
    user_id: int
    title: str
    description: str | None
    completed: bool
    priority: Priority
    category: str | None
    due_date: date | None
    created_at: datetime
    updated_at: datetime


def _check_length(name: str, value: str | None, limit: int) -> None:
    if value is not None and len(value) > limit:
        raise InvariantViolation(f"must be at most {limit} characters", field=name)


def _check_title(value: str) -> None:
    if not value or not value.strip():
        raise InvariantViolation("title is required", field="title")
    _check_length("title", value, TITLE_MAX_LENGTH)


@dataclass(slots=True, frozen=True)
class TodoDraft:
    """Fields supplied by the owner when creating a todo."""

    title: str
    description: str | None = None
    completed: bool = False
    priority: Priority = Priority.MEDIUM
    category: str | None = None
    due_date: date | None = None

    def __post_init__(self) -> None:
        _check_title(self.title)
        _check_length("description", self.description, DESCRIPTION_MAX_LENGTH)
        _check_length("category", self.category, CATEGORY_MAX_LENGTH)


_NOT_NULLABLE: Final = frozenset({"title", "completed", "priority"})


@dataclass(slots=True, frozen=True)
class TodoPatch:
    """Partial update where every field is absent (``UNSET``), ``None`` or a value.

    ``None`` clears a nullable field; ``UNSET`` leaves the stored value alone.
    """

    title: str | _Unset = UNSET
    description: str | None | _Unset = UNSET
    completed: bool | _Unset = UNSET
    priority: Priority | _Unset = UNSET
    category: str | None | _Unset = UNSET
    due_date: date | None | _Unset = UNSET

    def __post_init__(self) -> None:
        for name in _NOT_NULLABLE:
            if getattr(self, name) is None:
                raise InvariantViolation("cannot be null", field=name)
        if isinstance(self.title, str):
            _check_title(self.title)
        if isinstance(self.description, str):
            _check_length("description", self.description, DESCRIPTION_MAX_LENGTH)
        if isinstance(self.category, str):
            _check_length("category", self.category, CATEGORY_MAX_LENGTH)

    def changes(self) -> dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }

    def is_empty(self) -> bool:
        return not self.changes()


@dataclass(slots=True, frozen=True)
class TodoQuery:
    """Filter, sort and page parameters for listing an owner's todos."""

    search: str | None = None
    completed: bool | None = None
    priority: Priority | None = None
    category: str | None = None
    due_before: date | None = None
    due_after: date | None = None
    sort_by: TodoSortField = TodoSortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if not 1 <= self.page <= MAX_PAGE:
            raise InvariantViolation(f"page must be between 1 and {MAX_PAGE}", field="page")
        if not 1 <= self.limit <= MAX_PAGE_SIZE:
            raise InvariantViolation(
                f"limit must be between 1 and {MAX_PAGE_SIZE}", field="limit"
            )
        if (
            self.due_before is not None
            and self.due_after is not None
            and self.due_after > self.due_before
        ):
            raise InvariantViolation("dueAfter must be <= dueBefore", field="dueAfter")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(slots=True, frozen=True)
class TodoPage:
    items: list[Todo]
    total_count: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.limit)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1


@dataclass(slots=True, frozen=True)
class TodoStats:
    total: int
    completed: int
    overdue: int
    due_today: int
    due_this_week: int
    pending_by_priority: dict[Priority, int] = field(default_factory=dict)

    @property
    def pending(self) -> int:
        return self.total - self.completed

    @property
    def completion_rate(self) -> float:
        if self.total == 0:
            return 0.0
        return round(self.completed / self.total * 100, 1)
