# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from taskboard.domain.todos.entities import (
    CATEGORY_MAX_LENGTH,
    DEFAULT_PAGE_SIZE,
    DESCRIPTION_MAX_LENGTH,
    MAX_PAGE,
    MAX_PAGE_SIZE,
    TITLE_MAX_LENGTH,
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
from taskboard.shared.errors.validation_types import ValidationErrorType

_NOT_NULLABLE_FIELDS = ("title", "completed", "priority")


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        validate_by_name=True,
        validate_by_alias=True,
        extra="ignore",
    )


def _date_only(value: Any) -> Any:
    # accept full ISO datetimes from clients and keep the calendar date
    if isinstance(value, str) and "T" in value:
        return value.split("T", 1)[0]
    if isinstance(value, datetime):
        return value.date()
    return value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _validate_title(value: str) -> str:
    if not value.strip():
        raise PydanticCustomError(
            ValidationErrorType.TITLE_BLANK,
            "Title is required",
            {},
        )
    return value


class TodoCreateDTO(_CamelModel):
    title: str = Field(max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    completed: bool = False
    priority: Priority = Priority.MEDIUM
    category: str | None = Field(None, max_length=CATEGORY_MAX_LENGTH)
    due_date: date | None = None

    @field_validator("priority", mode="before")
    @classmethod
    def _normalize_priority(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        return _validate_title(value)

    @field_validator("due_date", mode="before")
    @classmethod
    def _coerce_due_date(cls, value: Any) -> Any:
        return _date_only(_blank_to_none(value))

    def to_draft(self) -> TodoDraft:
        return TodoDraft(
            title=self.title,
            description=self.description,
            completed=self.completed,
            priority=self.priority,
            category=self.category,
            due_date=self.due_date,
        )


class TodoUpdateDTO(_CamelModel):
    """Partial update; ``model_fields_set`` tells omitted fields from explicit nulls."""

    title: str | None = Field(None, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    completed: bool | None = None
    priority: Priority | None = None
    category: str | None = Field(None, max_length=CATEGORY_MAX_LENGTH)
    due_date: date | None = None

    @field_validator("priority", mode="before")
    @classmethod
    def _normalize_priority(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str | None) -> str | None:
        return None if value is None else _validate_title(value)

    @field_validator("due_date", mode="before")
    @classmethod
    def _coerce_due_date(cls, value: Any) -> Any:
        return _date_only(_blank_to_none(value))

    @model_validator(mode="after")
    def _reject_null_required(self) -> "TodoUpdateDTO":
        for name in _NOT_NULLABLE_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise PydanticCustomError(
                    ValidationErrorType.NOT_NULLABLE,
                    "{field} cannot be null",
                    {"field": name},
                )
        return self

    def to_patch(self) -> TodoPatch:
        return TodoPatch(**{name: getattr(self, name) for name in self.model_fields_set})


class TodoListQueryDTO(_CamelModel):
    page: int = Field(1, ge=1, le=MAX_PAGE)
    limit: int = Field(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    search: str | None = None
    completed: bool | None = None
    priority: Priority | None = None
    category: str | None = None
    due_before: date | None = None
    due_after: date | None = None
    sort_by: TodoSortField = TodoSortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC

    @field_validator("search", "category", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> Any:
        value = _blank_to_none(value)
        return value.strip() if isinstance(value, str) else value

    @field_validator("completed", mode="before")
    @classmethod
    def _parse_completed(cls, value: Any) -> bool | None:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered == "true":
                return True
            if lowered == "false":
                return False
        # anything else means "both states"
        return None

    @field_validator("priority", mode="before")
    @classmethod
    def _parse_priority(cls, value: Any) -> Priority | None:
        # unknown priorities are ignored rather than rejected
        return Priority.parse(value)

    @field_validator("due_before", "due_after", mode="before")
    @classmethod
    def _coerce_dates(cls, value: Any) -> Any:
        return _date_only(_blank_to_none(value))

    @field_validator("sort_order", mode="before")
    @classmethod
    def _normalize_order(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    def to_query(self) -> TodoQuery:
        return TodoQuery(
            search=self.search,
            completed=self.completed,
            priority=self.priority,
            category=self.category,
            due_before=self.due_before,
            due_after=self.due_after,
            sort_by=self.sort_by,
            sort_order=self.sort_order,
            page=self.page,
            limit=self.limit,
        )


class TodoDTO(_CamelModel):
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

    @classmethod
    def from_entity(cls, todo: Todo) -> "TodoDTO":
        return cls(
            id=todo.id,
            user_id=todo.user_id,
            title=todo.title,
            description=todo.description,
            completed=todo.completed,
            priority=todo.priority,
            category=todo.category,
            due_date=todo.due_date,
            created_at=todo.created_at,
            updated_at=todo.updated_at,
        )

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class PaginationDTO(_CamelModel):
    page: int
    limit: int
    total_count: int
    total_pages: int
    has_next: bool
    has_prev: bool


class TodoListDTO(BaseModel):
    data: list[TodoDTO]
    pagination: PaginationDTO

    @classmethod
    def from_page(cls, page: TodoPage) -> "TodoListDTO":
        return cls(
            data=[TodoDTO.from_entity(todo) for todo in page.items],
            pagination=PaginationDTO(
                page=page.page,
                limit=page.limit,
                total_count=page.total_count,
                total_pages=page.total_pages,
                has_next=page.has_next,
                has_prev=page.has_prev,
            ),
        )

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class TodoStatsDTO(_CamelModel):
    total: int
    completed: int
    pending: int
    overdue: int
    due_today: int
    due_this_week: int
    completion_rate: float
    priority_breakdown: dict[str, int]

    @classmethod
    def from_stats(cls, stats: TodoStats) -> "TodoStatsDTO":
        return cls(
            total=stats.total,
            completed=stats.completed,
            pending=stats.pending,
            overdue=stats.overdue,
            due_today=stats.due_today,
            due_this_week=stats.due_this_week,
            completion_rate=stats.completion_rate,
            priority_breakdown={
                priority.value: stats.pending_by_priority.get(priority, 0)
                for priority in Priority
            },
        )

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
