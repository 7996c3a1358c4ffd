# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Translate a ``TodoQuery`` into SQLAlchemy statements.

The owner predicate is always the first filter and cannot be influenced by
the query object. The list and count statements share the exact same
predicate list so ``totalCount`` always describes the returned pages.
"""

from __future__ import annotations

from sqlalchemy import ColumnElement, Select, and_, case, func, or_, select

from taskboard.domain.todos.entities import Priority, SortOrder, TodoQuery, TodoSortField
from taskboard.infrastructure.db.models import Todo

PRIORITY_RANK = case(
    {priority.value: priority.rank for priority in Priority},
    value=Todo.priority,
    else_=-1,
)


def build_filters(owner_id: int, query: TodoQuery) -> list[ColumnElement[bool]]:
    filters: list[ColumnElement[bool]] = [Todo.user_id == owner_id]

    if query.search:
        filters.append(
            or_(
                Todo.title.icontains(query.search, autoescape=True),
                Todo.description.icontains(query.search, autoescape=True),
            )
        )

    if query.completed is not None:
        filters.append(Todo.completed.is_(query.completed))

    if query.priority is not None:
        filters.append(Todo.priority == query.priority)

    if query.category:
        filters.append(Todo.category.icontains(query.category, autoescape=True))

    if query.due_after is not None or query.due_before is not None:
        filters.append(Todo.due_date.is_not(None))
    if query.due_after is not None:
        filters.append(Todo.due_date >= query.due_after)
    if query.due_before is not None:
        filters.append(Todo.due_date <= query.due_before)

    return filters


def _directed(column, order: SortOrder):
    return column.asc() if order is SortOrder.ASC else column.desc()


def build_ordering(query: TodoQuery) -> list:
    order = query.sort_order
    ordering: list = []

    if query.sort_by is TodoSortField.PRIORITY:
        ordering.append(_directed(PRIORITY_RANK, order))
    elif query.sort_by is TodoSortField.TITLE:
        ordering.append(_directed(func.lower(Todo.title), order))
    elif query.sort_by is TodoSortField.DUE_DATE:
        # undated todos go last in both directions
        ordering.append(Todo.due_date.is_(None).asc())
        ordering.append(_directed(Todo.due_date, order))
    else:
        ordering.append(_directed(Todo.created_at, order))
        ordering.append(_directed(Todo.id, order))
        return ordering

    ordering.append(Todo.created_at.desc())
    ordering.append(Todo.id.desc())
    return ordering


def build_list_statement(owner_id: int, query: TodoQuery) -> Select[tuple[Todo]]:
    return (
        select(Todo)
        .where(and_(*build_filters(owner_id, query)))
        .order_by(*build_ordering(query))
        .offset(query.offset)
        .limit(query.limit)
    )


def build_count_statement(owner_id: int, query: TodoQuery) -> Select[tuple[int]]:
    return (
        select(func.count())
        .select_from(Todo)
        .where(and_(*build_filters(owner_id, query)))
    )


__all__ = [
    "PRIORITY_RANK",
    "build_count_statement",
    "build_filters",
    "build_list_statement",
    "build_ordering",
]
