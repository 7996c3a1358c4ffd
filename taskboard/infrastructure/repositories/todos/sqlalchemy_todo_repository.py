# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta

from sqlalchemy import and_, case, delete, func, select, update

from taskboard.domain.todos.entities import Priority, TodoPage, TodoStats
from taskboard.domain.todos.entities import Todo as DomainTodo
from taskboard.domain.todos.entities import TodoDraft, TodoPatch, TodoQuery
from taskboard.domain.todos.repositories import TodoRepository
from taskboard.infrastructure.db.models import Todo
from taskboard.infrastructure.repositories.todos.query_builder import (
    build_count_statement,
    build_list_statement,
)
from taskboard.infrastructure.repositories.users.sqlalchemy_user_repository import as_utc
from taskboard.infrastructure.unit_of_work import SessionFactory, unit_of_work_scope

DUE_SOON_DAYS = 7


def _to_domain(row: Todo) -> DomainTodo:
    return DomainTodo(
        id=row.id,
        user_id=row.user_id,
        title=row.title,
        description=row.description,
        completed=bool(row.completed),
        priority=Priority(row.priority),
        category=row.category,
        due_date=row.due_date,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


def _owned(owner_id: int, todo_id: int):
    return and_(Todo.id == todo_id, Todo.user_id == owner_id)


class SqlAlchemyTodoRepository(TodoRepository):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def add(self, owner_id: int, draft: TodoDraft) -> DomainTodo:
        with unit_of_work_scope(self._session_factory) as session:
            row = Todo(
                user_id=owner_id,
                title=draft.title,
                description=draft.description,
                completed=draft.completed,
                priority=draft.priority,
                category=draft.category,
                due_date=draft.due_date,
            )
            session.add(row)
            session.flush()
            session.refresh(row)
            return _to_domain(row)

    def get(self, owner_id: int, todo_id: int) -> DomainTodo | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.scalars(select(Todo).where(_owned(owner_id, todo_id))).first()
            return _to_domain(row) if row else None

    def update(self, owner_id: int, todo_id: int, patch: TodoPatch) -> DomainTodo | None:
        values = patch.changes()
        values["updated_at"] = datetime.now(UTC)
        with unit_of_work_scope(self._session_factory) as session:
            result = session.execute(
                update(Todo)
                .where(_owned(owner_id, todo_id))
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                return None
            row = session.scalars(
                select(Todo)
                .where(_owned(owner_id, todo_id))
                .execution_options(populate_existing=True)
            ).one()
            return _to_domain(row)

    def delete(self, owner_id: int, todo_id: int) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            result = session.execute(
                delete(Todo)
                .where(_owned(owner_id, todo_id))
                .execution_options(synchronize_session=False)
            )
            return result.rowcount > 0

    def list_for_owner(self, owner_id: int, query: TodoQuery) -> TodoPage:
        with unit_of_work_scope(self._session_factory) as session:
            total = session.scalar(build_count_statement(owner_id, query)) or 0
            rows = session.scalars(build_list_statement(owner_id, query)).all()
            items = [_to_domain(row) for row in rows]
        return TodoPage(items=items, total_count=int(total), page=query.page, limit=query.limit)

    def summarize(self, owner_id: int, today: date) -> TodoStats:
        pending = Todo.completed.is_(False)
        week_end = today + timedelta(days=DUE_SOON_DAYS)

        def _count_where(*conditions):
            return func.coalesce(func.sum(case((and_(*conditions), 1), else_=0)), 0)

        totals_stmt = select(
            func.count(Todo.id),
            _count_where(Todo.completed.is_(True)),
            _count_where(pending, Todo.due_date < today),
            _count_where(pending, Todo.due_date == today),
            _count_where(pending, Todo.due_date >= today, Todo.due_date <= week_end),
        ).where(Todo.user_id == owner_id)

        breakdown_stmt = (
            select(Todo.priority, func.count(Todo.id))
            .where(Todo.user_id == owner_id, pending)
            .group_by(Todo.priority)
        )

        with unit_of_work_scope(self._session_factory) as session:
            total, completed, overdue, due_today, due_this_week = session.execute(
                totals_stmt
            ).one()
            breakdown = {priority: 0 for priority in Priority}
            for priority, count in session.execute(breakdown_stmt).all():
                breakdown[Priority(priority)] = int(count)

        return TodoStats(
            total=int(total),
            completed=int(completed),
            overdue=int(overdue),
            due_today=int(due_today),
            due_this_week=int(due_this_week),
            pending_by_priority=breakdown,
        )
