from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy.orm import sessionmaker

from taskboard.application import (
    CreateTodoUseCase,
    DeleteTodoUseCase,
    GetTodoUseCase,
    ListTodosUseCase,
    SummarizeTodosUseCase,
    UpdateTodoUseCase,
)
from taskboard.domain.todos.entities import Priority, TodoDraft, TodoPatch, TodoQuery
from taskboard.domain.todos.exceptions import TodoNotFoundError
from taskboard.infrastructure.repositories.todos.sqlalchemy_todo_repository import (
    SqlAlchemyTodoRepository,
)

ALICE = 1
BOB = 2


@pytest.fixture()
def todos(session_factory: sessionmaker) -> SqlAlchemyTodoRepository:
    return SqlAlchemyTodoRepository(session_factory)


def test_create_then_get(todos: SqlAlchemyTodoRepository) -> None:
    created = CreateTodoUseCase(todos=todos).execute(ALICE, TodoDraft(title="Write tests"))

    assert GetTodoUseCase(todos=todos).execute(ALICE, created.id) == created


def test_foreign_todo_is_not_found_for_every_operation(
    todos: SqlAlchemyTodoRepository,
) -> None:
    created = CreateTodoUseCase(todos=todos).execute(ALICE, TodoDraft(title="Private"))

    with pytest.raises(TodoNotFoundError) as get_err:
        GetTodoUseCase(todos=todos).execute(BOB, created.id)
    with pytest.raises(TodoNotFoundError):
        UpdateTodoUseCase(todos=todos).execute(BOB, created.id, TodoPatch(completed=True))
    with pytest.raises(TodoNotFoundError):
        DeleteTodoUseCase(todos=todos).execute(BOB, created.id)

    assert get_err.value.status == 404
    assert get_err.value.code == "todo_not_found"
    assert GetTodoUseCase(todos=todos).execute(ALICE, created.id).completed is False


def test_missing_todo_is_not_found(todos: SqlAlchemyTodoRepository) -> None:
    with pytest.raises(TodoNotFoundError):
        GetTodoUseCase(todos=todos).execute(ALICE, 404)


def test_id_beyond_integer_range_is_not_found(todos: SqlAlchemyTodoRepository) -> None:
    huge = 2**64

    with pytest.raises(TodoNotFoundError):
        GetTodoUseCase(todos=todos).execute(ALICE, huge)
    with pytest.raises(TodoNotFoundError):
        UpdateTodoUseCase(todos=todos).execute(ALICE, huge, TodoPatch(completed=True))
    with pytest.raises(TodoNotFoundError):
        DeleteTodoUseCase(todos=todos).execute(ALICE, huge)


def test_update_applies_patch(todos: SqlAlchemyTodoRepository) -> None:
    created = CreateTodoUseCase(todos=todos).execute(
        ALICE, TodoDraft(title="Draft", due_date=date(2030, 1, 1))
    )

    updated = UpdateTodoUseCase(todos=todos).execute(
        ALICE, created.id, TodoPatch(priority=Priority.URGENT, due_date=None)
    )

    assert updated.priority is Priority.URGENT
    assert updated.due_date is None
    assert updated.title == "Draft"


def test_delete_removes_todo(todos: SqlAlchemyTodoRepository) -> None:
    created = CreateTodoUseCase(todos=todos).execute(ALICE, TodoDraft(title="Bye"))

    DeleteTodoUseCase(todos=todos).execute(ALICE, created.id)

    with pytest.raises(TodoNotFoundError):
        GetTodoUseCase(todos=todos).execute(ALICE, created.id)


def test_list_returns_page(todos: SqlAlchemyTodoRepository) -> None:
    create = CreateTodoUseCase(todos=todos)
    for n in range(7):
        create.execute(ALICE, TodoDraft(title=f"t{n}"))
    create.execute(BOB, TodoDraft(title="bob"))

    page = ListTodosUseCase(todos=todos).execute(ALICE, TodoQuery(page=2, limit=5))

    assert page.total_count == 7
    assert len(page.items) == 2
    assert page.has_prev and not page.has_next


def test_summarize_uses_injected_today(todos: SqlAlchemyTodoRepository) -> None:
    create = CreateTodoUseCase(todos=todos)
    create.execute(ALICE, TodoDraft(title="due", due_date=date(2030, 3, 10)))

    on_the_day = SummarizeTodosUseCase(todos=todos, today=lambda: date(2030, 3, 10))
    after = SummarizeTodosUseCase(todos=todos, today=lambda: date(2030, 3, 11))

    assert on_the_day.execute(ALICE).due_today == 1
    assert on_the_day.execute(ALICE).overdue == 0
    assert after.execute(ALICE).overdue == 1
