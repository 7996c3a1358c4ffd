# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskboard.domain.todos.entities import MAX_ROW_ID, Todo, TodoPatch
from taskboard.domain.todos.exceptions import TodoNotFoundError
from taskboard.domain.todos.repositories import TodoRepository


class UpdateTodoUseCase:
    """Apply a partial update in one owner-scoped write.

    There is no separate ownership lookup: a todo that is missing and a todo
    owned by someone else both come back as ``TodoNotFoundError``.
    """

    def __init__(self, *, todos: TodoRepository) -> None:
        self._todos = todos

    def execute(self, owner_id: int, todo_id: int, patch: TodoPatch) -> Todo:
        if todo_id > MAX_ROW_ID:
            raise TodoNotFoundError(todo_id)
        updated = self._todos.update(owner_id, todo_id, patch)
        if updated is None:
            raise TodoNotFoundError(todo_id)
        return updated


__all__ = ["UpdateTodoUseCase"]
