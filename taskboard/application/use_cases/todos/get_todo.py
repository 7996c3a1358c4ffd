# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskboard.domain.todos.entities import MAX_ROW_ID, Todo
from taskboard.domain.todos.exceptions import TodoNotFoundError
from taskboard.domain.todos.repositories import TodoRepository


class GetTodoUseCase:
    def __init__(self, *, todos: TodoRepository) -> None:
        self._todos = todos

    def execute(self, owner_id: int, todo_id: int) -> Todo:
        if todo_id > MAX_ROW_ID:
            raise TodoNotFoundError(todo_id)
        todo = self._todos.get(owner_id, todo_id)
        if todo is None:
            raise TodoNotFoundError(todo_id)
        return todo


__all__ = ["GetTodoUseCase"]
