# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskboard.domain.todos.entities import MAX_ROW_ID
from taskboard.domain.todos.exceptions import TodoNotFoundError
from taskboard.domain.todos.repositories import TodoRepository


class DeleteTodoUseCase:
    def __init__(self, *, todos: TodoRepository) -> None:
        self._todos = todos

    def execute(self, owner_id: int, todo_id: int) -> None:
        if todo_id > MAX_ROW_ID or not self._todos.delete(owner_id, todo_id):
            raise TodoNotFoundError(todo_id)


__all__ = ["DeleteTodoUseCase"]
