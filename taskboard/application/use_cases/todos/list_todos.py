# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskboard.domain.todos.entities import TodoPage, TodoQuery
from taskboard.domain.todos.repositories import TodoRepository


class ListTodosUseCase:
    def __init__(self, *, todos: TodoRepository) -> None:
        self._todos = todos

    def execute(self, owner_id: int, query: TodoQuery) -> TodoPage:
        return self._todos.list_for_owner(owner_id, query)


__all__ = ["ListTodosUseCase"]
