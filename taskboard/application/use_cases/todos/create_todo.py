# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskboard.domain.todos.entities import Todo, TodoDraft
from taskboard.domain.todos.repositories import TodoRepository


class CreateTodoUseCase:
    def __init__(self, *, todos: TodoRepository) -> None:
        self._todos = todos

    def execute(self, owner_id: int, draft: TodoDraft) -> Todo:
        return self._todos.add(owner_id, draft)


__all__ = ["CreateTodoUseCase"]
