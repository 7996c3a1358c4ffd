# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import date
from typing import Protocol

from .entities import Todo, TodoDraft, TodoPage, TodoPatch, TodoQuery, TodoStats


class TodoRepository(Protocol):
    """Persistence port for todos; every method is scoped by ``owner_id``."""

    def add(self, owner_id: int, draft: TodoDraft) -> Todo: ...

    def get(self, owner_id: int, todo_id: int) -> Todo | None: ...

    def update(self, owner_id: int, todo_id: int, patch: TodoPatch) -> Todo | None: ...

    def delete(self, owner_id: int, todo_id: int) -> bool: ...

    def list_for_owner(self, owner_id: int, query: TodoQuery) -> TodoPage: ...

    def summarize(self, owner_id: int, today: date) -> TodoStats: ...
