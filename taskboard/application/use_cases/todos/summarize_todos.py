# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, date, datetime

from taskboard.domain.todos.entities import TodoStats
from taskboard.domain.todos.repositories import TodoRepository


def _utc_today() -> date:
    return datetime.now(UTC).date()


class SummarizeTodosUseCase:
    def __init__(
        self,
        *,
        todos: TodoRepository,
        today: Callable[[], date] = _utc_today,
    ) -> None:
        self._todos = todos
        self._today = today

    def execute(self, owner_id: int) -> TodoStats:
        return self._todos.summarize(owner_id, self._today())


__all__ = ["SummarizeTodosUseCase"]
