from __future__ import annotations

from datetime import UTC, date, datetime

import pytest

from taskboard.domain.exceptions import InvariantViolation
from taskboard.domain.todos.entities import (
    MAX_PAGE,
    MAX_ROW_ID,
    UNSET,
    Priority,
    Todo,
    TodoDraft,
    TodoPage,
    TodoPatch,
    TodoQuery,
    TodoStats,
)


def _todo(todo_id: int) -> Todo:
    now = datetime.now(UTC)
    return Todo(
        id=todo_id,
        user_id=1,
        title=f"todo {todo_id}",
        description=None,
        completed=False,
        priority=Priority.MEDIUM,
        category=None,
        due_date=None,
        created_at=now,
        updated_at=now,
    )


def test_draft_requires_non_blank_title() -> None:
    with pytest.raises(InvariantViolation) as excinfo:
        TodoDraft(title="   ")
    assert excinfo.value.field == "title"
    assert excinfo.value.status == 400


def test_draft_enforces_length_limits() -> None:
    with pytest.raises(InvariantViolation):
        TodoDraft(title="x" * 201)
    with pytest.raises(InvariantViolation):
        TodoDraft(title="ok", description="d" * 1001)
    with pytest.raises(InvariantViolation):
        TodoDraft(title="ok", category="c" * 51)


def test_draft_defaults() -> None:
    draft = TodoDraft(title="Buy milk")

    assert draft.priority is Priority.MEDIUM
    assert draft.completed is False
    assert draft.due_date is None


def test_patch_distinguishes_absent_null_and_value() -> None:
    patch = TodoPatch(description=None, due_date=date(2030, 5, 1))

    assert patch.title is UNSET
    assert patch.changes() == {"description": None, "due_date": date(2030, 5, 1)}
    assert not patch.is_empty()


def test_empty_patch() -> None:
    assert TodoPatch().is_empty()
    assert TodoPatch().changes() == {}


@pytest.mark.parametrize("field", ["title", "completed", "priority"])
def test_patch_rejects_null_for_required_fields(field: str) -> None:
    with pytest.raises(InvariantViolation) as excinfo:
        TodoPatch(**{field: None})
    assert excinfo.value.field == field


def test_patch_rejects_blank_title() -> None:
    with pytest.raises(InvariantViolation):
        TodoPatch(title="")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("HIGH", Priority.HIGH),
        ("high", Priority.HIGH),
        (" Urgent ", Priority.URGENT),
        (Priority.LOW, Priority.LOW),
        ("critical", None),
        ("", None),
        (None, None),
        (3, None),
    ],
)
def test_priority_parse_is_tolerant(raw: object, expected: Priority | None) -> None:
    assert Priority.parse(raw) is expected


def test_priority_rank_is_ordinal() -> None:
    ranks = [p.rank for p in (Priority.LOW, Priority.MEDIUM, Priority.HIGH, Priority.URGENT)]
    assert ranks == sorted(ranks)
    assert len(set(ranks)) == 4


@pytest.mark.parametrize(
    ("page", "limit"), [(0, 5), (1, 0), (1, 101), (-2, 10), (MAX_PAGE + 1, 5)]
)
def test_query_rejects_out_of_range_paging(page: int, limit: int) -> None:
    with pytest.raises(InvariantViolation):
        TodoQuery(page=page, limit=limit)


def test_query_rejects_inverted_due_range() -> None:
    with pytest.raises(InvariantViolation):
        TodoQuery(due_after=date(2030, 2, 1), due_before=date(2030, 1, 1))


def test_query_offset() -> None:
    assert TodoQuery(page=1, limit=5).offset == 0
    assert TodoQuery(page=3, limit=10).offset == 20
    assert TodoQuery(page=MAX_PAGE, limit=100).offset <= MAX_ROW_ID


@pytest.mark.parametrize(
    ("total", "page", "limit", "pages", "has_next", "has_prev"),
    [
        (0, 1, 5, 0, False, False),
        (5, 1, 5, 1, False, False),
        (6, 1, 5, 2, True, False),
        (6, 2, 5, 2, False, True),
        (11, 2, 5, 3, True, True),
        (3, 4, 5, 1, False, True),
    ],
)
def test_page_arithmetic(
    total: int, page: int, limit: int, pages: int, has_next: bool, has_prev: bool
) -> None:
    result = TodoPage(items=[], total_count=total, page=page, limit=limit)

    assert result.total_pages == pages
    assert result.has_next is has_next
    assert result.has_prev is has_prev


def test_page_keeps_items() -> None:
    items = [_todo(1), _todo(2)]
    assert TodoPage(items=items, total_count=2, page=1, limit=5).items == items


def test_stats_completion_rate() -> None:
    empty = TodoStats(
        total=0,
        completed=0,
        overdue=0,
        due_today=0,
        due_this_week=0,
        pending_by_priority={},
    )
    assert empty.completion_rate == 0
    assert empty.pending == 0

    stats = TodoStats(
        total=3,
        completed=1,
        overdue=0,
        due_today=0,
        due_this_week=0,
        pending_by_priority={Priority.HIGH: 2},
    )
    assert stats.pending == 2
    assert stats.completion_rate == 33.3
