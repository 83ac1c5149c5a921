"""Pure helpers that filter, sort and group task lists.

None of these mutate their input; each returns a new list.
"""

from collections.abc import Sequence
from datetime import datetime

from tasknest.core.modules.task.models import (
    PRIORITY_WEIGHTS,
    PriorityFilter,
    SortField,
    SortOrder,
    Task,
    TaskBoard,
    TaskQuery,
    TaskStatus,
)
from tasknest.utils import now, parse_iso


def filter_by_text(tasks: Sequence[Task], text: str) -> list[Task]:
    """Keep tasks whose title or description contains text, ignoring case.

    Blank text keeps everything.
    """
    if not text.strip():
        return list(tasks)
    needle = text.lower()
    return [
        task
        for task in tasks
        if needle in task.title.lower() or (task.description is not None and needle in task.description.lower())
    ]


def filter_by_priority(tasks: Sequence[Task], priority: PriorityFilter) -> list[Task]:
    if priority == "all":
        return list(tasks)
    return [task for task in tasks if task.priority == priority]


def filter_by_status(tasks: Sequence[Task], status: TaskStatus) -> list[Task]:
    return [task for task in tasks if task.status == status]


def sort_by_due_date(tasks: Sequence[Task], ascending: bool = True) -> list[Task]:
    """Stable sort on due date. Tasks without a usable due date always go last."""
    dated: list[tuple[datetime, Task]] = []
    undated: list[Task] = []
    for task in tasks:
        due = parse_iso(task.due_date)
        if due is None:
            undated.append(task)
        else:
            dated.append((due, task))
    # sorted() keeps equal keys in input order even with reverse=True
    dated.sort(key=lambda pair: pair[0], reverse=not ascending)
    return [task for _, task in dated] + undated


def sort_by_priority(tasks: Sequence[Task], ascending: bool = True) -> list[Task]:
    """Stable sort on priority weight (low=1, medium=2, high=3)."""
    return sorted(tasks, key=lambda task: PRIORITY_WEIGHTS[task.priority], reverse=not ascending)


def is_overdue(task: Task, at: datetime | None = None) -> bool:
    """Due date strictly in the past and not completed."""
    if task.status == TaskStatus.COMPLETED:
        return False
    due = parse_iso(task.due_date)
    if due is None:
        return False
    return due < (at or now())


def build_board(tasks: Sequence[Task], query: TaskQuery) -> TaskBoard:
    """Apply search, priority filter and sort, then split by status."""
    result = filter_by_text(tasks, query.search)
    result = filter_by_priority(result, query.priority)

    ascending = query.sort_order == SortOrder.ASC
    if query.sort_by == SortField.DUE_DATE:
        result = sort_by_due_date(result, ascending)
    elif query.sort_by == SortField.PRIORITY:
        result = sort_by_priority(result, ascending)

    return TaskBoard(
        tasks=result,
        pending=filter_by_status(result, TaskStatus.PENDING),
        in_progress=filter_by_status(result, TaskStatus.IN_PROGRESS),
        completed=filter_by_status(result, TaskStatus.COMPLETED),
    )
