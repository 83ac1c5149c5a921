from datetime import datetime
from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, Field

from tasknest.core.db import StoredModel
from tasknest.utils import now


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskStatus(StrEnum):
    """Task status. Any value may be set from any other value."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


# Sorting weights for TaskPriority
PRIORITY_WEIGHTS: dict[TaskPriority, int] = {
    TaskPriority.LOW: 1,
    TaskPriority.MEDIUM: 2,
    TaskPriority.HIGH: 3,
}

PriorityFilter = TaskPriority | Literal["all"]


class Task(StoredModel):
    """A to-do item owned by a single user."""

    user_id: str  # owner, never reassigned
    title: str
    description: str | None = None
    due_date: str | None = None  # ISO-8601, usually date-only
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.PENDING
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)


class SortField(StrEnum):
    NONE = "none"
    DUE_DATE = "due_date"
    PRIORITY = "priority"


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


class TaskQuery(BaseModel):
    """Dashboard view settings: search text, priority filter and sort."""

    search: str = ""
    priority: PriorityFilter = "all"
    sort_by: SortField = SortField.NONE
    sort_order: SortOrder = SortOrder.ASC


class TaskBoard(BaseModel):
    """Filtered tasks split into one column per status."""

    tasks: list[Task] = Field(..., description="All tasks matching the query, in display order")
    pending: list[Task]
    in_progress: list[Task]
    completed: list[Task]
