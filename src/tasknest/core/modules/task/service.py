from collections.abc import Sequence

import structlog

from tasknest.core.modules.auth.service import AuthService
from tasknest.core.modules.task import filters
from tasknest.core.modules.task.models import PriorityFilter, Task, TaskBoard, TaskPriority, TaskQuery, TaskStatus
from tasknest.core.modules.task.validators import validate_title
from tasknest.core.modules.user.models import User
from tasknest.core.observable import Observable
from tasknest.core.service import Service
from tasknest.core.storage import Storage
from tasknest.utils import now

logger = structlog.get_logger(__name__)


class TaskService(Service):
    """Tasks of the logged-in user, kept in memory and written through to storage.

    Every mutation persists first, then reloads the user's tasks from storage
    and publishes them on `tasks`. Tasks owned by someone else are never
    touched; such calls are silently ignored.
    """

    def __init__(self, storage: Storage, auth: AuthService) -> None:
        self._storage = storage
        self._auth = auth
        self.tasks: Observable[list[Task]] = Observable([])
        self._user_subscription = auth.current_user.subscribe(self._on_user_changed)

    async def on_stop(self) -> None:
        self._user_subscription.unsubscribe()

    def _on_user_changed(self, user: User | None) -> None:
        if user is None:
            self.tasks.publish([])
        else:
            self._load_tasks(user.id)

    def _load_tasks(self, user_id: str) -> None:
        self.tasks.publish(self._storage.get_tasks_by_user(user_id))

    def _owns(self, user: User, task_id: str) -> bool:
        return any(task.id == task_id for task in self.tasks.value if task.user_id == user.id)

    def _claimed_by_other(self, user: User, task_id: str) -> bool:
        """True when storage already holds this id under a different owner."""
        return any(task.id == task_id and task.user_id != user.id for task in self._storage.get_all_tasks())

    # --- mutations ---

    def create_task(
        self,
        title: str,
        description: str | None = None,
        due_date: str | None = None,
        priority: TaskPriority = TaskPriority.MEDIUM,
    ) -> Task | None:
        """Create a pending task for the current user. Returns None when logged out."""
        user = self._auth.get_current_user()
        if user is None:
            return None

        timestamp = now()
        task = Task(
            user_id=user.id,
            title=validate_title(title),
            description=description,
            due_date=due_date,
            priority=priority,
            status=TaskStatus.PENDING,
            created_at=timestamp,
            updated_at=timestamp,
        )
        self._storage.save_task(task)
        self._load_tasks(user.id)
        logger.debug("task_created", task_id=task.id, user_id=user.id)
        return task

    def update_task(self, task: Task) -> None:
        """Save changes to a task owned by the current user and refresh its update time."""
        user = self._auth.get_current_user()
        if user is None or task.user_id != user.id or self._claimed_by_other(user, task.id):
            logger.debug("task_update_ignored", task_id=task.id)
            return

        updated = task.model_copy(update={"title": validate_title(task.title), "updated_at": now()})
        self._storage.update_task(updated)
        self._load_tasks(user.id)

    def delete_task(self, task_id: str) -> None:
        """Delete a task owned by the current user."""
        user = self._auth.get_current_user()
        if user is None or not self._owns(user, task_id):
            logger.debug("task_delete_ignored", task_id=task_id)
            return

        self._storage.delete_task(task_id)
        self._load_tasks(user.id)
        logger.debug("task_deleted", task_id=task_id, user_id=user.id)

    def change_task_status(self, task_id: str, status: TaskStatus) -> None:
        task = self.get_task(task_id)
        if task is None:
            return
        self.update_task(task.model_copy(update={"status": TaskStatus(status), "updated_at": now()}))

    # --- reads ---

    def get_task(self, task_id: str) -> Task | None:
        return next((task for task in self.tasks.value if task.id == task_id), None)

    def get_tasks(self) -> list[Task]:
        return list(self.tasks.value)

    def get_tasks_by_status(self, status: TaskStatus) -> list[Task]:
        return filters.filter_by_status(self.tasks.value, status)

    def filter_tasks_by_text(self, tasks: Sequence[Task], text: str) -> list[Task]:
        return filters.filter_by_text(tasks, text)

    def filter_tasks_by_priority(self, tasks: Sequence[Task], priority: PriorityFilter) -> list[Task]:
        return filters.filter_by_priority(tasks, priority)

    def sort_tasks_by_due_date(self, tasks: Sequence[Task], ascending: bool = True) -> list[Task]:
        return filters.sort_by_due_date(tasks, ascending)

    def sort_tasks_by_priority(self, tasks: Sequence[Task], ascending: bool = True) -> list[Task]:
        return filters.sort_by_priority(tasks, ascending)

    def is_task_overdue(self, task: Task) -> bool:
        return filters.is_overdue(task)

    def build_board(self, query: TaskQuery | None = None) -> TaskBoard:
        """Current tasks run through the dashboard filters and split by status."""
        return filters.build_board(self.tasks.value, query or TaskQuery())
