from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import structlog

from tasknest.config import Config
from tasknest.core.core import Core
from tasknest.core.modules.access.models import AccessDecision
from tasknest.core.modules.auth.models import AuthResult
from tasknest.core.modules.task.models import Task, TaskBoard, TaskPriority, TaskQuery, TaskStatus
from tasknest.core.modules.user.models import UserView
from tasknest.core.storage import KeyValueBackend
from tasknest.errors import NotFoundError, ValidationError

logger = structlog.get_logger(__name__)


class App:
    """Facade for the user-facing flows; posts a notification for each outcome."""

    def __init__(self, config: Config, backend: KeyValueBackend | None = None) -> None:
        self._core = Core(config, backend)

    @property
    def core(self) -> Core:
        return self._core

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    def resolve_access(self) -> AccessDecision:
        """Decide whether a protected page may be shown."""
        return self._core.services.access.resolve_access()

    def get_current_user(self) -> UserView | None:
        user = self._core.services.auth.get_current_user()
        return UserView.from_domain(user) if user is not None else None

    async def register(self, name: str, email: str, password: str) -> AuthResult:
        """Create an account, log it in and greet the user."""
        result = await self._core.services.auth.register(name, email, password)
        if result.success:
            self._core.services.notification.success("Registration successful. Welcome!")
        else:
            self._core.services.notification.error(result.message)
        return result

    async def login(self, email: str, password: str) -> AuthResult:
        result = await self._core.services.auth.login(email, password)
        if result.success:
            self._core.services.notification.success("Welcome back!")
        else:
            self._core.services.notification.error(result.message)
        return result

    def logout(self) -> None:
        self._core.services.auth.logout()

    def save_task(
        self,
        title: str,
        description: str | None = None,
        due_date: str | None = None,
        priority: TaskPriority = TaskPriority.MEDIUM,
        task_id: str | None = None,
    ) -> Task | None:
        """Create a task, or edit the task with task_id when given.

        Invalid input is reported as an error notification and returns None.
        """
        tasks = self._core.services.task
        try:
            if task_id is None:
                task = tasks.create_task(title, description, due_date, priority)
                if task is not None:
                    self._core.services.notification.success("Task created")
                return task

            existing = tasks.get_task(task_id)
            if existing is None:
                raise NotFoundError(f"Task '{task_id}' not found")
            changes: dict[str, Any] = {
                "title": title,
                "description": description,
                "due_date": due_date,
                "priority": TaskPriority(priority),
            }
            tasks.update_task(existing.model_copy(update=changes))
            self._core.services.notification.success("Task updated")
            return tasks.get_task(task_id)
        except (ValidationError, NotFoundError) as e:
            self._core.services.notification.error(str(e))
            return None

    def delete_task(self, task_id: str) -> None:
        if self._core.services.task.get_task(task_id) is None:
            self._core.services.notification.error("Task not found")
            return
        self._core.services.task.delete_task(task_id)
        self._core.services.notification.success("Task deleted")

    def change_task_status(self, task_id: str, status: TaskStatus) -> None:
        self._core.services.task.change_task_status(task_id, status)

    def board(self, query: TaskQuery | None = None) -> TaskBoard:
        """Current user's tasks filtered, sorted and split into status columns."""
        return self._core.services.task.build_board(query)

    def task_detail(self, task_id: str) -> tuple[Task, bool]:
        """Get a task with its overdue flag.

        Raises:
            NotFoundError: If the current user has no task with this id
        """
        task = self._core.services.task.get_task(task_id)
        if task is None:
            raise NotFoundError(f"Task '{task_id}' not found")
        return task, self._core.services.task.is_task_overdue(task)

    def reset_all_data(self) -> None:
        """Delete every user, task and the session, then log out."""
        self._core.storage.clear_all()
        self._core.services.auth.logout()
        self._core.services.notification.info("All data has been deleted")
        logger.info("all_data_reset")
