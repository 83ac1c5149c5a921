from datetime import timedelta

import structlog

from tasknest.config import Config
from tasknest.core.modules.auth.service import AuthService, hash_password
from tasknest.core.modules.task.models import Task, TaskPriority, TaskStatus
from tasknest.core.service import Service
from tasknest.core.storage import Storage
from tasknest.utils import now

logger = structlog.get_logger(__name__)

# (title, description, priority, status, due in days from now)
DEMO_TASKS: list[tuple[str, str, TaskPriority, TaskStatus, int]] = [
    ("Review project documentation", "Update the technical docs where needed", TaskPriority.HIGH, TaskStatus.PENDING, 2),
    ("Prepare client presentation", "Build the slides and a product demo", TaskPriority.HIGH, TaskStatus.IN_PROGRESS, 5),
    ("Update project dependencies", "Review and bump outdated dependencies", TaskPriority.MEDIUM, TaskStatus.PENDING, 7),
    ("Write unit tests", "Raise test coverage to 80%", TaskPriority.MEDIUM, TaskStatus.IN_PROGRESS, 10),
    ("Review teammates' code", "Go through open pull requests", TaskPriority.LOW, TaskStatus.PENDING, 3),
    ("Organize team meeting", "Pick a time slot and prepare the agenda", TaskPriority.MEDIUM, TaskStatus.COMPLETED, -2),
    ("Optimize database queries", "Find and fix the slow queries", TaskPriority.HIGH, TaskStatus.PENDING, -1),
    ("Set up CI/CD pipeline", "Continuous integration and automatic deploys", TaskPriority.MEDIUM, TaskStatus.COMPLETED, -5),
    ("Write API documentation", "Document endpoints with usage examples", TaskPriority.LOW, TaskStatus.PENDING, 14),
    ("Build notification system", "Push notifications for important events", TaskPriority.HIGH, TaskStatus.IN_PROGRESS, 6),
]


class SeedService(Service):
    """Creates a demo account with sample tasks."""

    def __init__(self, storage: Storage, auth: AuthService, config: Config) -> None:
        self._storage = storage
        self._auth = auth
        self._config = config

    async def on_start(self) -> None:
        if self._config.seed_demo_data:
            self.initialize_demo_data()

    def initialize_demo_data(self) -> bool:
        """Create the demo user and its tasks unless the demo email is already taken.

        The demo user is not logged in. Returns True if anything was created.
        """
        user = self._auth.create_user(
            self._config.demo_name, self._config.demo_email, hash_password(self._config.demo_password)
        )
        if user is None:
            return False

        timestamp = now()
        for title, description, priority, status, due_in_days in DEMO_TASKS:
            due = timestamp + timedelta(days=due_in_days)
            self._storage.save_task(
                Task(
                    user_id=user.id,
                    title=title,
                    description=description,
                    priority=priority,
                    status=status,
                    due_date=due.isoformat(),
                    created_at=timestamp,
                    updated_at=timestamp,
                )
            )
        logger.info("demo_data_created", user_id=user.id, task_count=len(DEMO_TASKS))
        return True
