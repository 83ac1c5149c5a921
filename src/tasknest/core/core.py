from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog

from tasknest.config import Config
from tasknest.core.modules.access.service import AccessService
from tasknest.core.modules.auth.service import AuthService
from tasknest.core.modules.notification.service import NotificationService
from tasknest.core.modules.seed.service import SeedService
from tasknest.core.modules.task.service import TaskService
from tasknest.core.service import Service
from tasknest.core.storage import FileBackend, KeyValueBackend, MemoryBackend, Storage

logger = structlog.get_logger(__name__)


class Services:
    """Service registry that wires every service with its dependencies."""

    auth: AuthService
    task: TaskService
    access: AccessService
    notification: NotificationService
    seed: SeedService

    def __init__(self, storage: Storage, config: Config) -> None:
        """Create all services.

        Order matters: auth restores the session before the task service
        subscribes to the current user.
        """
        self.auth = AuthService(storage)
        self.task = TaskService(storage, self.auth)
        self.access = AccessService(storage, self.auth)
        self.notification = NotificationService(config.notification_duration_ms)
        self.seed = SeedService(storage, self.auth, config)
        self._services: list[Service] = [self.auth, self.task, self.access, self.notification, self.seed]

    async def start_all(self) -> None:
        """Start all services that have startup logic."""
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        """Stop services in reverse order."""
        for service in reversed(self._services):
            await service.on_stop()


def create_backend(config: Config) -> KeyValueBackend:
    """Pick the storage backend from config."""
    if config.storage_path:
        return FileBackend(config.storage_path)
    return MemoryBackend()


class Core:
    """Container providing config, storage, and all service instances."""

    config: Config
    storage: Storage
    services: Services

    def __init__(self, config: Config, backend: KeyValueBackend | None = None) -> None:
        """Initialize core with config, storage, and wired services."""
        self.config = config
        self.storage = Storage(backend if backend is not None else create_backend(config), key_prefix=config.storage_key_prefix)
        self.services = Services(self.storage, config)
        logger.debug("core_initialized", backend=type(self.storage.backend).__name__)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Run service startup hooks (demo seeding) and stop them in reverse on exit."""
        await self.services.start_all()
        logger.debug("core_started")
        try:
            yield
        finally:
            await self.services.stop_all()
            logger.debug("core_stopped")
