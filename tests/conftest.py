"""Shared pytest fixtures."""

import asyncio

import pytest

from tasknest.core.modules.auth.service import AuthService
from tasknest.core.modules.task.models import Task
from tasknest.core.modules.task.service import TaskService
from tasknest.core.modules.user.models import User
from tasknest.core.storage import MemoryBackend, Storage


@pytest.fixture
def backend():
    """Empty in-memory key-value backend."""
    return MemoryBackend()


@pytest.fixture
def storage(backend):
    return Storage(backend)


@pytest.fixture
def auth(storage):
    return AuthService(storage)


@pytest.fixture
def task_service(storage, auth):
    return TaskService(storage, auth)


@pytest.fixture
def current_user(auth, task_service) -> User:
    """Register and log in a test user (task service already listening)."""
    result = asyncio.run(auth.register("Test User", "test@test.com", "password123"))
    assert result.success
    user = auth.get_current_user()
    assert user is not None
    return user


@pytest.fixture
def make_task():
    """Build an unsaved task for filter and sort tests."""

    def _make(title: str = "Task", **kwargs) -> Task:
        kwargs.setdefault("user_id", "owner")
        return Task(title=title, **kwargs)

    return _make
