"""Synchronous key-value persistence for users, tasks and the session.

The gateway never raises: unreadable data reads as empty, malformed records
are skipped, and failed writes are logged and dropped.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol, TypeVar

import structlog
from pydantic import ValidationError as PydanticValidationError

from tasknest.core.db import StoredModel
from tasknest.core.modules.session.models import Session
from tasknest.core.modules.task.models import Task
from tasknest.core.modules.user.models import User

logger = structlog.get_logger(__name__)

M = TypeVar("M", bound=StoredModel)

_READ_ERRORS = (OSError, ValueError, TypeError)
_WRITE_ERRORS = (OSError, ValueError, TypeError)


class KeyValueBackend(Protocol):
    """String-to-string store with the same surface as browser localStorage."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryBackend:
    """Backend holding every key in a dict."""

    def __init__(self, items: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class FileBackend:
    """Backend storing each key as <directory>/<key>.json."""

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)
        self._directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self._directory / f"{key}.json"

    def get_item(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        # Write to a sibling temp file, then rename over the target
        fd, tmp_name = tempfile.mkstemp(dir=self._directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(value)
            os.replace(tmp_name, self._path(key))
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class Storage:
    """Typed gateway over the users, tasks and session keys.

    Users and tasks are JSON arrays of records. Each record is validated on
    its own: one malformed entry is logged and skipped on read, and writes
    leave it in place instead of dropping the whole collection.
    """

    def __init__(self, backend: KeyValueBackend, key_prefix: str = "todo_app_") -> None:
        self.backend = backend
        self.users_key = f"{key_prefix}users"
        self.tasks_key = f"{key_prefix}tasks"
        self.session_key = f"{key_prefix}session"

    # --- users ---

    def get_users(self) -> list[User]:
        """Get every stored user."""
        return self._validate_each(self.users_key, User)

    def save_user(self, user: User) -> None:
        """Insert the user, or replace the stored user with the same id."""
        try:
            self._upsert(self.users_key, user)
        except _WRITE_ERRORS:
            logger.exception("storage_write_failed", key=self.users_key, user_id=user.id)

    # --- tasks ---

    def get_all_tasks(self) -> list[Task]:
        """Get tasks of every user."""
        return self._validate_each(self.tasks_key, Task)

    def get_tasks_by_user(self, user_id: str) -> list[Task]:
        """Get the tasks owned by one user, in stored order."""
        return [task for task in self.get_all_tasks() if task.user_id == user_id]

    def save_task(self, task: Task) -> None:
        """Insert the task, or replace the stored task with the same id."""
        try:
            self._upsert(self.tasks_key, task)
        except _WRITE_ERRORS:
            logger.exception("storage_write_failed", key=self.tasks_key, task_id=task.id)

    def update_task(self, task: Task) -> None:
        self.save_task(task)

    def delete_task(self, task_id: str) -> None:
        """Remove a task by id. Ownership is not checked here."""
        try:
            records = [r for r in self._load_records(self.tasks_key) if _record_id(r) != task_id]
            self._write(self.tasks_key, records)
        except _WRITE_ERRORS:
            logger.exception("storage_write_failed", key=self.tasks_key, task_id=task_id)

    # --- session ---

    def save_session(self, user_id: str) -> None:
        try:
            self._write(self.session_key, Session(user_id=user_id).to_storage())
        except _WRITE_ERRORS:
            logger.exception("storage_write_failed", key=self.session_key, user_id=user_id)

    def get_session(self) -> Session | None:
        try:
            raw = self.backend.get_item(self.session_key)
            return Session.model_validate_json(raw) if raw else None
        except _READ_ERRORS:
            logger.exception("storage_read_failed", key=self.session_key)
            return None

    def clear_session(self) -> None:
        try:
            self.backend.remove_item(self.session_key)
        except _WRITE_ERRORS:
            logger.exception("storage_write_failed", key=self.session_key)

    def clear_all(self) -> None:
        """Remove users, tasks and the session."""
        for key in (self.users_key, self.tasks_key, self.session_key):
            try:
                self.backend.remove_item(key)
            except _WRITE_ERRORS:
                logger.exception("storage_write_failed", key=key)

    # --- records ---

    def _load_records(self, key: str) -> list[Any]:
        """Raw entries of a JSON array. A missing, unreadable or non-array blob reads as empty."""
        try:
            raw = self.backend.get_item(key)
            data = json.loads(raw) if raw else []
        except _READ_ERRORS:
            logger.exception("storage_read_failed", key=key)
            return []
        if not isinstance(data, list):
            logger.warning("storage_blob_ignored", key=key, reason="not_an_array")
            return []
        return data

    def _validate_each(self, key: str, model: type[M]) -> list[M]:
        items: list[M] = []
        for record in self._load_records(key):
            try:
                items.append(model.model_validate(record))
            except PydanticValidationError:
                logger.warning("storage_record_skipped", key=key, record_id=_record_id(record))
        return items

    def _upsert(self, key: str, item: StoredModel) -> None:
        records = self._load_records(key)
        index = next((i for i, r in enumerate(records) if _record_id(r) == item.id), None)
        if index is None:
            records.append(item.to_storage())
        else:
            records[index] = item.to_storage()
        self._write(key, records)

    def _write(self, key: str, data: object) -> None:
        self.backend.set_item(key, json.dumps(data, ensure_ascii=False))


def _record_id(record: Any) -> Any:
    return record.get("id") if isinstance(record, dict) else None
