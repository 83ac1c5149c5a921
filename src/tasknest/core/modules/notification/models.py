from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from tasknest.utils import new_id


class NotificationType(StrEnum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
    WARNING = "warning"


class Notification(BaseModel):
    """Toast message. Lives in memory only."""

    id: str = Field(default_factory=new_id)
    message: str
    type: NotificationType = NotificationType.INFO
    duration: int | None = None  # milliseconds; 0 or None means sticky

    model_config = ConfigDict(frozen=True)
