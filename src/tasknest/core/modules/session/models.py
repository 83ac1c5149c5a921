"""Session management models."""

from pydantic import Field

from tasknest.core.db import CamelModel
from tasknest.utils import now_ms


class Session(CamelModel):
    """Pointer to the logged-in user.

    Stored as {"userId", "timestamp"}; at most one exists.
    """

    user_id: str
    timestamp: int = Field(default_factory=now_ms)  # epoch milliseconds
