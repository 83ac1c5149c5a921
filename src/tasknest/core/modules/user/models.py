from datetime import datetime

from pydantic import BaseModel, Field

from tasknest.core.db import StoredModel
from tasknest.utils import now


class User(StoredModel):
    """Registered account. Email is stored lower-cased."""

    name: str
    email: str
    password_hash: str  # hex SHA-256, unsalted
    created_at: datetime = Field(default_factory=now)


class UserView(BaseModel):
    """User information safe to hand to presentation code."""

    id: str = Field(..., description="User ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Lower-cased email")

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        """Create view model from domain model."""
        return cls(id=user.id, name=user.name, email=user.email)
