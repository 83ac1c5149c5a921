from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from tasknest.utils import new_id


class CamelModel(BaseModel):
    """Base for records kept in the key-value store.

    Attributes are snake_case in Python and camelCase in the stored JSON,
    which matches the layout written by the browser version of the app.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    def to_storage(self) -> dict[str, Any]:
        """Convert the model to a JSON-ready dict, omitting unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class StoredModel(CamelModel):
    """Stored record with an opaque string id."""

    id: str = Field(default_factory=new_id)
