from typing import Any

from pydantic import BaseModel


class WireModel(BaseModel):
    """Immutable value object that serializes to the Graph API field layout."""

    model_config = {"frozen": True}

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
