"""JsonModel base class for serializable domain models."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class JsonModel(BaseModel):
    """Base model with camelCase/snake_case conversion.

    - JSON output uses camelCase (for issuers and HTTP layers)
    - Internal Python uses snake_case
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def model_dump_json(self, **kwargs) -> str:
        """Override to ensure camelCase in JSON output."""
        kwargs.setdefault("by_alias", True)
        return super().model_dump_json(**kwargs)

    def to_json(self, pretty: bool = False) -> str:
        """Serialize to JSON string."""
        return self.model_dump_json(indent=2 if pretty else None, exclude_none=True)

    def to_dict(self, by_alias: bool = False) -> dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        return self.model_dump(mode="json", exclude_none=True, by_alias=by_alias)
