from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ============================
# Base Schema
# ============================
class BaseSchema(BaseModel):
    """Base schema class for all output models.

    Fields are declared in snake_case and serialized in camelCase, which is
    what front-end consumers read. Either spelling is accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================
# Output Schemas
# ============================
class ImageData(BaseSchema):
    """Everything a placeholder needs, produced once per input image."""

    height: int
    width: int
    preview_src: str
    preview_enhanced_src: str
    aspect_ratio: float
    color_palette: Dict[str, str] = Field(default_factory=dict)

    def to_json(self, indent: int = 2) -> str:
        """Serialize with camelCase keys in declaration order."""
        return self.model_dump_json(by_alias=True, indent=indent)
