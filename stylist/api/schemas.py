"""Request and response models shared by the gateway and the wizard client."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    """Base model speaking camelCase on the wire and snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OutfitRequest(_CamelModel):
    """Style preferences collected by the wizard."""

    occasion: Optional[str] = None
    style: Optional[str] = None
    fabric: Optional[str] = None
    color: Optional[str] = None
    details: Optional[str] = None
    body_type: Optional[str] = None
    location: Optional[str] = None
    weather: Optional[str] = None
    image: Optional[str] = Field(None, description="Reference image as a data URI")


class OutfitItem(_CamelModel):
    name: str = ""
    description: str = ""
    price_range: str = ""
    search_query: str = ""


class OutfitResult(_CamelModel):
    """Structured outfit recommendation as produced by the model."""

    outfit_name: str = ""
    description: str = ""
    items: list[OutfitItem] = Field(default_factory=list)
    styling_tips: list[str] = Field(default_factory=list)
    color_palette: list[str] = Field(default_factory=list)


class ImageGenerationRequest(_CamelModel):
    description: str


class ImageGenerationResult(_CamelModel):
    image_url: str


class ErrorResponse(BaseModel):
    error: str
