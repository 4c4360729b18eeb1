"""Prompt construction helpers for the outfit recommendation step."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass

from stylist.api.schemas import OutfitRequest

DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"
REFERENCE_IMAGE_INSTRUCTION = "Also consider the style and elements in the uploaded reference image."

OUTPUT_SHAPE = """{
  "outfitName": "Creative name for the look",
  "description": "Brief description of why this works",
  "items": [
    {
      "name": "Item Name",
      "description": "Specific details (brand, material, cut)",
      "priceRange": "$X - $Y",
      "searchQuery": "Search term to find this item online"
    }
  ],
  "stylingTips": ["Tip 1", "Tip 2"],
  "colorPalette": ["#Hex1", "#Hex2"]
}"""


class InvalidReferenceImageError(ValueError):
    """Raised when an uploaded reference image cannot be decoded."""


@dataclass(slots=True, frozen=True)
class InlineImage:
    """Raw base64 image payload plus its declared media type."""

    data: str
    mime_type: str = DEFAULT_IMAGE_MIME_TYPE

    @classmethod
    def from_data_uri(cls, value: str) -> "InlineImage":
        """Strip a ``data:<mime>;base64,`` prefix if present and keep the payload."""

        if "," not in value:
            return cls(data=value.strip())

        header, payload = value.split(",", 1)
        mime_type = DEFAULT_IMAGE_MIME_TYPE
        if header.startswith("data:"):
            declared = header[len("data:"):].split(";", 1)[0].strip()
            if declared:
                mime_type = declared
        return cls(data=payload.strip(), mime_type=mime_type)

    def as_data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"

    def to_bytes(self) -> bytes:
        """Decode the payload, raising ``InvalidReferenceImageError`` on bad base64."""

        try:
            return base64.b64decode("".join(self.data.split()), validate=True)
        except (ValueError, binascii.Error) as exc:
            raise InvalidReferenceImageError("Reference image is not valid base64 data.") from exc


@dataclass(slots=True)
class OutfitPromptContext:
    """Preference fields with the defaults the model should see for blanks."""

    occasion: str
    style: str
    fabric: str
    color: str
    details: str
    body_type: str
    location: str
    weather: str

    @classmethod
    def from_request(cls, request: OutfitRequest) -> "OutfitPromptContext":
        def _or(value: str | None, default: str) -> str:
            value = (value or "").strip()
            return value or default

        return cls(
            occasion=_or(request.occasion, "Any"),
            style=_or(request.style, "Any"),
            fabric=_or(request.fabric, "Any"),
            color=_or(request.color, "Any"),
            details=_or(request.details, "Any"),
            body_type=_or(request.body_type, "Any"),
            location=_or(request.location, "Unknown"),
            weather=_or(request.weather, "Unknown"),
        )

    def summary(self) -> str:
        return "\n".join(
            [
                f"- Occasion: {self.occasion}",
                f"- Style/Vibe: {self.style}",
                f"- Fabric/Texture: {self.fabric}",
                f"- Color Palette: {self.color}",
                f"- Details/Fit: {self.details}",
                f"- Body Type: {self.body_type}",
                f"- Location: {self.location}",
                f"- Weather: {self.weather}",
            ],
        )


class PromptBuilder:
    """Builds the stylist instruction sent to the recommendation model."""

    def build(self, request: OutfitRequest, *, with_image: bool = False) -> str:
        """Return the natural-language instruction for ``request``."""

        context = OutfitPromptContext.from_request(request)
        prompt = (
            "You are a world-class fashion stylist for young adults (18-30).\n"
            "Suggest a complete outfit based on the following details:\n"
            f"{context.summary()}\n\n"
            "Provide the response in JSON format with the following structure:\n"
            f"{OUTPUT_SHAPE}\n\n"
            "Make it trendy, aesthetic, and suitable for the target audience."
        )
        if with_image:
            prompt = f"{prompt} {REFERENCE_IMAGE_INSTRUCTION}"
        return prompt

    def reference_image(self, request: OutfitRequest) -> InlineImage | None:
        """Return the attached reference image, or ``None`` when nothing usable was sent."""

        if not request.image:
            return None
        image = InlineImage.from_data_uri(request.image)
        if not image.data:
            return None
        return image
