from __future__ import annotations

from typing import Any, Literal, get_args
from pydantic import BaseModel, ConfigDict, Field

ImageSize = Literal[
    "square_hd",
    "portrait_4_3",
    "portrait_16_9",
    "landscape_4_3",
    "landscape_16_9",
]

IMAGE_SIZES = get_args(ImageSize)

DEFAULT_IMAGE_SIZE: ImageSize = "square_hd"

MISSING_KEY_ERROR = "API key not found"


class GenerateImageRequest(BaseModel):
    """Body of POST /api/generate-image."""
    model_config = ConfigDict(extra="ignore")

    prompt: str
    size: ImageSize = DEFAULT_IMAGE_SIZE


class ProviderReply(BaseModel):
    """Provider answer, kept as-is for pass-through."""
    status_code: int
    body: Any = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300
