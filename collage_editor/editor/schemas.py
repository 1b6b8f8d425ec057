from __future__ import annotations

from typing import Annotated, Literal, Optional, Tuple, Union
from pydantic import BaseModel, Field, ConfigDict

# -----------------------------
# Core Types
# -----------------------------

LayerKind = Literal["image", "text"]

DEFAULT_LAYER_SIZE = 200.0

# -----------------------------
# Layer Specs
# -----------------------------

class BaseLayer(BaseModel):
    """One placed element on the canvas.
    Layers are immutable values: the store swaps in patched copies."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: int
    label: str = ""
    width: float = Field(default=DEFAULT_LAYER_SIZE, gt=0)
    height: float = Field(default=DEFAULT_LAYER_SIZE, gt=0)
    x: float = 0.0                        # may go negative when dragged off-canvas
    y: float = 0.0
    stack_order: int = Field(default=0, ge=0)

class ImageLayer(BaseLayer):
    kind: Literal["image"] = "image"
    source: str                           # URL of the bitmap

class TextLayer(BaseLayer):
    kind: Literal["text"] = "text"
    source: str = ""                      # unused for text
    text: str = ""

Layer = Annotated[Union[ImageLayer, TextLayer], Field(discriminator="kind")]

# -----------------------------
# Patches
# -----------------------------

class LayerPatch(BaseModel):
    """Partial update: every field optional, unset fields are left alone.
    `id`, `kind` and `stack_order` are owned by the store and not patchable."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    source: Optional[str] = None
    label: Optional[str] = None
    width: Optional[float] = Field(default=None, gt=0)
    height: Optional[float] = Field(default=None, gt=0)
    x: Optional[float] = None
    y: Optional[float] = None
    text: Optional[str] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_none=True)


def apply_patch(layer: BaseLayer, patch: LayerPatch) -> BaseLayer:
    """
    Return a copy of `layer` with the patch applied field by field.
    Fields the layer's kind does not carry (e.g. `text` on an image) are skipped.
    """
    if isinstance(layer, TextLayer):
        allowed = TextLayer.model_fields
    elif isinstance(layer, ImageLayer):
        allowed = ImageLayer.model_fields
    else:
        raise TypeError(f"Unknown layer type: {type(layer).__name__}")

    update = {k: v for k, v in patch.changes().items() if k in allowed}
    if not update:
        return layer
    return layer.model_copy(update=update)

# -----------------------------
# Editor snapshot
# -----------------------------

class EditorState(BaseModel):
    """Read-only snapshot of the store: layers in list order + selection."""
    model_config = ConfigDict(frozen=True)

    layers: Tuple[Layer, ...] = ()
    selected_layer_id: Optional[int] = None
