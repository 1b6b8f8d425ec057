from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Protocol

from collage_editor.app.errors import AppError
from collage_editor.core.ids import LayerIdSource, new_request_token
from collage_editor.core.utils import first_image_url
from collage_editor.editor.schemas import (
    DEFAULT_LAYER_SIZE,
    BaseLayer,
    ImageLayer,
    TextLayer,
)
from collage_editor.editor.store import LayerStore
from collage_editor.relay.schemas import DEFAULT_IMAGE_SIZE, ImageSize

logger = logging.getLogger(__name__)


class ImageGenerator(Protocol):
    def generate_image(self, *, prompt: str, size: ImageSize) -> Dict[str, Any]: ...


class EditorSession:
    """
    One editor: a LayerStore plus the generation form state.

    Generation is split into begin/complete/fail so a UI can run the relay call
    off the event loop and apply the answer later. Only the most recent request
    may add a layer; answers for older tokens are dropped.
    """

    def __init__(
        self,
        generator: ImageGenerator,
        store: Optional[LayerStore] = None,
        id_source: Optional[Callable[[], int]] = None,
    ):
        self.generator = generator
        self.store = store if store is not None else LayerStore()
        self.new_layer_id = id_source if id_source is not None else LayerIdSource()
        self.loading = False
        self.last_error: Optional[str] = None
        self._pending_token: Optional[int] = None

    # ---------- Generation ----------
    def begin_generation(self) -> int:
        token = new_request_token()
        self._pending_token = token
        self.loading = True
        self.last_error = None
        return token

    def is_current(self, token: int) -> bool:
        return token == self._pending_token

    def complete_generation(self, token: int, response: Dict[str, Any]) -> Optional[BaseLayer]:
        if not self.is_current(token):
            logger.info("discarding stale generation result token=%s", token)
            return None

        self._finish()
        url = first_image_url(response)
        if url is None:
            self.last_error = "Generation answer had no image"
            logger.warning("generation answer without images[0].url")
            return None

        layer = ImageLayer(
            id=self.new_layer_id(),
            source=url,
            label=f"Generated Image {len(self.store) + 1}",
            width=DEFAULT_LAYER_SIZE,
            height=DEFAULT_LAYER_SIZE,
            x=0,
            y=0,
        )
        return self.store.add_layer(layer)

    def fail_generation(self, token: int, error: BaseException) -> None:
        if not self.is_current(token):
            return
        self._finish()
        self.last_error = str(error) or type(error).__name__
        logger.error("image generation failed: %s", self.last_error, exc_info=error)

    def generate(self, prompt: str, size: ImageSize = DEFAULT_IMAGE_SIZE) -> Optional[BaseLayer]:
        """
        Run one generation end to end. Errors leave the store untouched
        and end up in `last_error`.
        """
        token = self.begin_generation()
        try:
            response = self.generator.generate_image(prompt=prompt, size=size)
        except AppError as e:
            self.fail_generation(token, e)
            return None
        return self.complete_generation(token, response)

    def _finish(self) -> None:
        self._pending_token = None
        self.loading = False

    # ---------- Text ----------
    def add_text_layer(
        self,
        text: str,
        *,
        label: Optional[str] = None,
        width: float = DEFAULT_LAYER_SIZE,
        height: float = DEFAULT_LAYER_SIZE / 4,
        x: float = 0,
        y: float = 0,
    ) -> BaseLayer:
        layer = TextLayer(
            id=self.new_layer_id(),
            text=text,
            label=label or f"Text {len(self.store) + 1}",
            width=width,
            height=height,
            x=x,
            y=y,
        )
        return self.store.add_layer(layer)
