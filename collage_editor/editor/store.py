from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

from collage_editor.app.errors import LayerIndexError
from collage_editor.editor.schemas import BaseLayer, EditorState, LayerPatch, apply_patch

logger = logging.getLogger(__name__)

Listener = Callable[[EditorState], None]


class LayerStore:
    """
    Ordered layer collection + current selection.

    List order is the layer panel order: index 0 is the top of the panel and
    paints on top of everything else. `stack_order` is the paint rank
    (higher paints later). Every mutation notifies subscribers with a fresh
    EditorState snapshot.
    """

    def __init__(self) -> None:
        self._layers: List[BaseLayer] = []
        self._selected_id: Optional[int] = None
        self._listeners: List[Listener] = []

    # ---------- Reads ----------
    @property
    def layers(self) -> Tuple[BaseLayer, ...]:
        return tuple(self._layers)

    @property
    def selected_layer_id(self) -> Optional[int]:
        return self._selected_id

    def __len__(self) -> int:
        return len(self._layers)

    def state(self) -> EditorState:
        return EditorState(layers=tuple(self._layers), selected_layer_id=self._selected_id)

    def index_of(self, layer_id: int) -> Optional[int]:
        for i, layer in enumerate(self._layers):
            if layer.id == layer_id:
                return i
        return None

    def get_layer(self, layer_id: int) -> Optional[BaseLayer]:
        i = self.index_of(layer_id)
        return None if i is None else self._layers[i]

    def selected_layer(self) -> Optional[BaseLayer]:
        if self._selected_id is None:
            return None
        return self.get_layer(self._selected_id)

    def paint_order(self) -> List[BaseLayer]:
        """Layers bottom-to-top, i.e. in the order they should be drawn."""
        return sorted(self._layers, key=lambda l: l.stack_order)

    # ---------- Subscriptions ----------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.state()
        for listener in list(self._listeners):
            listener(snapshot)

    # ---------- Mutations ----------
    def add_layer(self, layer: BaseLayer) -> BaseLayer:
        """
        Insert at the front of the list with the next free rank (the current count).
        Existing ranks are left as they are. The caller guarantees `layer.id` is new.
        """
        placed = layer.model_copy(update={"stack_order": len(self._layers)})
        self._layers.insert(0, placed)
        logger.debug("layer added id=%s stack_order=%s", placed.id, placed.stack_order)
        self._notify()
        return placed

    def update_layer(self, layer_id: int, patch: LayerPatch) -> Optional[BaseLayer]:
        """
        Merge `patch` into the matching layer. Unknown ids are ignored:
        a drag/resize event can race with the layer being deleted.
        """
        i = self.index_of(layer_id)
        if i is None:
            logger.debug("update ignored, no layer id=%s", layer_id)
            return None
        updated = apply_patch(self._layers[i], patch)
        if updated is self._layers[i]:
            return updated
        self._layers[i] = updated
        self._notify()
        return updated

    def select_layer(self, layer_id: Optional[int]) -> None:
        self._selected_id = layer_id
        self._notify()

    def reorder_layers(self, from_index: int, to_index: int) -> None:
        """
        Move one layer within the list, then re-rank everything so that
        position k gets stack_order = count - 1 - k.
        """
        n = len(self._layers)
        if not (0 <= from_index < n) or not (0 <= to_index < n):
            raise LayerIndexError(
                f"reorder indices out of range: from={from_index} to={to_index} size={n}"
            )

        moved = self._layers.pop(from_index)
        self._layers.insert(to_index, moved)
        self._rerank()
        self._notify()

    def delete_selected_layer(self) -> Optional[BaseLayer]:
        """
        Remove the selected layer (if any) and always clear the selection.
        Remaining layers are re-ranked so the next add_layer rank stays free.
        """
        removed: Optional[BaseLayer] = None
        if self._selected_id is not None:
            i = self.index_of(self._selected_id)
            if i is not None:
                removed = self._layers.pop(i)
                self._rerank()
                logger.debug("layer deleted id=%s", removed.id)
        self._selected_id = None
        self._notify()
        return removed

    def _rerank(self) -> None:
        n = len(self._layers)
        self._layers = [
            layer if layer.stack_order == n - 1 - k
            else layer.model_copy(update={"stack_order": n - 1 - k})
            for k, layer in enumerate(self._layers)
        ]
