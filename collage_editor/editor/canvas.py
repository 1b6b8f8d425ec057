from __future__ import annotations

"""
UI event adapters for the layer panel and the canvas.

Each handler maps one user interaction onto a LayerStore operation; the
read helpers describe what the panel and canvas should draw.
"""

from typing import Any, Dict, List, Optional

from collage_editor.editor.schemas import BaseLayer, ImageLayer, LayerPatch, TextLayer
from collage_editor.editor.store import LayerStore

DELETE_KEYS = {"Delete", "delete"}


def _describe(layer: BaseLayer) -> Dict[str, Any]:
    if isinstance(layer, ImageLayer):
        return {"icon": "image", "caption": "Image", "thumbnail": layer.source}
    if isinstance(layer, TextLayer):
        return {"icon": "type", "caption": "Text", "thumbnail": None}
    raise TypeError(f"Unknown layer type: {type(layer).__name__}")


# -----------------------------
# Layer panel
# -----------------------------

def layer_list_items(store: LayerStore) -> List[Dict[str, Any]]:
    """Rows for the layer panel, top row first."""
    selected = store.selected_layer_id
    rows = []
    for index, layer in enumerate(store.layers):
        row = {"id": layer.id, "index": index, "label": layer.label, "selected": layer.id == selected}
        row.update(_describe(layer))
        rows.append(row)
    return rows


def on_drag_end(store: LayerStore, source_index: int, destination_index: Optional[int]) -> bool:
    """Drop in the layer panel. Returns False when dropped outside the list."""
    if destination_index is None:
        return False
    store.reorder_layers(source_index, destination_index)
    return True


def on_layer_click(store: LayerStore, layer_id: int) -> None:
    store.select_layer(layer_id)


# -----------------------------
# Canvas
# -----------------------------

def canvas_items(store: LayerStore) -> List[Dict[str, Any]]:
    """Positioned elements bottom-to-top. Only the selected one can move or resize."""
    selected = store.selected_layer_id
    items = []
    for layer in store.paint_order():
        active = layer.id == selected
        item = {
            "id": layer.id,
            "kind": layer.kind,
            "x": layer.x,
            "y": layer.y,
            "width": layer.width,
            "height": layer.height,
            "z_index": layer.stack_order,
            "selected": active,
            "draggable": active,
            "resizable": active,
        }
        if isinstance(layer, ImageLayer):
            item["src"] = layer.source
            item["alt"] = layer.label
        elif isinstance(layer, TextLayer):
            item["text"] = layer.text
        else:
            raise TypeError(f"Unknown layer type: {type(layer).__name__}")
        items.append(item)
    return items


def on_background_click(store: LayerStore, target_is_canvas: bool) -> None:
    # clicks bubbling up from a layer must not clear the selection
    if target_is_canvas:
        store.select_layer(None)


def on_drag_stop(store: LayerStore, layer_id: int, x: float, y: float) -> Optional[BaseLayer]:
    return store.update_layer(layer_id, LayerPatch(x=x, y=y))


def on_resize(
    store: LayerStore,
    layer_id: int,
    width: float,
    height: float,
    x: float,
    y: float,
) -> Optional[BaseLayer]:
    return store.update_layer(layer_id, LayerPatch(width=width, height=height, x=x, y=y))


def on_key(store: LayerStore, key: str) -> bool:
    """Keyboard shortcut handler. Returns True when the key was handled."""
    if key in DELETE_KEYS:
        store.delete_selected_layer()
        return True
    return False
