from __future__ import annotations

"""
Editor core: layer schemas, the layer store, UI adapters and the editor session.
"""

from collage_editor.editor import canvas, schemas, session, store
from collage_editor.editor.schemas import EditorState, ImageLayer, Layer, LayerPatch, TextLayer
from collage_editor.editor.store import LayerStore

__all__ = [
    "canvas",
    "schemas",
    "session",
    "store",
    "EditorState",
    "ImageLayer",
    "Layer",
    "LayerPatch",
    "LayerStore",
    "TextLayer",
]
