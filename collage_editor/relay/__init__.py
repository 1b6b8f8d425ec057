from __future__ import annotations

"""
Generation relay: provider client, HTTP endpoint and the editor-side client.
"""

from collage_editor.relay import api, client, fal_client, schemas

__all__ = [
    "api",
    "client",
    "fal_client",
    "schemas",
]
