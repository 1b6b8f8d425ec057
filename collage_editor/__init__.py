from __future__ import annotations

"""
Collage editor: layer store + image generation relay.
"""

__version__ = "0.1.0"
