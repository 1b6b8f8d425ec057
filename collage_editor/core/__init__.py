from __future__ import annotations

"""
This module provides core functionality for the application.

It includes ID generation and small shared helpers.
"""

from collage_editor.core import ids, utils

__all__ = [
    "ids",
    "utils",
]
