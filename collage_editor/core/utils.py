from __future__ import annotations
from typing import Any, Optional


def first_image_url(payload: Any) -> Optional[str]:
    """Return `images[0].url` from a provider answer, or None if absent."""
    if not isinstance(payload, dict):
        return None
    images = payload.get("images")
    if not isinstance(images, list) or not images:
        return None
    first = images[0]
    if not isinstance(first, dict):
        return None
    url = first.get("url")
    return url if isinstance(url, str) and url else None

