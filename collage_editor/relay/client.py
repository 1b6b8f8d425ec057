from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from collage_editor.app.errors import RelayError
from collage_editor.core.utils import first_image_url
from collage_editor.relay.schemas import ImageSize

logger = logging.getLogger(__name__)

GENERATE_PATH = "/api/generate-image"


class RelayClient:
    """
    Editor-side caller of the relay endpoint.
    """

    def __init__(
        self,
        base_url: str,
        timeout_s: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self._session = session or requests.Session()

    def generate_image(self, *, prompt: str, size: ImageSize) -> Dict[str, Any]:
        """
        POST {prompt, size} to the relay and return its JSON answer.
        Raises RelayError unless the answer is 2xx and carries images[0].url.
        """
        url = self.base_url + GENERATE_PATH
        try:
            resp = self._session.post(url, json={"prompt": prompt, "size": size}, timeout=self.timeout_s)
        except requests.RequestException as e:
            raise RelayError(f"relay unreachable: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise RelayError(f"relay returned non-JSON body (status {resp.status_code})") from e

        if not resp.ok:
            msg = data.get("error") if isinstance(data, dict) else None
            raise RelayError(f"relay returned status {resp.status_code}: {msg or data}")

        if first_image_url(data) is None:
            raise RelayError("relay answer has no images[0].url")

        logger.debug("relay answered status=%s", resp.status_code)
        return data
