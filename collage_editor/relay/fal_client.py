from __future__ import annotations

import logging
import os
from typing import Any, Optional

import requests

from collage_editor.app.errors import ConfigError, ProviderError
from collage_editor.app.settings import DEFAULT_FAL_ENDPOINT
from collage_editor.relay.schemas import ImageSize, ProviderReply

logger = logging.getLogger(__name__)


class FalImageClient:
    """
    Wrapper around the fal.ai text-to-image HTTP endpoint.
    One POST per call; the provider's status and JSON come back untouched.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        endpoint: Optional[str] = None,
        timeout_s: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key or os.getenv("FAL_AI_API_KEY")
        if not self.api_key:
            raise ConfigError("FAL_AI_API_KEY must be set")
        self.endpoint = endpoint or os.getenv("FAL_AI_ENDPOINT", DEFAULT_FAL_ENDPOINT)
        self.timeout_s = timeout_s
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Key {self.api_key}",
                "Content-Type": "application/json",
            }
        )

    def generate_image(self, *, prompt: str, size: ImageSize) -> ProviderReply:
        """
        Returns ProviderReply(status_code, body).
        Raises ProviderError only when no HTTP answer was received at all.
        """
        payload = {"prompt": prompt, "image_size": size}
        logger.info("fal request endpoint=%s size=%s", self.endpoint, size)
        try:
            resp = self._session.post(self.endpoint, json=payload, timeout=self.timeout_s)
        except requests.RequestException as e:
            raise ProviderError(f"fal.ai request failed: {e}") from e

        logger.info("fal response status=%s", resp.status_code)
        return ProviderReply(status_code=resp.status_code, body=_json_body(resp))


def _json_body(resp: requests.Response) -> Any:
    # Provider errors are not always JSON (e.g. gateway HTML pages)
    try:
        data = resp.json()
    except ValueError:
        return {"error": resp.text or resp.reason or f"HTTP {resp.status_code}"}
    return data
