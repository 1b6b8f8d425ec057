from __future__ import annotations

import logging
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from collage_editor import __version__
from collage_editor.app.errors import ProviderError
from collage_editor.app.settings import Settings, load_settings
from collage_editor.relay.fal_client import FalImageClient
from collage_editor.relay.schemas import MISSING_KEY_ERROR, GenerateImageRequest

logger = logging.getLogger(__name__)

ClientFactory = Callable[[Settings], FalImageClient]


def _default_client(settings: Settings) -> FalImageClient:
    return FalImageClient(
        api_key=settings.fal_api_key,
        endpoint=settings.fal_endpoint,
        timeout_s=settings.fal_timeout_s,
    )


def create_app(
    settings: Optional[Settings] = None,
    client_factory: ClientFactory = _default_client,
) -> FastAPI:
    """
    Build the relay app. The credential is checked per request so a missing key
    fails that request only and never the process.
    """
    if settings is None:
        settings = load_settings()
    app = FastAPI(title="collage-editor relay", version=__version__)
    app.state.settings = settings
    # one provider client shared by all requests
    app.state.fal_client = client_factory(settings) if settings.fal_api_key else None

    @app.post("/api/generate-image")
    def generate_image(req: GenerateImageRequest):
        if not settings.fal_api_key:
            logger.warning("generate-image rejected: FAL_AI_API_KEY not set")
            return JSONResponse({"error": MISSING_KEY_ERROR}, status_code=500)

        try:
            reply = app.state.fal_client.generate_image(prompt=req.prompt, size=req.size)
        except ProviderError as e:
            logger.exception("generate-image provider call failed")
            return JSONResponse({"error": str(e)}, status_code=502)

        if not reply.ok:
            logger.warning("provider returned status=%s", reply.status_code)
        return JSONResponse(reply.body, status_code=reply.status_code)

    return app
