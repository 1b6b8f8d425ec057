from __future__ import annotations

from typing import Optional
from dotenv import load_dotenv

load_dotenv()  # Load .env file

import uvicorn
from fastapi import FastAPI

from collage_editor.app.settings import load_settings
from collage_editor.app.logging import setup_logging
from collage_editor.editor.schemas import BaseLayer
from collage_editor.editor.session import EditorSession
from collage_editor.relay.api import create_app
from collage_editor.relay.client import RelayClient
from collage_editor.relay.schemas import DEFAULT_IMAGE_SIZE, ImageSize


def build_app() -> FastAPI:
    """
    Relay app factory for uvicorn (`--factory`).
    """
    s = load_settings()
    setup_logging(s.log_level)
    return create_app(s)


def new_session() -> EditorSession:
    """Editor session talking to the relay at RELAY_URL."""
    s = load_settings()
    return EditorSession(RelayClient(s.relay_url, timeout_s=s.fal_timeout_s))


def run_generation(
    *,
    prompt: str,
    size: ImageSize = DEFAULT_IMAGE_SIZE,
    session: Optional[EditorSession] = None,
) -> Optional[BaseLayer]:
    """
    Minimal callable entrypoint:
    - create an editor session if none is given
    - ask the relay for one image
    - return the layer that was added (None on failure, see session.last_error)
    """
    setup_logging(load_settings().log_level)
    session = session or new_session()
    return session.generate(prompt, size)


def main() -> None:
    s = load_settings()
    setup_logging(s.log_level)
    uvicorn.run(create_app(s), host=s.relay_host, port=s.relay_port, log_config=None)


if __name__ == "__main__":
    main()
