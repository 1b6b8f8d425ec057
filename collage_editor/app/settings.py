from __future__ import annotations
import os
from dataclasses import dataclass

from collage_editor.app.errors import ConfigError

DEFAULT_FAL_ENDPOINT = "https://fal.run/fal-ai/fast-lightning-sdxl"
DEFAULT_RELAY_URL = "http://127.0.0.1:8000"

def _get_float(name: str) -> float | None:
    v = os.getenv(name, "").strip()
    if v == "":
        return None
    try:
        return float(v)
    except ValueError as e:
        raise ConfigError(f"Invalid number in env var {name}: {v!r}") from e

def _get_int(name: str, default: int) -> int:
    v = os.getenv(name, "").strip()
    if v == "":
        return default
    try:
        return int(v)
    except ValueError as e:
        raise ConfigError(f"Invalid integer in env var {name}: {v!r}") from e

@dataclass(frozen=True)
class Settings:
    # fal.ai provider (key is checked per request, not at startup)
    fal_api_key: str | None
    fal_endpoint: str
    fal_timeout_s: float | None

    # Editor side
    relay_url: str

    # Server
    relay_host: str
    relay_port: int
    log_level: str

def load_settings() -> Settings:
    return Settings(
        fal_api_key=os.getenv("FAL_AI_API_KEY") or None,
        fal_endpoint=os.getenv("FAL_AI_ENDPOINT", DEFAULT_FAL_ENDPOINT),
        fal_timeout_s=_get_float("FAL_AI_TIMEOUT_S"),
        relay_url=os.getenv("RELAY_URL", DEFAULT_RELAY_URL).rstrip("/"),
        relay_host=os.getenv("RELAY_HOST", "127.0.0.1"),
        relay_port=_get_int("RELAY_PORT", 8000),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
