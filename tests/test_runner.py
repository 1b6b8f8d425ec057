from __future__ import annotations

import logging

import pytest
from fastapi import FastAPI

from collage_editor.api_stub import runner
from collage_editor.editor.session import EditorSession
from collage_editor.relay.client import RelayClient


@pytest.fixture(autouse=True)
def keep_root_logger():
    root = logging.getLogger()
    saved = (list(root.handlers), root.level)
    yield
    root.handlers[:] = saved[0]
    root.setLevel(saved[1])


def test_build_app_uses_env_settings(monkeypatch):
    monkeypatch.setenv("FAL_AI_API_KEY", "k")
    app = runner.build_app()
    assert isinstance(app, FastAPI)
    assert app.state.settings.fal_api_key == "k"
    assert "/api/generate-image" in {r.path for r in app.routes}


def test_new_session_points_at_relay_url(monkeypatch):
    monkeypatch.setenv("RELAY_URL", "http://relay.internal:9000/")
    session = runner.new_session()
    assert isinstance(session.generator, RelayClient)
    assert session.generator.base_url == "http://relay.internal:9000"


def test_run_generation_with_given_session():
    class Gen:
        def generate_image(self, *, prompt, size):
            return {"images": [{"url": f"https://x/{size}.png"}]}

    session = EditorSession(Gen())
    layer = runner.run_generation(prompt="p", size="landscape_4_3", session=session)
    assert layer.source == "https://x/landscape_4_3.png"
    assert session.store.layers == (layer,)


def test_main_serves_relay(monkeypatch):
    monkeypatch.setenv("RELAY_PORT", "8123")
    served = {}

    def fake_run(app, host, port, log_config):
        served.update(app=app, host=host, port=port)

    monkeypatch.setattr(runner.uvicorn, "run", fake_run)
    runner.main()
    assert isinstance(served["app"], FastAPI)
    assert (served["host"], served["port"]) == ("127.0.0.1", 8123)
