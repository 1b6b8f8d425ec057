import pytest

from collage_editor.editor.store import LayerStore
from tests.factories import image

_ENV_VARS = (
    "FAL_AI_API_KEY",
    "FAL_AI_ENDPOINT",
    "FAL_AI_TIMEOUT_S",
    "RELAY_URL",
    "RELAY_HOST",
    "RELAY_PORT",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    """Tests never see the developer's real credentials."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def store() -> LayerStore:
    return LayerStore()


@pytest.fixture
def filled_store(store: LayerStore) -> LayerStore:
    """Three layers added as 1, 2, 3 -> list order [3, 2, 1]."""
    for i in (1, 2, 3):
        store.add_layer(image(i))
    return store
