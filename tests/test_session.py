from __future__ import annotations

import logging

import pytest

from collage_editor.app.errors import RelayError
from collage_editor.editor import canvas
from collage_editor.editor.schemas import ImageLayer, TextLayer
from collage_editor.editor.session import EditorSession
from collage_editor.editor.store import LayerStore


class FakeGenerator:
    def __init__(self, answers=None, error=None):
        self.answers = list(answers or [])
        self.error = error
        self.calls = []

    def generate_image(self, *, prompt, size):
        self.calls.append((prompt, size))
        if self.error is not None:
            raise self.error
        return self.answers.pop(0)


def answer(url: str):
    return {"images": [{"url": url, "width": 1024, "height": 1024}], "seed": 1}


def counter(start: int = 100):
    state = {"n": start}

    def next_id():
        state["n"] += 1
        return state["n"]

    return next_id


@pytest.fixture
def session():
    return EditorSession(FakeGenerator([answer("https://x/a.png"), answer("https://x/b.png")]), id_source=counter())


def test_generate_adds_image_layer_on_top(session):
    first = session.generate("a cat", "portrait_4_3")
    second = session.generate("a dog")

    assert session.generator.calls == [("a cat", "portrait_4_3"), ("a dog", "square_hd")]
    assert isinstance(first, ImageLayer)
    assert (first.id, first.source, first.label) == (101, "https://x/a.png", "Generated Image 1")
    assert (first.width, first.height, first.x, first.y) == (200, 200, 0, 0)
    assert second.label == "Generated Image 2"
    assert [l.id for l in session.store.layers] == [102, 101]
    assert session.store.get_layer(102).stack_order == 1
    assert session.loading is False
    assert session.last_error is None


def test_relay_error_leaves_store_untouched(caplog):
    s = EditorSession(FakeGenerator(error=RelayError("relay returned status 500: API key not found")))
    with caplog.at_level(logging.ERROR):
        assert s.generate("a cat") is None
    assert len(s.store) == 0
    assert s.loading is False
    assert "API key not found" in s.last_error
    assert "image generation failed" in caplog.text
    assert caplog.records[-1].exc_info[0] is RelayError


def test_answer_without_image_is_reported(session):
    token = session.begin_generation()
    assert session.complete_generation(token, {"detail": "nsfw"}) is None
    assert len(session.store) == 0
    assert session.last_error
    assert session.loading is False


def test_loading_flag_spans_the_request(session):
    token = session.begin_generation()
    assert session.loading is True
    session.complete_generation(token, answer("https://x/c.png"))
    assert session.loading is False


def test_stale_answer_is_discarded(session):
    old = session.begin_generation()
    new = session.begin_generation()

    assert session.complete_generation(old, answer("https://x/old.png")) is None
    assert len(session.store) == 0
    assert session.loading is True

    layer = session.complete_generation(new, answer("https://x/new.png"))
    assert layer.source == "https://x/new.png"
    assert session.loading is False


def test_stale_failure_is_ignored(session):
    old = session.begin_generation()
    session.begin_generation()
    session.fail_generation(old, RelayError("boom"))
    assert session.loading is True
    assert session.last_error is None


def test_completed_token_cannot_be_replayed(session):
    token = session.begin_generation()
    session.complete_generation(token, answer("https://x/1.png"))
    assert session.complete_generation(token, answer("https://x/2.png")) is None
    assert len(session.store) == 1


def test_add_text_layer(session):
    session.generate("bg")
    layer = session.add_text_layer("Hello", x=10, y=-4)
    assert isinstance(layer, TextLayer)
    assert layer.text == "Hello"
    assert layer.label == "Text 2"
    assert (layer.x, layer.y) == (10, -4)
    assert session.store.layers[0] is layer
    assert layer.stack_order == 1


def test_default_id_source_gives_unique_ids():
    s = EditorSession(FakeGenerator())
    ids = [s.add_text_layer(str(i)).id for i in range(50)]
    assert len(set(ids)) == 50


def test_injected_empty_store_is_used():
    shared = LayerStore()
    s = EditorSession(FakeGenerator([answer("https://x/a.png")]), store=shared, id_source=counter())
    assert s.store is shared

    s.generate("a cat")
    s.add_text_layer("Hello")

    rows = canvas.layer_list_items(shared)
    assert [(r["id"], r["caption"]) for r in rows] == [(102, "Text"), (101, "Image")]


def test_injected_id_source_is_used():
    s = EditorSession(FakeGenerator(), id_source=lambda: 0)
    assert s.add_text_layer("zero").id == 0
