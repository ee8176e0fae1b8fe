from __future__ import annotations

import pytest

from deckbuf.core.errors import SceneConversionError
from deckbuf.scene.converter import JsonSceneConverter, SceneConverter
from deckbuf.scene.layer import Layer, SceneDescription


def test_is_scene_converter() -> None:
    assert isinstance(JsonSceneConverter(), SceneConverter)


def test_convert_mapping_and_string_agree() -> None:
    conv = JsonSceneConverter()
    a = conv.convert({"layers": [{"id": "L1", "@@type": "ScatterplotLayer"}], "mapStyle": "x"})
    b = conv.convert('{"layers": [{"id": "L1", "@@type": "ScatterplotLayer"}], "mapStyle": "x"}')
    assert a.layer_ids() == b.layer_ids() == ("L1",)
    assert dict(a.extras) == dict(b.extras) == {"mapStyle": "x"}


def test_convert_without_layers() -> None:
    scene = JsonSceneConverter().convert({"initialViewState": {}})
    assert scene.layers == ()
    assert JsonSceneConverter().convert({"layers": None}).layers == ()


def test_passthrough_of_existing_objects() -> None:
    scene = SceneDescription(layers=[Layer(id="a")])
    conv = JsonSceneConverter()
    assert conv.convert(scene) is scene
    layer = Layer(id="b")
    assert conv.convert({"layers": [layer]}).layers[0] is layer


def test_custom_layers_key() -> None:
    scene = JsonSceneConverter(layers_key="items").convert({"items": [{"id": "z"}], "layers": 1})
    assert scene.layer_ids() == ("z",)
    assert scene.extras["layers"] == 1


@pytest.mark.parametrize(
    "bad",
    [
        "{not json",
        "[1, 2]",
        42,
        {"layers": "abc"},
        {"layers": [1]},
        {"layers": [{"@@type": "ScatterplotLayer"}]},
        {"layers": [{"id": ""}]},
        {"layers": [{"id": 3}]},
    ],
)
def test_convert_rejects(bad) -> None:
    with pytest.raises(SceneConversionError):
        JsonSceneConverter().convert(bad)
