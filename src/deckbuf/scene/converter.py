"""
どこで: `deckbuf.scene.converter`
何を: JSON シーン記述 → `SceneDescription` 変換のインタフェースと既定実装。
なぜ: 宣言的シーンの解釈は外部コンバータの責務だが、マージ前に「レイヤー列」を得る境界が必要なため。
      既定実装は構造（layers 配列と各レイヤーの id）のみを検証し、レイヤー種別の解釈は行わない。
"""

from __future__ import annotations

import json
from typing import Any, Mapping, Protocol, runtime_checkable

from deckbuf.core.errors import SceneConversionError

from .layer import Layer, SceneDescription


@runtime_checkable
class SceneConverter(Protocol):
    def convert(self, json_props: Any) -> SceneDescription: ...


class JsonSceneConverter:
    """JSON 文字列/辞書を `SceneDescription` に変換する最小コンバータ。

    - `layers` 以外のトップレベルキーは `extras` としてそのまま通す。
    - `layers` が無い場合はレイヤー 0 枚として扱う。
    - 各レイヤーは文字列 `id` を持つ辞書であること（違反は `SceneConversionError`）。
    """

    def __init__(self, layers_key: str = "layers") -> None:
        self._layers_key = layers_key

    def convert(self, json_props: Any) -> SceneDescription:
        if isinstance(json_props, SceneDescription):
            return json_props
        if isinstance(json_props, (str, bytes, bytearray)):
            try:
                json_props = json.loads(json_props)
            except json.JSONDecodeError as e:
                raise SceneConversionError(f"scene description is not valid JSON: {e}") from e
        if not isinstance(json_props, Mapping):
            raise SceneConversionError(
                f"scene description must be a JSON object, got {type(json_props).__name__}"
            )

        raw_layers = json_props.get(self._layers_key, [])
        if raw_layers is None:
            raw_layers = []
        if not isinstance(raw_layers, (list, tuple)):
            raise SceneConversionError(f"'{self._layers_key}' must be a list")

        layers = tuple(self._convert_layer(i, obj) for i, obj in enumerate(raw_layers))
        extras = {k: v for k, v in json_props.items() if k != self._layers_key}
        return SceneDescription(layers=layers, extras=extras)

    def _convert_layer(self, index: int, obj: Any) -> Layer:
        if isinstance(obj, Layer):
            return obj
        if not isinstance(obj, Mapping):
            raise SceneConversionError(f"layers[{index}] must be an object")
        layer_id = obj.get("id")
        if not isinstance(layer_id, str) or not layer_id:
            raise SceneConversionError(f"layers[{index}] has no string 'id'")
        return Layer.from_json(obj)


__all__ = ["SceneConverter", "JsonSceneConverter"]
