"""
どこで: `deckbuf.scene.merge`（Layer Data Merger）。
何を: `DataBuffer` とシーン記述を突き合わせ、各レイヤーの data を `LayerAttributeSet` に置き換える。
なぜ: 描画エンジンへ渡す直前に、宣言的なプレースホルダを実データへ解決するため。

方針:
- 入力レイヤーは変更しない（`Layer.with_data` による複製）。順序/枚数はそのまま。
- バッファに無いレイヤーは空の属性集合を受け取る（エラーにしない）。
- コンバータの失敗はそのまま伝播させる。
"""

from __future__ import annotations

import logging
from typing import Any

from deckbuf.core.buffer import DataBuffer

from .attributes import LayerAttributeSet
from .converter import JsonSceneConverter, SceneConverter
from .layer import SceneDescription

logger = logging.getLogger(__name__)


def build_attribute_set(data_buffer: DataBuffer, layer_id: str) -> LayerAttributeSet:
    """レイヤー 1 枚ぶんの属性集合を構築する。"""
    columns = data_buffer.layer(layer_id)
    if not columns:
        logger.debug("no binary data for layer %s; using empty attribute set", layer_id)
    return LayerAttributeSet.from_columns(columns)


def merge(data_buffer: DataBuffer, scene: SceneDescription) -> SceneDescription:
    """シーン内の全レイヤーの data を属性集合へ差し替えた新しいシーンを返す。"""
    if data_buffer is None:
        raise TypeError("merge() requires a DataBuffer; skip merging until a payload has arrived")
    resolved = [
        layer.with_data(build_attribute_set(data_buffer, layer.id)) for layer in scene.layers
    ]
    return scene.with_layers(resolved)


def process_data_buffer(
    data_buffer: DataBuffer,
    json_props: Any,
    converter: SceneConverter | None = None,
) -> SceneDescription:
    """JSON シーン記述を変換し、`merge` でバイナリデータを結合する。"""
    scene = (converter or JsonSceneConverter()).convert(json_props)
    return merge(data_buffer, scene)


__all__ = ["build_attribute_set", "merge", "process_data_buffer"]
