"""
どこで: `deckbuf.scene` サブパッケージ。
何を: レイヤー/シーンの値型、既定コンバータ、Layer Data Merger を提供。
なぜ: ワイヤ形式（core）と描画直前のシーン解決を分離し、依存を core → scene の一方向に保つため。
"""

from .attributes import Attribute, LayerAttributeSet
from .converter import JsonSceneConverter, SceneConverter
from .layer import Layer, SceneDescription
from .merge import build_attribute_set, merge, process_data_buffer

__all__ = [
    "Attribute",
    "LayerAttributeSet",
    "JsonSceneConverter",
    "SceneConverter",
    "Layer",
    "SceneDescription",
    "build_attribute_set",
    "merge",
    "process_data_buffer",
]
