"""
deckbuf — 列指向の数値データを描画レイヤー用のバイナリ属性へ組み立てる。

使用例:
    from deckbuf import DataBufferSession

    session = DataBufferSession()
    session.ingest({"payload": columns})  # ウィジェット経由で届いたカラム記述子列
    scene = session.resolve(json_props)   # 各レイヤーの data が LayerAttributeSet になる
"""

from .core import (
    SUPPORTED_DTYPES,
    DataBuffer,
    DeckbufError,
    MalformedPayloadError,
    MatrixColumn,
    SceneConversionError,
    ShapeMismatchError,
    UnsupportedTypeError,
    deserialize,
    deserialize_matrix,
)
from .runtime import DataBufferSession
from .scene import (
    Attribute,
    JsonSceneConverter,
    Layer,
    LayerAttributeSet,
    SceneConverter,
    SceneDescription,
    merge,
    process_data_buffer,
)

__version__ = "0.1.0"

__all__ = [
    "SUPPORTED_DTYPES",
    "DataBuffer",
    "MatrixColumn",
    "deserialize",
    "deserialize_matrix",
    "Attribute",
    "LayerAttributeSet",
    "Layer",
    "SceneDescription",
    "SceneConverter",
    "JsonSceneConverter",
    "merge",
    "process_data_buffer",
    "DataBufferSession",
    "DeckbufError",
    "MalformedPayloadError",
    "SceneConversionError",
    "ShapeMismatchError",
    "UnsupportedTypeError",
]
