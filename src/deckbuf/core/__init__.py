"""
どこで: `deckbuf.core` サブパッケージ。
何を: dtype 表・MatrixColumn・DataBuffer・Matrix Deserializer を提供。
なぜ: ワイヤ形式の解釈をシーン/セッション層から切り離し、依存の無い葉として保つため。
"""

from .buffer import DataBuffer
from .column import MatrixColumn, normalize_shape
from .deserializer import decode_column, deserialize, deserialize_matrix
from .dtypes import DTYPE_TABLE, SUPPORTED_DTYPES, ElementType, resolve_dtype
from .errors import (
    DeckbufError,
    MalformedPayloadError,
    SceneConversionError,
    ShapeMismatchError,
    UnsupportedTypeError,
)

__all__ = [
    "DataBuffer",
    "MatrixColumn",
    "normalize_shape",
    "decode_column",
    "deserialize",
    "deserialize_matrix",
    "DTYPE_TABLE",
    "SUPPORTED_DTYPES",
    "ElementType",
    "resolve_dtype",
    "DeckbufError",
    "MalformedPayloadError",
    "SceneConversionError",
    "ShapeMismatchError",
    "UnsupportedTypeError",
]
