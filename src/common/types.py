"""
どこで: `common` の型定義。
何を: ワイヤ表現や JSON 風ツリーを表す軽量エイリアス（組込みジェネリックで記述）。
なぜ: 依存の少ない場所に配置して循環と分散定義を避けるため。
"""

from typing import Any, Mapping, Union

BytesLike = Union[bytes, bytearray, memoryview]
JsonMapping = Mapping[str, Any]
Shape = tuple[int, Union[int, None]]


__all__ = ["BytesLike", "JsonMapping", "Shape"]
