"""
どこで: `deckbuf.core.dtypes`
何を: ワイヤ上の dtype 文字列 → 要素型（バイト幅・復号関数）の不変テーブル。
なぜ: 条件分岐の連鎖をやめ、型の追加を 1 行、検索失敗を 1 経路（`UnsupportedTypeError`）にするため。

要点:
- ワイヤ上のバイト列は常にリトルエンディアンの密な並びとして解釈する。
- 復号結果はネイティブバイト順の所有配列（元バイト列を参照しない）で、読み取り専用。
- `int64`/`uint64` は 64bit 整数配列のまま保持する（浮動小数へ落とさない）。
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

import numpy as np

from common.types import BytesLike

from .errors import MalformedPayloadError, ShapeMismatchError, UnsupportedTypeError


@dataclass(frozen=True, slots=True)
class ElementType:
    """1 つの dtype コードに対応する要素型記述。"""

    name: str
    native: np.dtype  # 復号後の配列 dtype（ネイティブ順）
    wire: np.dtype  # ワイヤ上の dtype（リトルエンディアン）

    @classmethod
    def of(cls, name: str) -> "ElementType":
        native = np.dtype(name)
        return cls(name=name, native=native, wire=native.newbyteorder("<"))

    @property
    def itemsize(self) -> int:
        return int(self.native.itemsize)

    def decode(self, raw: BytesLike) -> np.ndarray:
        """生バイト列を 1 次元配列へ復号する。

        Parameters
        ----------
        raw : bytes | bytearray | memoryview
            バッファプロトコルを満たす連続メモリ。

        Returns
        -------
        np.ndarray
            `native` dtype の 1 次元・読み取り専用・所有配列。

        Raises
        ------
        MalformedPayloadError
            `raw` がバッファプロトコルを満たさない、または非連続の場合。
        ShapeMismatchError
            バイト長が要素幅の倍数でない場合。
        """
        try:
            view = memoryview(raw).cast("B")
        except TypeError as e:
            raise MalformedPayloadError(
                f"matrix data must be a contiguous bytes-like object, got {type(raw).__name__}"
            ) from e
        if view.nbytes % self.itemsize != 0:
            raise ShapeMismatchError(
                f"byte length {view.nbytes} is not a multiple of {self.name} width {self.itemsize}"
            )
        # astype(copy=True) で常に新しい配列を確保し、元のバイト列を解放可能にする
        out = np.frombuffer(view, dtype=self.wire).astype(self.native, copy=True)
        out.setflags(write=False)
        return out


_NAMES = (
    "int8",
    "uint8",
    "int16",
    "uint16",
    "int32",
    "uint32",
    "int64",
    "uint64",
    "float32",
    "float64",
)

DTYPE_TABLE: Mapping[str, ElementType] = MappingProxyType(
    {name: ElementType.of(name) for name in _NAMES}
)

SUPPORTED_DTYPES: tuple[str, ...] = tuple(DTYPE_TABLE)


def resolve_dtype(code: object) -> ElementType:
    """dtype コードを要素型へ解決する（大文字小文字は区別する）。"""
    if isinstance(code, str):
        et = DTYPE_TABLE.get(code)
        if et is not None:
            return et
    raise UnsupportedTypeError(code)


__all__ = ["ElementType", "DTYPE_TABLE", "SUPPORTED_DTYPES", "resolve_dtype"]
