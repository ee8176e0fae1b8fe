"""
どこで: `deckbuf.core.column`
何を: 1 カラム分の復号済み行列 `MatrixColumn` と shape 正規化ヘルパ。
なぜ: レイヤー ID/アクセサ名/要素配列/shape を 1 つの不変値にまとめ、幅の既定（1）を 1 か所で決めるため。

データモデル（不変条件）:
- `elements`: 1 次元・読み取り専用の所有配列（行優先で平坦化された行列）。
- `shape`: `(rows, width)`。`width` はワイヤ上で省略され得る（None）。
- `elements.size == rows * (width or 1)` を期待値とする（検証は deserializer 側）。
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

from common.types import Shape

from .errors import ShapeMismatchError


def normalize_shape(shape: Sequence[Any]) -> Shape:
    """ワイヤ上の shape（`[rows]` / `[rows, width]`）を `(rows, width|None)` に正規化する。

    - 各要素は非負の整数（`operator.index` を満たすもの）。bool は拒否。
    - `width` の None は「省略」と同じ扱い。
    - それ以外は `ShapeMismatchError`。
    """
    if isinstance(shape, (str, bytes)) or not isinstance(shape, Sequence):
        raise ShapeMismatchError(f"shape must be a sequence of 1 or 2 integers, got {shape!r}")
    if len(shape) not in (1, 2):
        raise ShapeMismatchError(f"shape must have 1 or 2 dimensions, got {list(shape)!r}")

    def _dim(v: Any) -> int:
        if isinstance(v, bool):
            raise ShapeMismatchError(f"invalid shape dimension: {v!r}")
        try:
            n = operator.index(v)
        except TypeError as e:
            raise ShapeMismatchError(f"invalid shape dimension: {v!r}") from e
        if n < 0:
            raise ShapeMismatchError(f"shape dimensions must be non-negative, got {n}")
        return n

    rows = _dim(shape[0])
    if len(shape) == 1 or shape[1] is None:
        return rows, None
    return rows, _dim(shape[1])


@dataclass(frozen=True, slots=True, eq=False)
class MatrixColumn:
    """`DataBuffer` に格納される 1 アクセサ分の行列。"""

    layer_id: str
    accessor_name: str
    column_name: str | None
    elements: np.ndarray
    shape: Shape

    @property
    def rows(self) -> int:
        return int(self.shape[0])

    @property
    def width(self) -> int:
        """要素幅（shape[1] が省略/0 の場合は 1）。"""
        return int(self.shape[1] or 1)

    @property
    def expected_size(self) -> int:
        return self.rows * self.width

    @property
    def dtype(self) -> np.dtype:
        return self.elements.dtype

    @property
    def nbytes(self) -> int:
        return int(self.elements.nbytes)

    @property
    def is_empty(self) -> bool:
        return self.elements.size == 0

    @property
    def is_consistent(self) -> bool:
        return self.elements.size == self.expected_size

    def as_matrix(self) -> np.ndarray:
        """`(rows, width)` の読み取り専用ビューを返す（要素数不一致なら ShapeMismatchError）。"""
        if not self.is_consistent:
            raise ShapeMismatchError(
                f"{self.layer_id}.{self.accessor_name}: {self.elements.size} elements "
                f"cannot be viewed as {self.rows}x{self.width}"
            )
        view = self.elements.reshape(self.rows, self.width)
        view.setflags(write=False)
        return view

    def describe(self) -> dict[str, Any]:
        """検査/デバッグ用の JSON 互換サマリ。"""
        return {
            "column_name": self.column_name,
            "dtype": self.dtype.name,
            "shape": [self.shape[0], self.shape[1]] if self.shape[1] is not None else [self.shape[0]],
            "size": int(self.elements.size),
            "nbytes": self.nbytes,
        }

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return (
            f"MatrixColumn({self.layer_id!r}, {self.accessor_name!r}, "
            f"dtype={self.dtype.name}, shape={self.shape})"
        )


__all__ = ["MatrixColumn", "normalize_shape"]
