"""
どこで: `deckbuf.core.buffer`
何を: レイヤー ID → アクセサ名 → `MatrixColumn` の不変マッピング `DataBuffer`。
なぜ: ペイロード到着ごとに丸ごと作り直し、参照の差し替えだけで更新を公開できるようにするため。
      入れ子の就地更新を禁止し、読み手から部分更新が見えないことを型で保証する。
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping

from .column import MatrixColumn

_EMPTY: Mapping[str, MatrixColumn] = MappingProxyType({})


class DataBuffer(Mapping[str, Mapping[str, MatrixColumn]]):
    """構築後は変更できない 2 段マッピング。

    - `buffer[layer_id][accessor]` で `MatrixColumn` を参照する（Mapping プロトコル）。
    - 各段は `MappingProxyType` で包まれ、書き込みは `TypeError` になる。
    - レイヤー/アクセサの順序は構築時の挿入順を保つ。
    """

    __slots__ = ("_layers",)

    def __init__(self, layers: Mapping[str, Mapping[str, MatrixColumn]] | None = None) -> None:
        frozen = {
            str(layer_id): MappingProxyType(dict(columns))
            for layer_id, columns in (layers or {}).items()
        }
        self._layers: Mapping[str, Mapping[str, MatrixColumn]] = MappingProxyType(frozen)

    @classmethod
    def from_columns(cls, columns: Iterable[MatrixColumn]) -> "DataBuffer":
        """カラム列から構築する（同一 `(layer_id, accessor_name)` は後勝ち）。"""
        layers: dict[str, dict[str, MatrixColumn]] = {}
        for col in columns:
            layers.setdefault(col.layer_id, {})[col.accessor_name] = col
        return cls(layers)

    # ── Mapping ────────────────────
    def __getitem__(self, layer_id: str) -> Mapping[str, MatrixColumn]:
        return self._layers[layer_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._layers)

    def __len__(self) -> int:
        return len(self._layers)

    # ── 参照ヘルパ ──────────────────
    def layer(self, layer_id: str) -> Mapping[str, MatrixColumn]:
        """レイヤーのアクセサ群を返す（未登録なら空マッピング）。"""
        return self._layers.get(layer_id, _EMPTY)

    def column(self, layer_id: str, accessor_name: str) -> MatrixColumn | None:
        return self.layer(layer_id).get(accessor_name)

    def layer_ids(self) -> tuple[str, ...]:
        return tuple(self._layers)

    def columns(self) -> Iterator[MatrixColumn]:
        for cols in self._layers.values():
            yield from cols.values()

    @property
    def nbytes(self) -> int:
        return sum(col.nbytes for col in self.columns())

    def describe(self) -> dict[str, dict[str, dict[str, Any]]]:
        """`{layer_id: {accessor: summary}}` 形式の JSON 互換サマリ（ウィジェット状態の検査用）。"""
        return {
            layer_id: {name: col.describe() for name, col in cols.items()}
            for layer_id, cols in self._layers.items()
        }

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        n_cols = sum(len(cols) for cols in self._layers.values())
        return f"DataBuffer(layers={len(self._layers)}, columns={n_cols}, nbytes={self.nbytes})"


__all__ = ["DataBuffer"]
