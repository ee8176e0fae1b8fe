"""
どこで: `deckbuf.scene.attributes`
何を: レイヤー 1 枚ぶんのバイナリ属性集合 `LayerAttributeSet` と、その構築規則。
なぜ: 描画側は「行数 + アクセサごとの (幅, 平坦配列)」を直接受け取れるため、JSON 行データへの展開を避けられる。

構築規則:
- `length` はアクセサ間の最大行数（shape[0]）。アクセサ間で揃っているとは限らない。
- `size` は shape[1]（省略/0 なら 1）、`values` は復号済み配列そのもの（コピーしない）。
- カラムが 1 つも無ければ `length=0, attributes={}`。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

import numpy as np

from deckbuf.core.column import MatrixColumn


@dataclass(frozen=True, eq=False)
class Attribute:
    """1 アクセサぶんの属性（要素幅と平坦配列）。"""

    size: int
    values: np.ndarray

    def to_dict(self) -> dict[str, Any]:
        return {"size": self.size, "value": self.values}


@dataclass(frozen=True, eq=False)
class LayerAttributeSet:
    length: int = 0
    attributes: Mapping[str, Attribute] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    @classmethod
    def empty(cls) -> "LayerAttributeSet":
        return cls()

    @classmethod
    def from_columns(cls, columns: Mapping[str, MatrixColumn]) -> "LayerAttributeSet":
        length = 0
        attrs: dict[str, Attribute] = {}
        for accessor, col in columns.items():
            length = max(col.rows, length)
            attrs[accessor] = Attribute(size=col.width, values=col.elements)
        return cls(length=length, attributes=attrs)

    @property
    def is_empty(self) -> bool:
        return not self.attributes

    def to_dict(self) -> dict[str, Any]:
        """描画エンジンのバイナリ属性形式 `{"length", "attributes": {name: {"size", "value"}}}`。"""
        return {
            "length": self.length,
            "attributes": {name: attr.to_dict() for name, attr in self.attributes.items()},
        }


__all__ = ["Attribute", "LayerAttributeSet"]
