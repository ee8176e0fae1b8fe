"""
どこで: `deckbuf.scene` 型定義。
何を: 描画レイヤー `Layer` とシーン全体 `SceneDescription` の不変値型。
なぜ: 共有された可変プロトタイプに頼らず、「data だけ差し替えた複製」を明示的に作れるようにするため。
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Iterable, Mapping

TYPE_KEY = "@@type"


def _freeze(mapping: Mapping[str, Any] | None) -> Mapping[str, Any]:
    if isinstance(mapping, MappingProxyType):
        return mapping
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class Layer:
    """ID・種別・任意プロパティ付きの描画レイヤー。"""

    id: str
    layer_type: str | None = None
    props: Mapping[str, Any] = field(default_factory=dict)
    data: Any = None  # JSON 上のプレースホルダ、または LayerAttributeSet

    def __post_init__(self) -> None:
        object.__setattr__(self, "props", _freeze(self.props))

    @classmethod
    def from_json(cls, obj: Mapping[str, Any]) -> "Layer":
        props = {k: v for k, v in obj.items() if k not in ("id", TYPE_KEY, "data")}
        return cls(id=obj["id"], layer_type=obj.get(TYPE_KEY), props=props, data=obj.get("data"))

    def clone(self, **overrides: Any) -> "Layer":
        """指定フィールドだけ上書きした複製を返す（未知のフィールド名は TypeError）。"""
        return replace(self, **overrides)

    def with_data(self, data: Any) -> "Layer":
        return replace(self, data=data)

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.layer_type is not None:
            out[TYPE_KEY] = self.layer_type
        out["id"] = self.id
        out.update(self.props)
        to_dict = getattr(self.data, "to_dict", None)
        out["data"] = to_dict() if callable(to_dict) else self.data
        return out


@dataclass(frozen=True)
class SceneDescription:
    """レイヤー列と、それ以外のトップレベル要素（ビュー状態など）。"""

    layers: tuple[Layer, ...] = ()
    extras: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "layers", tuple(self.layers))
        object.__setattr__(self, "extras", _freeze(self.extras))

    def with_layers(self, layers: Iterable[Layer]) -> "SceneDescription":
        return replace(self, layers=tuple(layers))

    def layer_ids(self) -> tuple[str, ...]:
        return tuple(layer.id for layer in self.layers)

    def to_json(self) -> dict[str, Any]:
        out = dict(self.extras)
        out["layers"] = [layer.to_json() for layer in self.layers]
        return out


__all__ = ["Layer", "SceneDescription", "TYPE_KEY"]
