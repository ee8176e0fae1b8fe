"""共通フィクスチャ。

- ワイヤ形式のカラム記述子/ペイロードを組み立てるファクトリ
- 設定（環境変数）を既定値へ戻すフィクスチャ
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, Sequence

import numpy as np
import pytest

from common import settings

ColumnFactory = Callable[..., dict[str, Any]]


def _column(
    layer_id: str,
    accessor: str,
    values: Any,
    *,
    dtype: str = "float32",
    shape: Sequence[Any] | None = None,
    column_name: str | None = None,
) -> dict[str, Any]:
    arr = np.asarray(values, dtype=dtype)
    if shape is None:
        shape = list(arr.shape) if arr.ndim > 0 else [1]
    return {
        "layer_id": layer_id,
        "accessor": accessor,
        "column_name": column_name if column_name is not None else accessor,
        "matrix": {
            # ワイヤ上は常にリトルエンディアン
            "data": arr.astype(arr.dtype.newbyteorder("<")).tobytes(),
            "shape": list(shape),
            "dtype": dtype,
        },
    }


@pytest.fixture()
def make_column() -> ColumnFactory:
    return _column


@pytest.fixture()
def make_payload() -> Callable[..., dict[str, Any]]:
    def _payload(*columns: dict[str, Any]) -> dict[str, Any]:
        return {"payload": list(columns)}

    return _payload


@pytest.fixture()
def l1_payload(make_column: ColumnFactory) -> dict[str, Any]:
    """L1: getPosition (3x2 float32) + getColor (3x3 uint8)。"""
    pos = np.array([[0.0, 0.0], [1.0, 2.0], [3.0, 4.0]], dtype=np.float32)
    color = np.array([[255, 0, 0], [0, 255, 0], [0, 0, 255]], dtype=np.uint8)
    return {
        "payload": [
            make_column("L1", "getPosition", pos, dtype="float32"),
            make_column("L1", "getColor", color, dtype="uint8"),
        ]
    }


@pytest.fixture()
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """DECKBUF_* を消した状態で設定を再読込し、終了後も既定へ戻す。"""
    for name in (
        "DECKBUF_STRICT_SHAPE",
        "DECKBUF_KEEP_LAST_GOOD",
        "DECKBUF_LOG_LEVEL",
        "DECKBUF_MAX_PAYLOAD_COLUMNS",
    ):
        monkeypatch.delenv(name, raising=False)
    settings.reload_from_env()
    yield
    monkeypatch.undo()
    settings.reload_from_env()
