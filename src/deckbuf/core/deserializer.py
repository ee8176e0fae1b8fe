"""
どこで: `deckbuf.core.deserializer`（Matrix Deserializer）。
何を: ワイヤペイロード（型付き生バイト列のカラム記述子列）を `DataBuffer` へ復号する。
なぜ: ホストの分析プロセスが送る行優先行列を、描画側が読む型付き配列へ一括で変換するため。

ワイヤ形式:

    {"payload": [
        {"layer_id": "L1",
         "accessor": "getPosition",
         "column_name": "xy",
         "matrix": {"data": <bytes>, "shape": [rows, width], "dtype": "float32"}},
        ...
    ]}

方針:
- `payload` が None なら None（データ更新なし）。
- 記述子は入力順に処理し、同一 `(layer_id, accessor)` は後勝ち。
- 未知 dtype/構造不正/shape 不一致は例外で呼び出し全体を中断する（部分的な DataBuffer は返さない）。
- 要素 0 件のカラムは警告ログのみで保持する。
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from common import settings

from .buffer import DataBuffer
from .column import MatrixColumn, normalize_shape
from .dtypes import resolve_dtype
from .errors import MalformedPayloadError, ShapeMismatchError

logger = logging.getLogger(__name__)


def _payload_descriptors(payload: Any) -> Sequence[Any]:
    if isinstance(payload, Mapping):
        if "payload" not in payload:
            raise MalformedPayloadError("payload object has no 'payload' field")
        items = payload["payload"]
    else:
        try:
            items = payload.payload
        except AttributeError as e:
            raise MalformedPayloadError(
                f"expected an object with a 'payload' field, got {type(payload).__name__}"
            ) from e
    if isinstance(items, (str, bytes, bytearray)) or not isinstance(items, Sequence):
        raise MalformedPayloadError(
            f"'payload' must be a sequence of column descriptors, got {type(items).__name__}"
        )
    return items


def _require(obj: Mapping[str, Any], key: str, where: str) -> Any:
    try:
        return obj[key]
    except KeyError:
        raise MalformedPayloadError(f"{where}: missing required key {key!r}") from None


def decode_column(
    descriptor: Mapping[str, Any], *, strict_shape: bool = True, index: int | None = None
) -> MatrixColumn:
    """カラム記述子 1 件を `MatrixColumn` へ復号する。

    Parameters
    ----------
    descriptor : Mapping[str, Any]
        `layer_id`/`accessor`/`column_name`/`matrix` を持つ記述子。
    strict_shape : bool, default True
        True なら要素数が `rows * width` と一致しない場合に `ShapeMismatchError`。
        False なら警告ログを出して復号結果をそのまま保持する。
    index : int | None
        エラーメッセージ用の記述子位置。

    Raises
    ------
    UnsupportedTypeError
        dtype が型コード表に無い。
    MalformedPayloadError
        必須キーの欠落、型の不正。
    ShapeMismatchError
        shape が不正、またはバイト長/要素数が shape と整合しない。
    """
    where = f"payload[{index}]" if index is not None else "column"
    if not isinstance(descriptor, Mapping):
        raise MalformedPayloadError(f"{where}: column descriptor must be a mapping")

    layer_id = _require(descriptor, "layer_id", where)
    accessor = _require(descriptor, "accessor", where)
    if not isinstance(layer_id, str) or not isinstance(accessor, str):
        raise MalformedPayloadError(f"{where}: 'layer_id' and 'accessor' must be strings")
    where = f"{where} ({layer_id}.{accessor})"

    matrix = _require(descriptor, "matrix", where)
    if not isinstance(matrix, Mapping):
        raise MalformedPayloadError(f"{where}: 'matrix' must be a mapping")

    element_type = resolve_dtype(_require(matrix, "dtype", where))
    shape = normalize_shape(_require(matrix, "shape", where))
    elements = element_type.decode(_require(matrix, "data", where))

    column = MatrixColumn(
        layer_id=layer_id,
        accessor_name=accessor,
        column_name=descriptor.get("column_name"),
        elements=elements,
        shape=shape,
    )
    if not column.is_consistent:
        msg = (
            f"{where}: decoded {elements.size} {element_type.name} element(s), "
            f"shape {column.rows}x{column.width} expects {column.expected_size}"
        )
        if strict_shape:
            raise ShapeMismatchError(msg)
        logger.warning("%s; trusting decoded elements", msg)
    return column


def deserialize(payload: Any, *, strict_shape: bool | None = None) -> DataBuffer | None:
    """ワイヤペイロードを `DataBuffer` へ復号する。

    - `payload is None` なら None を返す。
    - 成功時はペイロード中の全カラムを含む新しい `DataBuffer` を返す。
    - 失敗時は例外を送出し、何も返さない（呼び出し側の既存バッファには触れない）。
    - `strict_shape` 省略時は `common.settings` の `STRICT_SHAPE` に従う。
    """
    if payload is None:
        return None

    descriptors = _payload_descriptors(payload)
    cfg = settings.get()
    limit = cfg.MAX_PAYLOAD_COLUMNS
    if limit is not None and len(descriptors) > limit:
        raise MalformedPayloadError(
            f"payload has {len(descriptors)} columns; limit is {limit} (DECKBUF_MAX_PAYLOAD_COLUMNS)"
        )
    strict = cfg.STRICT_SHAPE if strict_shape is None else bool(strict_shape)

    layers: dict[str, dict[str, MatrixColumn]] = {}
    for i, descriptor in enumerate(descriptors):
        column = decode_column(descriptor, strict_shape=strict, index=i)
        layers.setdefault(column.layer_id, {})[column.accessor_name] = column
        if column.is_empty:
            logger.warning(
                "No records in accessor %s belonging to %s", column.accessor_name, column.layer_id
            )

    buffer = DataBuffer(layers)
    logger.debug(
        "deserialized %d column(s) into %d layer(s), %d bytes",
        len(descriptors),
        len(buffer),
        buffer.nbytes,
    )
    return buffer


# ウィジェット側の旧名
deserialize_matrix = deserialize


__all__ = ["deserialize", "deserialize_matrix", "decode_column"]
