"""
どこで: `deckbuf.runtime` のセッション状態。
何を: 現在の `DataBuffer` を保持し、ペイロード受信ごとに丸ごと差し替え、シーン更新ごとにマージする。
なぜ: ウィジェット/ホストの長寿命状態を 1 オブジェクトに集約し、差し替えの公開を参照 1 回の代入で行うため。

ポリシー:
- `ingest(None)` は「データ更新なし」（False を返し、状態は変えない）。
- 取り込み失敗（`DeckbufError`）時は既定で直前のバッファを保持し、例外は呼び出し側へ送出する。
  `keep_last_good=False` の場合はバッファをクリアしてから送出する。
- バッファ未受信のまま `resolve` した場合は、変換済みシーンをそのまま返す（マージしない）。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from common import settings
from util.utils import config_section

from ..core.buffer import DataBuffer
from ..core.deserializer import deserialize
from ..core.errors import DeckbufError
from ..scene.converter import JsonSceneConverter, SceneConverter
from ..scene.layer import SceneDescription
from ..scene.merge import merge

logger = logging.getLogger(__name__)


def _resolve_flag(explicit: bool | None, configured: Any, fallback: bool) -> bool:
    """明示指定 > 構成ファイル > 環境変数設定 の順で真偽値を決める。"""
    if explicit is not None:
        return bool(explicit)
    if isinstance(configured, bool):
        return configured
    return bool(fallback)


class DataBufferSession:
    """ウィジェット 1 つぶんのバイナリデータ状態。"""

    def __init__(
        self,
        *,
        converter: SceneConverter | None = None,
        keep_last_good: bool | None = None,
        strict_shape: bool | None = None,
        config_root: Path | None = None,
    ) -> None:
        cfg = config_section("session", config_root)
        s = settings.get()
        self._converter: SceneConverter = converter or JsonSceneConverter()
        self._keep_last_good = _resolve_flag(
            keep_last_good, cfg.get("keep_last_good"), s.KEEP_LAST_GOOD
        )
        self._strict_shape = _resolve_flag(strict_shape, cfg.get("strict_shape"), s.STRICT_SHAPE)
        self._buffer: DataBuffer | None = None
        self._version = 0

    # -------- state --------
    @property
    def data_buffer(self) -> DataBuffer | None:
        return self._buffer

    @property
    def version(self) -> int:
        """バッファを公開（差し替え/クリア）した回数。"""
        return self._version

    @property
    def keep_last_good(self) -> bool:
        return self._keep_last_good

    @property
    def strict_shape(self) -> bool:
        return self._strict_shape

    def has_data(self) -> bool:
        return self._buffer is not None

    def _publish(self, buffer: DataBuffer | None) -> None:
        self._buffer = buffer
        self._version += 1

    # -------- operations --------
    def ingest(self, payload: Any) -> bool:
        """ペイロードを復号して現在のバッファを差し替える。

        Returns
        -------
        bool
            バッファを差し替えた場合 True、`payload` が None で更新なしの場合 False。

        Raises
        ------
        DeckbufError
            復号に失敗した場合（保持/クリアのポリシー適用後に再送出）。
        """
        try:
            buffer = deserialize(payload, strict_shape=self._strict_shape)
        except DeckbufError as exc:
            if self._keep_last_good or self._buffer is None:
                logger.warning("payload rejected (%s); keeping data buffer v%d", exc, self._version)
            else:
                logger.warning("payload rejected (%s); clearing data buffer", exc)
                self._publish(None)
            raise
        if buffer is None:
            return False
        self._publish(buffer)
        logger.debug("data buffer v%d: layers=%s", self._version, list(buffer.layer_ids()))
        return True

    def resolve(self, json_props: Any) -> SceneDescription:
        """シーン記述を変換し、現在のバッファとマージした結果を返す。"""
        scene = self._converter.convert(json_props)
        buffer = self._buffer
        if buffer is None:
            return scene
        return merge(buffer, scene)

    def clear(self) -> None:
        if self._buffer is not None:
            self._publish(None)

    def describe(self) -> dict[str, Any]:
        """検査/デバッグ用のサマリ（バッファ未受信なら layers は空）。"""
        buffer = self._buffer
        return {
            "version": self._version,
            "nbytes": buffer.nbytes if buffer is not None else 0,
            "layers": buffer.describe() if buffer is not None else {},
        }


__all__ = ["DataBufferSession"]
