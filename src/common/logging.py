"""
プロジェクト向けの軽量ロギングユーティリティ。

要点:
- 各モジュールは `logging.getLogger(__name__)` でロガーを取得する。
- ホスト側で設定が無い場合でも、妥当な最小構成を 1 度だけ適用するヘルパーを提供する。
- 既定レベルは `DECKBUF_LOG_LEVEL`（`common.settings`）に従う。
"""

from __future__ import annotations

import logging

from . import settings

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_level(level: int | str | None) -> int:
    """レベル指定を `logging` の数値レベルへ解決する（不明な名前は INFO）。"""
    if level is None:
        level = settings.get().LOG_LEVEL
    if isinstance(level, str):
        lvl = logging.getLevelName(level.upper())
        return lvl if isinstance(lvl, int) else logging.INFO
    return int(level)


def setup_default_logging(level: int | str | None = None) -> None:
    """最小限のロギング設定を 1 度だけ適用する。

    - ルートロガーにハンドラが既にあれば何もしない（no-op）
    - Jupyter カーネルやホストアプリの起動処理から呼び出す想定
    """
    root = logging.getLogger()
    if root.handlers:
        # Assume the host has configured logging
        return
    logging.basicConfig(level=resolve_level(level), format=_FORMAT)


__all__ = ["setup_default_logging", "resolve_level"]
