"""
どこで: `common` パッケージ。
何を: 環境変数ヘルパ・設定スナップショット・ロギング初期化・共通型エイリアス。
なぜ: deckbuf の各層から再利用する共通基盤を分離し、依存の向きを単純化するため。
"""

from . import settings
from .logging import setup_default_logging

__all__ = [
    "settings",
    "setup_default_logging",
]
