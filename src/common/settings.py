"""
どこで: `common.settings`
何を: deckbuf の環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: 形状検証やフェイルポリシーの切り替えを 1 か所に集め、テストから差し替えやすくするため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_int, env_str


@dataclass
class _Settings:
    # Deserializer
    STRICT_SHAPE: bool = True
    MAX_PAYLOAD_COLUMNS: int | None = None

    # Session
    KEEP_LAST_GOOD: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - bool は `env_bool`、int は `env_int` を使用。
    - `MAX_PAYLOAD_COLUMNS` は 0 以下を「無制限」（None）として扱う。
    """
    _settings.STRICT_SHAPE = env_bool("DECKBUF_STRICT_SHAPE", True)
    limit = env_int("DECKBUF_MAX_PAYLOAD_COLUMNS", None)
    _settings.MAX_PAYLOAD_COLUMNS = limit if limit is not None and limit > 0 else None

    _settings.KEEP_LAST_GOOD = env_bool("DECKBUF_KEEP_LAST_GOOD", True)

    _settings.LOG_LEVEL = env_str("DECKBUF_LOG_LEVEL", "INFO").upper()


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
