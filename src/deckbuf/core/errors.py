"""
どこで: `deckbuf.core.errors`
何を: ペイロード解釈とシーン変換で送出する例外階層。
なぜ: ホスト側が `DeckbufError` だけを捕捉すれば「この更新を捨てる」判断ができるようにするため。
"""

from __future__ import annotations


class DeckbufError(Exception):
    """deckbuf が送出する例外の基底。"""


class UnsupportedTypeError(DeckbufError, ValueError):
    """型コード表に無い dtype が指定された。"""

    def __init__(self, dtype: object) -> None:
        self.dtype = dtype
        super().__init__(f"Unrecognized dtype {dtype!r}")


class ShapeMismatchError(DeckbufError, ValueError):
    """shape と復号後の要素数（またはバイト長）が整合しない。"""


class MalformedPayloadError(DeckbufError, ValueError):
    """ペイロード/カラム記述子の構造が不正（必須キー欠落など）。"""


class SceneConversionError(DeckbufError, ValueError):
    """JSON シーン記述をレイヤー列へ変換できない。"""


__all__ = [
    "DeckbufError",
    "UnsupportedTypeError",
    "ShapeMismatchError",
    "MalformedPayloadError",
    "SceneConversionError",
]
