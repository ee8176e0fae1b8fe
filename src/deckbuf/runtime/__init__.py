"""
どこで: `deckbuf.runtime` サブパッケージ。
何を: ホスト/ウィジェットが保持するセッション状態（DataBuffer の差し替えとシーン解決）。
"""

from .session import DataBufferSession

__all__ = ["DataBufferSession"]
