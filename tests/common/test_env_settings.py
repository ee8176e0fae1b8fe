from __future__ import annotations

import logging

import pytest

from common import settings
from common.env import env_bool, env_int, env_str
from common.logging import resolve_level, setup_default_logging


def test_env_int(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DECKBUF_T_INT", raising=False)
    assert env_int("DECKBUF_T_INT", 5) == 5
    monkeypatch.setenv("DECKBUF_T_INT", "12")
    assert env_int("DECKBUF_T_INT", 5) == 12
    monkeypatch.setenv("DECKBUF_T_INT", "-3")
    assert env_int("DECKBUF_T_INT", 5, min_value=0) == 0
    monkeypatch.setenv("DECKBUF_T_INT", "abc")
    assert env_int("DECKBUF_T_INT", None) is None


@pytest.mark.parametrize(
    "raw, expected",
    [("1", True), ("0", False), ("yes", True), ("Off", False), ("maybe", True)],
)
def test_env_bool(monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
    monkeypatch.setenv("DECKBUF_T_BOOL", raw)
    # 不明な値は既定（True）
    assert env_bool("DECKBUF_T_BOOL", True) is expected


def test_env_str(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DECKBUF_T_STR", "  debug ")
    assert env_str("DECKBUF_T_STR", "INFO") == "debug"
    monkeypatch.setenv("DECKBUF_T_STR", "")
    assert env_str("DECKBUF_T_STR", "INFO") == "INFO"


def test_settings_defaults(clean_settings) -> None:
    s = settings.get()
    assert s.STRICT_SHAPE is True
    assert s.KEEP_LAST_GOOD is True
    assert s.MAX_PAYLOAD_COLUMNS is None
    assert s.LOG_LEVEL == "INFO"


def test_settings_reload(monkeypatch: pytest.MonkeyPatch, clean_settings) -> None:
    monkeypatch.setenv("DECKBUF_MAX_PAYLOAD_COLUMNS", "0")
    monkeypatch.setenv("DECKBUF_LOG_LEVEL", "debug")
    settings.reload_from_env()
    s = settings.get()
    assert s.MAX_PAYLOAD_COLUMNS is None  # 0 以下は無制限
    assert s.LOG_LEVEL == "DEBUG"


def test_resolve_level(monkeypatch: pytest.MonkeyPatch, clean_settings) -> None:
    assert resolve_level("warning") == logging.WARNING
    assert resolve_level(logging.ERROR) == logging.ERROR
    assert resolve_level("nonsense") == logging.INFO
    monkeypatch.setenv("DECKBUF_LOG_LEVEL", "ERROR")
    settings.reload_from_env()
    assert resolve_level(None) == logging.ERROR


def test_setup_default_logging_is_noop_with_handlers() -> None:
    root = logging.getLogger()
    before = list(root.handlers)
    handler = logging.NullHandler()
    root.addHandler(handler)
    try:
        setup_default_logging("DEBUG")
        assert root.handlers == before + [handler]
    finally:
        root.removeHandler(handler)
