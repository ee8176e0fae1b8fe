from __future__ import annotations

from pathlib import Path

import pytest

from util.utils import _find_project_root, config_section, load_config


def test_find_project_root_fallback(tmp_path: Path) -> None:
    # tmp_path/a/b のような構造（上流に .git/pyproject.toml/configs が無い）では
    # フォールバックで start.parent.parent を返す
    a = tmp_path / "a" / "b"
    a.mkdir(parents=True)
    got = _find_project_root(a)
    assert got == a.parent.parent


def test_find_project_root_prefers_marker(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("", encoding="utf-8")
    start = tmp_path / "src" / "util"
    start.mkdir(parents=True)
    assert _find_project_root(start) == tmp_path


def test_load_config_merges_default_and_root(tmp_path: Path) -> None:
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text(
        "session:\n  keep_last_good: true\nother: 1\n", encoding="utf-8"
    )
    (tmp_path / "config.yaml").write_text("session:\n  strict_shape: false\n", encoding="utf-8")
    cfg = load_config(tmp_path)
    # トップレベルのみ上書き（ディープマージしない）
    assert cfg == {"session": {"strict_shape": False}, "other": 1}
    assert config_section("session", tmp_path) == {"strict_shape": False}


def test_load_config_fail_soft(tmp_path: Path) -> None:
    assert load_config(tmp_path) == {}
    (tmp_path / "config.yaml").write_text("session: [unclosed\n", encoding="utf-8")
    assert load_config(tmp_path) == {}
    (tmp_path / "config.yaml").write_text("- just\n- a list\n", encoding="utf-8")
    assert load_config(tmp_path) == {}


@pytest.mark.integration
def test_repository_default_config_is_loadable() -> None:
    # 同梱の configs/default.yaml はコメントのみ（既定は環境変数設定に委ねる）
    assert isinstance(load_config(), dict)
    assert isinstance(config_section("session"), dict)
