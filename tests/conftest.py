"""
pytest 配置与共享 fixture。

示例目录树见 tests.config；所有文件系统测试都在 tmp_path 下进行。
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from tests.config import SAMPLE_TREE


def _build(root: Path, tree: dict[str, bytes]) -> Path:
    for rel, content in tree.items():
        p = root / rel
        if rel.endswith("/"):
            p.mkdir(parents=True, exist_ok=True)
            continue
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(content)
    return root


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[dict[str, bytes]], Path]:
    """返回一个在 tmp_path/root 下按 {相对路径: 内容} 建树的函数。"""
    root = tmp_path / "root"
    root.mkdir()

    def _make(tree: dict[str, bytes]) -> Path:
        return _build(root, tree)

    return _make


@pytest.fixture
def sample_tree(make_tree: Callable[[dict[str, bytes]], Path]) -> Path:
    """tests.config.SAMPLE_TREE 对应的目录树根。"""
    return make_tree(SAMPLE_TREE)


@pytest.fixture(autouse=True)
def _patch_config_path(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """将配置路径指向临时目录，避免读写用户 ~/.config/lsview。"""
    config_dir = tmp_path / "lsview-config"

    def _config_dir():
        return config_dir

    monkeypatch.setattr("lsview.cli_config._config_dir", _config_dir)
