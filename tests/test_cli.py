"""
CLI（typer）单元测试。在 tmp_path 下建目录树，通过 CliRunner 验证命令与输出。
"""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from lsview.cli import app
from lsview.cli_config import load_config, save_config
from lsview.render import SIZE_WIDTH

from tests.config import VISIBLE_BY_DEPTH

runner = CliRunner()


def _rows(result) -> list[str]:
    return [line for line in result.stdout.splitlines() if line.strip()]


# ------------------------- list / ls -------------------------


def test_list_default_depth(sample_tree: Path) -> None:
    result = runner.invoke(app, ["list", str(sample_tree)])
    assert result.exit_code == 0
    rows = _rows(result)
    assert len(rows) == len(VISIBLE_BY_DEPTH[1])
    for name in VISIBLE_BY_DEPTH[1]:
        assert any(name in row for row in rows)
    assert ".git" not in result.stdout
    assert ".hidden.txt" not in result.stdout


def test_ls_alias(sample_tree: Path) -> None:
    a = runner.invoke(app, ["list", str(sample_tree), "--no-color"])
    b = runner.invoke(app, ["ls", str(sample_tree), "--no-color"])
    assert a.exit_code == b.exit_code == 0
    assert a.stdout == b.stdout


def test_list_max_depth_and_hidden(sample_tree: Path) -> None:
    result = runner.invoke(app, ["list", str(sample_tree), "-d", "5", "-a"])
    assert result.exit_code == 0
    out = result.stdout
    assert "leaf.txt" in out
    assert ".git" in out
    assert "x.pack" in out


def test_list_end_to_end_single_row(make_tree) -> None:
    root = make_tree({"a.txt": b"", ".git/config": b""})
    result = runner.invoke(app, ["list", str(root), "--max-depth", "5"])
    assert result.exit_code == 0
    rows = _rows(result)
    assert len(rows) == 1
    assert "a.txt" in rows[0]


def test_list_unit_option(make_tree) -> None:
    root = make_tree({"f.bin": b"\0" * 2048})
    result = runner.invoke(app, ["list", str(root), "--unit", "KiB"])
    assert result.exit_code == 0
    assert _rows(result)[0].endswith("2 kib".rjust(SIZE_WIDTH))


def test_list_invalid_unit_fails_before_traversal(sample_tree: Path) -> None:
    result = runner.invoke(app, ["list", str(sample_tree), "-u", "xyz"])
    assert result.exit_code == 1
    assert "Invalid unit: xyz" in result.output
    assert "a.txt" not in result.output


def test_list_invalid_depth(sample_tree: Path) -> None:
    result = runner.invoke(app, ["list", str(sample_tree), "-d", "0"])
    assert result.exit_code != 0


def test_list_missing_root(tmp_path: Path) -> None:
    result = runner.invoke(app, ["list", str(tmp_path / "missing")])
    assert result.exit_code == 1
    assert "error:" in result.output
    assert "missing" in result.output


def test_list_root_is_file(tmp_path: Path) -> None:
    f = tmp_path / "f.txt"
    f.write_text("x", encoding="utf-8")
    result = runner.invoke(app, ["list", str(f)])
    assert result.exit_code == 1
    assert "not a directory" in result.output


def test_list_table_mode(sample_tree: Path) -> None:
    result = runner.invoke(app, ["list", str(sample_tree), "--table", "-d", "2"])
    assert result.exit_code == 0
    assert len(_rows(result)) == 6
    assert result.stdout.endswith("\n")


def test_list_no_color_strips_ansi(sample_tree: Path) -> None:
    result = runner.invoke(app, ["list", str(sample_tree), "--no-color"])
    assert result.exit_code == 0
    assert "\x1b[" not in result.stdout


def test_list_canonicalize(make_tree) -> None:
    root = make_tree({"f.txt": b""})
    result = runner.invoke(app, ["list", str(root), "-C"])
    assert result.exit_code == 0
    # 绝对路径可能超出名称列宽被截断，只比较开头部分
    assert str((root / "f.txt").resolve())[:20] in result.stdout


def test_list_traversal_error_keeps_exit_zero(sample_tree: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import os

    real_scandir = os.scandir

    def failing_scandir(path):
        if Path(path).name == "docs":
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr("os.scandir", failing_scandir)
    result = runner.invoke(app, ["list", str(sample_tree), "-d", "3"])
    assert result.exit_code == 0
    assert "Permission denied" in result.output
    assert "a.txt" in result.output
    assert "readme.md" not in result.output


def test_list_reversed_order(make_tree, monkeypatch: pytest.MonkeyPatch) -> None:
    root = make_tree({"old.txt": b"", "new.txt": b""})
    created = {"old.txt": 1.0, "new.txt": 2.0}
    monkeypatch.setattr("lsview.metadata.entry_created", lambda entry, st=None: created.get(entry.name))
    asc = runner.invoke(app, ["list", str(root)])
    desc = runner.invoke(app, ["list", str(root), "-r"])
    assert asc.stdout.index("old.txt") < asc.stdout.index("new.txt")
    assert desc.stdout.index("new.txt") < desc.stdout.index("old.txt")


# ------------------------- saved defaults -------------------------


def test_saved_defaults_apply(sample_tree: Path) -> None:
    save_config({"show_hidden": "true", "max_depth": "2", "unit": "kb"})
    result = runner.invoke(app, ["list", str(sample_tree)])
    assert result.exit_code == 0
    assert ".git" in result.stdout
    assert "readme.md" in result.stdout
    assert "kib" in result.stdout


def test_option_overrides_saved_default(sample_tree: Path) -> None:
    save_config({"max_depth": "1", "unit": "kb"})
    result = runner.invoke(app, ["list", str(sample_tree), "-d", "2", "-u", "b"])
    assert result.exit_code == 0
    assert "readme.md" in result.stdout
    assert "kib" not in result.stdout


def test_invalid_saved_config_fails(sample_tree: Path) -> None:
    from lsview.cli_config import _config_path

    p = _config_path()
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text('{"unit": "xyz"}', encoding="utf-8")
    result = runner.invoke(app, ["list", str(sample_tree)])
    assert result.exit_code == 1
    assert "invalid saved config" in result.output


# ------------------------- config -------------------------


def test_config_get_empty() -> None:
    result = runner.invoke(app, ["config", "get"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "{}"


def test_config_set_and_get() -> None:
    result = runner.invoke(app, ["config", "set", "unit=MiB", "max_depth=3", "table=yes"])
    assert result.exit_code == 0
    assert "Saved." in result.stdout
    assert load_config() == {"unit": "mib", "max_depth": 3, "table": True}
    got = runner.invoke(app, ["config", "get"])
    assert '"unit": "mib"' in got.stdout


def test_config_set_rejects_bad_pair() -> None:
    result = runner.invoke(app, ["config", "set", "unit"])
    assert result.exit_code == 1
    assert "expected KEY=VALUE" in result.output


def test_config_set_rejects_bad_value() -> None:
    result = runner.invoke(app, ["config", "set", "unit=xyz"])
    assert result.exit_code == 1
    assert "Invalid unit" in result.output
    assert load_config() is None


def test_config_clear() -> None:
    save_config({"table": True})
    result = runner.invoke(app, ["config", "clear"])
    assert result.exit_code == 0
    assert "Cleared." in result.stdout
    assert load_config() is None
    again = runner.invoke(app, ["config", "clear"])
    assert "No saved config." in again.stdout


def test_list_unreadable_root_fails(sample_tree: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """根目录无法读取时退出码为 1，且不输出任何行。"""
    import os

    real_scandir = os.scandir

    def failing_scandir(path):
        if Path(path) == sample_tree:
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr("os.scandir", failing_scandir)
    result = runner.invoke(app, ["list", str(sample_tree)])
    assert result.exit_code == 1
    assert "cannot read directory" in result.output
    assert "a.txt" not in result.output


def test_no_flag_overrides_saved_true(sample_tree: Path) -> None:
    """保存 show_hidden=true 后，--no-show-hidden 可在单次运行中关闭。"""
    save_config({"show_hidden": "true", "reversed": "true", "table": "true"})
    shown = runner.invoke(app, ["list", str(sample_tree)])
    assert shown.exit_code == 0
    assert ".git" in shown.stdout

    hidden = runner.invoke(app, ["list", str(sample_tree), "--no-show-hidden", "--no-reversed", "--no-table"])
    assert hidden.exit_code == 0
    assert ".git" not in hidden.stdout
    assert "a.txt" in hidden.stdout


def test_short_flag_still_enables(sample_tree: Path) -> None:
    save_config({"show_hidden": "false"})
    result = runner.invoke(app, ["list", str(sample_tree), "-a"])
    assert result.exit_code == 0
    assert ".git" in result.stdout
