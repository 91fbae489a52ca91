"""
列表流水线：配置 -> 遍历（剪枝）-> 解析属性 -> 按创建时间排序 -> 渲染。
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

from lsview.metadata import resolve_attributes
from lsview.models import ListingConfig, ResolvedAttributes
from lsview.render import DEFAULT_STYLE, RenderStyle, render_row, render_table
from lsview.sorter import sort_by_created
from lsview.walker import ErrorHandler, hidden_filter, report_error, walk


def check_root(root: str | os.PathLike[str]) -> Path:
    """根目录不存在、不是目录或无法读取时直接失败（其余错误都在遍历中逐条报告）。"""
    path = Path(root)
    if not path.exists():
        raise FileNotFoundError(f"no such directory: {path}")
    if not path.is_dir():
        raise NotADirectoryError(f"not a directory: {path}")
    try:
        with os.scandir(path):
            pass
    except OSError as e:
        raise PermissionError(f"cannot read directory: {path}: {e.strerror or e}") from e
    return path


def collect(
    config: ListingConfig,
    on_error: ErrorHandler | None = report_error,
) -> list[ResolvedAttributes]:
    """遍历并解析全部条目，按创建时间排序后返回。"""
    root = check_root(config.root)
    entries = walk(
        root,
        config.max_depth,
        prune=hidden_filter(config.show_hidden),
        on_error=on_error,
    )
    resolved = [resolve_attributes(e, config.canonicalize) for e in entries]
    return sort_by_created(resolved, reversed=config.reversed)


def iter_rows(
    config: ListingConfig,
    style: RenderStyle = DEFAULT_STYLE,
    on_error: ErrorHandler | None = report_error,
) -> Iterator[str]:
    for attrs in collect(config, on_error):
        yield render_row(attrs, config.unit, style)


def render_listing(
    config: ListingConfig,
    style: RenderStyle = DEFAULT_STYLE,
    on_error: ErrorHandler | None = report_error,
) -> str:
    """表格模式返回一个文本块；行模式返回以换行连接的各行。"""
    if config.table:
        return render_table(collect(config, on_error), config.unit, style)
    return "\n".join(iter_rows(config, style, on_error))
