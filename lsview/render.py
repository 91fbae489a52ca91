"""
行 / 表格渲染：把解析后的属性转换为固定列宽的一行文本。

列顺序：图标 名称 创建时间 权限 大小，列之间用单个空格分隔。
超长字段截断为 (列宽 - 1) 个字符并追加省略号；缺失字段显示为 "-"。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Mapping

import typer

from lsview.metadata import format_size
from lsview.models import EntryKind, ResolvedAttributes, Unit

NAME_WIDTH = 35
DATE_WIDTH = 20
PERM_WIDTH = 12
SIZE_WIDTH = 10

ELLIPSIS = "…"
PLACEHOLDER = "-"

# Nerd Font 图标
PLAIN_ICONS: Mapping[EntryKind, str] = {
    EntryKind.DIRECTORY: "\uf115",
    EntryKind.SYMLINK: "\uf481",
    EntryKind.REGULAR_FILE: "\uf15b",
}

COLOR_ICONS: Mapping[EntryKind, str] = {
    EntryKind.DIRECTORY: typer.style(PLAIN_ICONS[EntryKind.DIRECTORY], fg=typer.colors.BLUE),
    EntryKind.SYMLINK: typer.style(PLAIN_ICONS[EntryKind.SYMLINK], fg=typer.colors.CYAN),
    EntryKind.REGULAR_FILE: typer.style(PLAIN_ICONS[EntryKind.REGULAR_FILE], fg=typer.colors.GREEN),
}


@dataclass(frozen=True)
class RenderStyle:
    """渲染外观：类型到图标的映射、名称是否加粗、日期格式。"""

    icons: Mapping[EntryKind, str] = field(default_factory=lambda: dict(COLOR_ICONS))
    bold_names: bool = True
    date_format: str = "%x %X"


DEFAULT_STYLE = RenderStyle()
PLAIN_STYLE = RenderStyle(icons=dict(PLAIN_ICONS), bold_names=False)


def truncate_ellipsis(text: str, width: int) -> str:
    """
    长度不超过 width 时原样返回；否则保留前 width - 1 个字符并追加省略号，总长恰为 width。

    例：truncate_ellipsis("abcdef", 4) -> "abc…"
    """
    if len(text) <= width:
        return text
    return text[: max(width - 1, 0)] + ELLIPSIS


def format_created(created: float | None, date_format: str = "%x %X") -> str | None:
    """将创建时间格式化为本地时间字符串；缺失或无法转换时为 None。"""
    if created is None:
        return None
    try:
        return datetime.fromtimestamp(created).strftime(date_format)
    except (OverflowError, OSError, ValueError):
        return None


def render_row(
    attrs: ResolvedAttributes,
    unit: Unit = Unit.BYTES,
    style: RenderStyle = DEFAULT_STYLE,
) -> str:
    """渲染一个条目为一行；图标紧挨名称列之前，不计入名称的截断宽度。"""
    # 无图标的类型（其他 / 无法判断）占一个空白宽度，保持列对齐
    icon = (style.icons.get(attrs.kind, "") if attrs.kind is not None else "") or " "
    name = truncate_ellipsis(attrs.name or PLACEHOLDER, NAME_WIDTH).ljust(NAME_WIDTH)
    if style.bold_names:
        name = typer.style(name, bold=True)
    created = format_created(attrs.created, style.date_format) or PLACEHOLDER
    perms = attrs.permissions or PLACEHOLDER
    size = format_size(attrs.size, unit) if attrs.size is not None else PLACEHOLDER
    return " ".join(
        [
            icon,
            name,
            truncate_ellipsis(created, DATE_WIDTH).ljust(DATE_WIDTH),
            truncate_ellipsis(perms, PERM_WIDTH).ljust(PERM_WIDTH),
            truncate_ellipsis(size, SIZE_WIDTH).rjust(SIZE_WIDTH),
        ]
    )


def render_table(
    entries: Iterable[ResolvedAttributes],
    unit: Unit = Unit.BYTES,
    style: RenderStyle = DEFAULT_STYLE,
) -> str:
    """把多行合并为一个文本块（每行以换行结尾）；空输入返回空字符串。"""
    return "".join(render_row(attrs, unit, style) + "\n" for attrs in entries)
