"""
lsview 数据模型：遍历条目、解析后的属性、尺寸单位与单次运行配置。

- DirectoryEntry：遍历过程中每个未被剪枝的路径各一个，创建后不再修改。
- ResolvedAttributes：按需从 DirectoryEntry 解析；每个字段都可独立缺失（None）。
- ListingConfig：一次运行内不变的配置（由 CLI 层解析完毕后传入）。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class EntryKind(Enum):
    """条目类型；判断优先级为 目录 -> 符号链接 -> 普通文件 -> 其他。"""

    DIRECTORY = "directory"
    SYMLINK = "symlink"
    REGULAR_FILE = "file"
    OTHER = "other"


class Unit(Enum):
    """文件大小单位：值为 (1024 的幂次, 规范化后缀)。"""

    BYTES = (0, "b")
    KB = (1, "kib")
    MB = (2, "mib")
    GB = (3, "gib")
    TB = (4, "tib")

    @property
    def exponent(self) -> int:
        return self.value[0]

    @property
    def suffix(self) -> str:
        return self.value[1]


_UNIT_ALIASES: dict[str, Unit] = {
    "b": Unit.BYTES,
    "bytes": Unit.BYTES,
    "k": Unit.KB,
    "kb": Unit.KB,
    "kib": Unit.KB,
    "m": Unit.MB,
    "mb": Unit.MB,
    "mib": Unit.MB,
    "g": Unit.GB,
    "gb": Unit.GB,
    "gib": Unit.GB,
    "t": Unit.TB,
    "tb": Unit.TB,
    "tib": Unit.TB,
}


def parse_unit(text: str) -> Unit:
    """
    将单位字符串解析为 Unit（大小写不敏感）。

    例："KiB" / "kb" / "K" -> Unit.KB；"xyz" -> ValueError("Invalid unit: xyz")
    """
    unit = _UNIT_ALIASES.get((text or "").strip().lower())
    if unit is None:
        raise ValueError(f"Invalid unit: {text}")
    return unit


@dataclass(frozen=True)
class DirectoryEntry:
    """一次遍历中访问到的条目。depth 从 1 开始（根目录的直接子项）。"""

    path: Path
    depth: int
    kind: EntryKind | None
    # 条目本身是否为符号链接（指向目录的链接显示为目录，但不会进入）
    is_link: bool = False

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def descend(self) -> bool:
        return self.kind is EntryKind.DIRECTORY and not self.is_link


@dataclass(frozen=True)
class ResolvedAttributes:
    """条目的可显示属性；任一字段为 None 表示该属性缺失，渲染为占位符。"""

    entry: DirectoryEntry
    name: str | None
    kind: EntryKind | None
    created: float | None = None
    permissions: str | None = None
    size: int | None = None


@dataclass(frozen=True)
class ListingConfig:
    """单次运行的列表配置。max_depth=1 表示只列出根目录的直接子项。"""

    root: Path = field(default_factory=lambda: Path("."))
    max_depth: int = 1
    canonicalize: bool = False
    show_hidden: bool = False
    table: bool = False
    unit: Unit = Unit.BYTES
    reversed: bool = False

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {self.max_depth}")
        if not isinstance(self.root, Path):
            object.__setattr__(self, "root", Path(self.root))
