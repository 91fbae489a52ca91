"""
条目元数据访问：名称、类型、创建时间、权限、大小。

每个访问函数都可能独立失败，失败时返回 None 而不是抛异常，
保证单个属性缺失不影响同一条目的其他属性，也不影响其他条目。
"""

from __future__ import annotations

import os
from pathlib import Path

from lsview.models import DirectoryEntry, EntryKind, ResolvedAttributes, Unit


def entry_kind(dir_entry: os.DirEntry[str]) -> EntryKind | None:
    """按 目录 -> 符号链接 -> 普通文件 -> 其他 的优先级判断类型；无法判断时返回 None。"""
    try:
        if dir_entry.is_dir():
            return EntryKind.DIRECTORY
        if dir_entry.is_symlink():
            return EntryKind.SYMLINK
        if dir_entry.is_file():
            return EntryKind.REGULAR_FILE
        return EntryKind.OTHER
    except OSError:
        return None


def _is_text(name: str) -> bool:
    # 非 UTF-8 文件名会以 surrogateescape 形式出现，无法编码回 UTF-8
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _stat(path: Path) -> os.stat_result | None:
    try:
        return os.stat(path)
    except (OSError, ValueError):
        return None


def entry_name(entry: DirectoryEntry, canonicalize: bool = False) -> str | None:
    """
    显示名称：默认为最后一段文件名；canonicalize=True 时为解析符号链接后的绝对路径。

    文件名无法表示为文本（非 UTF-8）或路径无法解析时返回 None。
    """
    if canonicalize:
        try:
            name = str(entry.path.resolve(strict=True))
        except (OSError, RuntimeError):
            return None
    else:
        name = entry.name
    return name if _is_text(name) else None


def entry_created(entry: DirectoryEntry, st: os.stat_result | None = None) -> float | None:
    """
    平台提供的创建时间（POSIX 时间戳）；不支持或读取失败时为 None，不回退到修改时间。

    只读取 st_birthtime：macOS / BSD 与 Windows（Python 3.12+）提供该字段；
    Linux 上 CPython 的 os.stat 不提供，因此创建时间列恒为 "-"，排序退化为遍历顺序。
    """
    st = st or _stat(entry.path)
    if st is None:
        return None
    return getattr(st, "st_birthtime", None)


def format_permissions(mode: int) -> str:
    """
    取 mode 低 9 位，按 owner/group/other 三组渲染为 rwx。

    例：0o754 -> "rwxr-xr--"
    """
    perms = mode & 0o777
    out = []
    for shift in (6, 3, 0):
        bits = (perms >> shift) & 0o7
        out.append("r" if bits & 0o4 else "-")
        out.append("w" if bits & 0o2 else "-")
        out.append("x" if bits & 0o1 else "-")
    return "".join(out)


def entry_permissions(entry: DirectoryEntry, st: os.stat_result | None = None) -> str | None:
    st = st or _stat(entry.path)
    if st is None:
        return None
    return format_permissions(st.st_mode)


def entry_size(entry: DirectoryEntry, st: os.stat_result | None = None) -> int | None:
    """条目大小（字节）；stat 失败时为 None。"""
    st = st or _stat(entry.path)
    if st is None:
        return None
    return int(st.st_size)


def convert_size(size: int, unit: Unit) -> int:
    """按 1024^n 整除换算（向零截断，不四舍五入）。1023 B -> 0 kib。"""
    return size // (1024 ** unit.exponent)


def format_size(size: int, unit: Unit) -> str:
    """例：1024 与 Unit.KB -> "1 kib"；1048576 与 Unit.MB -> "1 mib"。"""
    return f"{convert_size(size, unit)} {unit.suffix}"


def resolve_attributes(entry: DirectoryEntry, canonicalize: bool = False) -> ResolvedAttributes:
    """一次 stat（跟随符号链接）后填充所有属性；任一属性失败只会让该字段为 None。"""
    st = _stat(entry.path)
    return ResolvedAttributes(
        entry=entry,
        name=entry_name(entry, canonicalize),
        kind=entry.kind,
        created=entry_created(entry, st) if st is not None else None,
        permissions=entry_permissions(entry, st) if st is not None else None,
        size=entry_size(entry, st) if st is not None else None,
    )
