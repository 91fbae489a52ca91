"""
目录树遍历：深度受限、可剪枝、可排序的先序遍历。

根目录本身不输出；剪枝谓词在进入子目录之前求值，被拒绝的目录连同整棵子树都不会被访问。
读取目录失败（如无权限）时交给 on_error 处理，遍历继续。
"""

from __future__ import annotations

import os
from functools import cmp_to_key
from pathlib import Path
from typing import Callable, Iterator

import typer

from lsview.metadata import _is_text, entry_kind
from lsview.models import DirectoryEntry

Predicate = Callable[[DirectoryEntry], bool]
Comparator = Callable[[DirectoryEntry, DirectoryEntry], int]
ErrorHandler = Callable[[Path, OSError], None]


def report_error(path: Path, exc: OSError) -> None:
    """将遍历错误写到 stderr，不中断遍历。"""
    reason = exc.strerror or str(exc)
    typer.echo(f"error: {path}: {reason}", err=True)


def is_hidden(entry: DirectoryEntry) -> bool:
    """文件名以 . 开头即为隐藏；无法表示为文本的（非 UTF-8）文件名不算隐藏。"""
    name = entry.name
    return _is_text(name) and name.startswith(".")


def hidden_filter(show_hidden: bool) -> Predicate | None:
    """显示隐藏项时不剪枝（返回 None），否则返回拒绝隐藏项的谓词。"""
    if show_hidden:
        return None
    return lambda entry: not is_hidden(entry)


def _read_children(
    directory: Path,
    depth: int,
    compare: Comparator | None,
    on_error: ErrorHandler | None,
) -> list[DirectoryEntry]:
    children: list[DirectoryEntry] = []
    try:
        with os.scandir(directory) as it:
            for d in it:
                try:
                    is_link = d.is_symlink()
                except OSError:
                    is_link = False
                children.append(
                    DirectoryEntry(
                        path=directory / d.name,
                        depth=depth,
                        kind=entry_kind(d),
                        is_link=is_link,
                    )
                )
    except OSError as e:
        # 迭代中途失败时保留已读到的子项
        if on_error is not None:
            on_error(directory, e)
    # 先按名称得到确定的基准顺序，再按 compare 做稳定排序
    children.sort(key=lambda e: e.name)
    if compare is not None:
        children.sort(key=cmp_to_key(compare))
    return children


def walk(
    root: str | os.PathLike[str],
    max_depth: int,
    *,
    prune: Predicate | None = None,
    compare: Comparator | None = None,
    on_error: ErrorHandler | None = report_error,
) -> Iterator[DirectoryEntry]:
    """
    先序遍历 root 下的条目（depth 从 1 开始，不超过 max_depth）。

    :param root: 根目录；自身不输出，也不参与剪枝判断
    :param max_depth: 最大深度（>= 1）；深度等于 max_depth 的目录不会被打开
    :param prune: 剪枝谓词，返回 False 的条目不输出，若为目录则整棵子树都不访问
    :param compare: 同级条目的比较函数（返回负数/0/正数）；默认按名称排序
    :param on_error: 读取目录失败时的回调；为 None 时静默跳过该目录
    """
    if max_depth < 1:
        raise ValueError(f"max_depth must be >= 1, got {max_depth}")
    stack = [iter(_read_children(Path(root), 1, compare, on_error))]
    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue
        if prune is not None and not prune(entry):
            continue
        yield entry
        if entry.descend and entry.depth < max_depth:
            stack.append(iter(_read_children(entry.path, entry.depth + 1, compare, on_error)))
