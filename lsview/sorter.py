"""
按创建时间排序。

缺失的创建时间视为最早（升序时排最前，降序时排最后）；
reversed 通过反转比较函数实现，而不是排序后再整体翻转，
因此时间相同（或都缺失）的条目在两个方向上都保持输入顺序。
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Callable, Iterable, TypeVar

T = TypeVar("T")

_OLDEST = float("-inf")


def created_comparator(reversed: bool = False) -> Callable[[float | None, float | None], int]:
    """返回比较两个可选时间戳的函数（None 视为最早）。"""

    def compare(a: float | None, b: float | None) -> int:
        ka = _OLDEST if a is None else a
        kb = _OLDEST if b is None else b
        if reversed:
            ka, kb = kb, ka
        return (ka > kb) - (ka < kb)

    return compare


def _created_of(item: Any) -> float | None:
    return item.created


def sort_by_created(
    items: Iterable[T],
    *,
    reversed: bool = False,
    key: Callable[[T], float | None] = _created_of,
) -> list[T]:
    """
    稳定排序，返回新列表。

    :param items: 已物化的条目（默认取 item.created 作为时间戳）
    :param reversed: True 时按创建时间降序
    :param key: 从条目中取出可选时间戳的函数
    """
    compare = created_comparator(reversed)
    return sorted(items, key=cmp_to_key(lambda a, b: compare(key(a), key(b))))
