"""视图投影 -- 由 (任务集合, 搜索词, 排序方式) 计算展示序列

纯函数：不修改输入集合，不做持久化，每次返回新的 list。
所有排序均使用 Python 的稳定排序，相同排序键的记录保持集合中的原有顺序。
"""

import locale
import unicodedata
from collections.abc import Iterable

from .exceptions import UnknownSortModeError
from .models.enums import DEFAULT_SORT_MODE, SortMode
from .models.task import Task


def matches_search(task: Task, search: str) -> bool:
    """文本或分类包含搜索词（大小写不敏感）；空搜索词匹配全部"""
    if not search:
        return True
    needle = search.casefold()
    return needle in task.text.casefold() or needle in task.category.value.casefold()


def _collation_key(text: str) -> tuple[str, str, str]:
    """近似 locale 感知比较的排序键

    主键：去重音 + casefold 后交给当前 locale 的 strxfrm；
    次键依次为 casefold 文本和大小写互换后的原文（同一字母小写在前），保证结果确定。
    strxfrm 不接受 NUL 字符，主键中将其去掉。
    """
    folded = text.casefold()
    base = "".join(
        ch
        for ch in unicodedata.normalize("NFKD", folded)
        if ch != "\x00" and not unicodedata.combining(ch)
    )
    return locale.strxfrm(base), folded, text.swapcase()


def _due_date_key(task: Task) -> tuple[bool, float]:
    # 没有截止时间的排在所有有截止时间的之后
    if task.due_date is None:
        return True, 0.0
    return False, task.due_date.timestamp()


def _coerce_sort_mode(sort_mode: SortMode | str) -> SortMode:
    try:
        return SortMode(sort_mode)
    except ValueError as e:
        raise UnknownSortModeError(sort_mode) from e


def sort_tasks(tasks: Iterable[Task], sort_mode: SortMode | str) -> list[Task]:
    """按排序方式返回新的有序列表

    Raises:
        UnknownSortModeError: 排序方式不在枚举中
    """
    mode = _coerce_sort_mode(sort_mode)

    if mode == SortMode.DUE_DATE:
        return sorted(tasks, key=_due_date_key)
    if mode == SortMode.ALPHABETICAL:
        return sorted(tasks, key=lambda t: _collation_key(t.text))
    # createdAt: 新创建的在前；reverse=True 仍保持相等元素的原有顺序
    return sorted(tasks, key=lambda t: t.created_at.timestamp(), reverse=True)


def project(
    tasks: Iterable[Task],
    search: str = "",
    sort_mode: SortMode | str = DEFAULT_SORT_MODE,
) -> list[Task]:
    """计算展示序列：先过滤，再排序

    Args:
        tasks: 完整任务集合（通常为 TaskStore.snapshot()）
        search: 搜索词，空字符串匹配全部
        sort_mode: 排序方式

    Returns:
        新的有序 list，不会返回或修改输入集合本身

    Raises:
        UnknownSortModeError: 排序方式不在枚举中
    """
    mode = _coerce_sort_mode(sort_mode)
    filtered = [task for task in tasks if matches_search(task, search)]
    return sort_tasks(filtered, mode)
