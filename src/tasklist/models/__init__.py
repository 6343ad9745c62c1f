"""tasklist Domain Models -- 公共类型导出"""

from .enums import (
    CATEGORIES,
    DEFAULT_CATEGORY,
    DEFAULT_SORT_MODE,
    Category,
    SortMode,
)
from .task import Task

__all__ = [
    # 枚举
    "Category",
    "SortMode",
    "CATEGORIES",
    "DEFAULT_CATEGORY",
    "DEFAULT_SORT_MODE",
    # Task
    "Task",
]
