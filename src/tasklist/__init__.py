"""tasklist -- 个人待办清单核心

TaskStore 持有并持久化任务集合，project() 计算搜索 + 排序后的展示序列。
"""

from .exceptions import (
    CorruptSlotError,
    SlotStorageError,
    TaskListError,
    UnknownCategoryError,
    UnknownSortModeError,
)
from .models import CATEGORIES, Category, SortMode, Task
from .projection import matches_search, project, sort_tasks
from .store import StoreGroup, TaskStore, create_store_group

__all__ = [
    "Task",
    "Category",
    "SortMode",
    "CATEGORIES",
    "TaskStore",
    "StoreGroup",
    "create_store_group",
    "project",
    "sort_tasks",
    "matches_search",
    "TaskListError",
    "SlotStorageError",
    "CorruptSlotError",
    "UnknownSortModeError",
    "UnknownCategoryError",
]
