"""枚举定义 -- 任务分类与视图排序方式

Category 与 SortMode 均为封闭集合，取值即持久化/接口上的字符串。
"""

from enum import StrEnum


class Category(StrEnum):
    """任务分类"""

    PERSONAL = "personal"
    WORK = "work"
    SHOPPING = "shopping"
    OTHER = "other"


# 分类选择器的展示顺序
CATEGORIES: tuple[Category, ...] = (
    Category.PERSONAL,
    Category.WORK,
    Category.SHOPPING,
    Category.OTHER,
)

DEFAULT_CATEGORY: Category = Category.PERSONAL


class SortMode(StrEnum):
    """视图排序方式"""

    DUE_DATE = "dueDate"
    CREATED_AT = "createdAt"
    ALPHABETICAL = "alphabetical"


DEFAULT_SORT_MODE: SortMode = SortMode.CREATED_AT
