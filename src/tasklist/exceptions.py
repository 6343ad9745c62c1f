"""tasklist 异常体系

持久化相关异常（SlotStorageError / CorruptSlotError）在 TaskStore 内部被捕获并记录日志，
不会传播到调用方；边界参数错误（UnknownSortModeError / UnknownCategoryError）直接抛出。
"""


class TaskListError(Exception):
    """tasklist 包基础异常"""

    def __init__(self, message: str, recoverable: bool = True) -> None:
        """
        Args:
            message: 错误描述
            recoverable: 是否可在本地恢复（记录日志后继续运行）
        """
        super().__init__(message)
        self.recoverable = recoverable


class SlotStorageError(TaskListError):
    """存储槽读写失败（数据库不可用、连接已关闭、磁盘错误等）"""

    def __init__(self, key: str, original_error: Exception) -> None:
        """
        Args:
            key: 存储槽名称
            original_error: 原始异常
        """
        super().__init__(
            f"存储槽读写失败: {key} -- {original_error}",
            recoverable=True,
        )
        self.key = key
        self.original_error = original_error


class CorruptSlotError(TaskListError):
    """存储槽内容无法解析，或违反数据约束（如 id 重复）"""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"存储槽内容损坏: {key} -- {reason}", recoverable=True)
        self.key = key
        self.reason = reason


class UnknownSortModeError(TaskListError, ValueError):
    """未知排序方式（排序方式是封闭枚举，不接受自由文本）"""

    def __init__(self, sort_mode: object) -> None:
        super().__init__(f"未知排序方式: {sort_mode!r}", recoverable=False)
        self.sort_mode = sort_mode


class UnknownCategoryError(TaskListError, ValueError):
    """未知分类"""

    def __init__(self, category: object) -> None:
        super().__init__(f"未知分类: {category!r}", recoverable=False)
        self.category = category
