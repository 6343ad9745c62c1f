"""Store Protocol 接口定义

SlotStore 是"单个命名存储槽"的抽象：每个 key 保存一个完整的字符串值。
使用 Python Protocol 实现结构化子类型（duck typing），测试可替换为内存实现。
"""

from typing import Protocol


class SlotStore(Protocol):
    """键值存储槽接口

    实现方读写失败时应抛出 SlotStorageError。
    """

    async def get_item(self, key: str) -> str | None:
        """读取 key 对应的值，不存在时返回 None"""
        ...

    async def set_item(self, key: str, value: str) -> None:
        """整体覆盖写入 key 对应的值（原子提交）"""
        ...
