"""TaskStore -- 待办清单的唯一持有者与唯一写入方

内存中的 Task 列表是当前会话的权威状态；每次成功的变更操作后，
整个列表被重新序列化并写入同一个存储槽（best-effort，失败只记日志，不回滚内存）。
"""

from datetime import UTC, date, datetime

import structlog
from pydantic import TypeAdapter, ValidationError
from ulid import ULID

from ..config import DEFAULT_SLOT_KEY
from ..exceptions import CorruptSlotError, SlotStorageError, UnknownCategoryError
from ..models.enums import DEFAULT_CATEGORY, Category
from ..models.task import Task
from .protocols import SlotStore

log = structlog.get_logger()

_TASK_LIST = TypeAdapter(list[Task])


def serialize_tasks(tasks: list[Task] | tuple[Task, ...]) -> str:
    """将完整任务列表序列化为存储槽中的 JSON 字符串"""
    return _TASK_LIST.dump_json(list(tasks), by_alias=True).decode("utf-8")


def deserialize_tasks(raw: str, key: str = DEFAULT_SLOT_KEY) -> list[Task]:
    """解析存储槽内容

    Raises:
        CorruptSlotError: JSON 无法解析、字段不合法或 id 重复
    """
    try:
        tasks = _TASK_LIST.validate_json(raw)
    except ValidationError as e:
        raise CorruptSlotError(key, f"{e.error_count()} 个字段校验失败") from e

    seen: set[str] = set()
    for task in tasks:
        if task.id in seen:
            raise CorruptSlotError(key, f"重复的 id: {task.id}")
        seen.add(task.id)
    return tasks


class TaskStore:
    """待办清单存储

    对外只暴露 load/create/toggle/edit/delete 五个操作和只读快照。
    校验失败（空白文本、未知 id）一律静默 no-op，不抛异常。
    """

    def __init__(self, slot_store: SlotStore, slot_key: str = DEFAULT_SLOT_KEY) -> None:
        self._slot_store = slot_store
        self._slot_key = slot_key
        self._tasks: list[Task] = []

    @property
    def slot_key(self) -> str:
        return self._slot_key

    def __len__(self) -> int:
        return len(self._tasks)

    def snapshot(self) -> tuple[Task, ...]:
        """当前集合的只读快照（按插入顺序）"""
        return tuple(self._tasks)

    def get(self, task_id: str) -> Task | None:
        """按 id 查找任务"""
        index = self._index_of(task_id)
        return None if index is None else self._tasks[index]

    async def load(self) -> None:
        """从存储槽加载任务列表，替换内存集合

        存储槽不存在时集合为空；读取失败或内容损坏时记录日志并以空集合启动。
        """
        self._tasks = []
        try:
            raw = await self._slot_store.get_item(self._slot_key)
            if raw is None:
                log.info("task_list_slot_empty", slot_key=self._slot_key)
                return
            self._tasks = deserialize_tasks(raw, self._slot_key)
        except (SlotStorageError, CorruptSlotError) as e:
            log.warning(
                "task_list_load_failed",
                slot_key=self._slot_key,
                error=str(e),
                error_type=type(e).__name__,
            )
            return

        log.info("task_list_loaded", slot_key=self._slot_key, task_count=len(self._tasks))

    async def create(
        self,
        text: str,
        category: Category | str = DEFAULT_CATEGORY,
        due_date: date | datetime | None = None,
    ) -> Task | None:
        """创建任务并追加到列表末尾

        Args:
            text: 任务文本，去除首尾空白后为空则忽略
            category: 分类，默认 personal
            due_date: 截止时间，None 表示没有截止时间

        Returns:
            新建的 Task；文本为空白时返回 None

        Raises:
            UnknownCategoryError: category 不属于固定枚举
        """
        trimmed = text.strip()
        if not trimmed:
            return None

        try:
            category = Category(category)
        except ValueError as e:
            raise UnknownCategoryError(category) from e

        task = Task(
            id=self._new_id(),
            text=trimmed,
            completed=False,
            category=category,
            due_date=due_date,
            created_at=datetime.now(UTC),
        )
        self._tasks.append(task)
        log.debug("task_created", task_id=task.id, category=task.category.value)

        await self._persist()
        return task

    async def toggle(self, task_id: str) -> Task | None:
        """翻转任务完成状态，id 不存在时 no-op"""
        index = self._index_of(task_id)
        if index is None:
            return None

        current = self._tasks[index]
        updated = current.model_copy(update={"completed": not current.completed})
        self._tasks[index] = updated
        log.debug("task_toggled", task_id=task_id, completed=updated.completed)

        await self._persist()
        return updated

    async def edit(self, task_id: str, new_text: str) -> Task | None:
        """替换任务文本（其他字段不变）

        文本去除首尾空白后为空，或 id 不存在时 no-op。
        """
        trimmed = new_text.strip()
        if not trimmed:
            return None
        index = self._index_of(task_id)
        if index is None:
            return None

        updated = self._tasks[index].model_copy(update={"text": trimmed})
        self._tasks[index] = updated
        log.debug("task_edited", task_id=task_id)

        await self._persist()
        return updated

    async def delete(self, task_id: str) -> bool:
        """删除任务

        Returns:
            True 如果删除了记录；id 不存在时返回 False（no-op）
        """
        index = self._index_of(task_id)
        if index is None:
            return False

        del self._tasks[index]
        log.debug("task_deleted", task_id=task_id)

        await self._persist()
        return True

    async def _persist(self) -> None:
        """整体写回存储槽，失败只记录日志（内存状态仍为准）"""
        payload = serialize_tasks(self._tasks)
        try:
            await self._slot_store.set_item(self._slot_key, payload)
        except SlotStorageError as e:
            log.warning(
                "task_list_persist_failed",
                slot_key=self._slot_key,
                task_count=len(self._tasks),
                error=str(e.original_error),
            )

    def _index_of(self, task_id: str) -> int | None:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        return None

    def _new_id(self) -> str:
        existing = {task.id for task in self._tasks}
        while True:
            candidate = str(ULID())
            if candidate not in existing:
                return candidate
