"""tasklist Store -- SQLite 持久化实现

提供工厂函数创建共享数据库连接的 Store 实例组。
数据库文件无法打开或已损坏时不会阻塞启动：损坏文件被移到一旁后重建，
仍然失败则退回内存数据库（本次会话内可用，但不持久）。
"""

from datetime import UTC, datetime
from pathlib import Path

import aiosqlite
import structlog

from ..config import DEFAULT_SLOT_KEY
from ..exceptions import SlotStorageError
from .protocols import SlotStore
from .slot_store import SqliteSlotStore
from .sqlite_init import init_db
from .task_store import TaskStore, deserialize_tasks, serialize_tasks

log = structlog.get_logger()

MEMORY_DB_PATH = ":memory:"

# SQLite 主文件之外的 WAL 模式附属文件
_SIDECAR_SUFFIXES = ("-wal", "-shm")


class StoreGroup:
    """Store 实例组 -- 共享同一个数据库连接"""

    def __init__(
        self,
        conn: aiosqlite.Connection,
        slot_key: str = DEFAULT_SLOT_KEY,
        db_path: str = MEMORY_DB_PATH,
    ) -> None:
        self.conn = conn
        self.db_path = db_path
        self.slot_store = SqliteSlotStore(conn)
        self.task_store = TaskStore(self.slot_store, slot_key)

    @property
    def is_durable(self) -> bool:
        """False 表示已退回内存数据库"""
        return self.db_path != MEMORY_DB_PATH

    async def close(self) -> None:
        """关闭数据库连接（内存中的任务集合随之丢弃）"""
        await self.conn.close()


async def _open_connection(db_path: str) -> aiosqlite.Connection:
    """打开并初始化连接；初始化失败时关闭连接再抛出（避免遗留工作线程）"""
    if db_path != MEMORY_DB_PATH:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path)
    try:
        await init_db(conn)
    except BaseException:
        await conn.close()
        raise
    return conn


def _move_aside(db_path: str) -> Path | None:
    """把损坏的数据库文件（含 -wal/-shm）改名保留，返回新路径"""
    path = Path(db_path)
    if not path.is_file():
        return None

    stamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S%f")
    target = path.with_name(f"{path.name}.corrupt-{stamp}")
    path.replace(target)
    for suffix in _SIDECAR_SUFFIXES:
        sidecar = path.with_name(path.name + suffix)
        if sidecar.is_file():
            sidecar.replace(target.with_name(target.name + suffix))
    return target


async def _recover_connection(db_path: str, slot_key: str) -> tuple[aiosqlite.Connection, str]:
    """移走损坏文件后重建；仍失败则使用内存数据库"""
    try:
        moved_to = _move_aside(db_path)
        conn = await _open_connection(db_path)
    except (aiosqlite.Error, OSError) as e:
        log.warning(
            "task_list_memory_fallback",
            slot_key=slot_key,
            db_path=db_path,
            error=str(SlotStorageError(slot_key, e)),
        )
        return await _open_connection(MEMORY_DB_PATH), MEMORY_DB_PATH

    log.warning(
        "task_list_db_recreated",
        slot_key=slot_key,
        db_path=db_path,
        corrupt_copy=str(moved_to) if moved_to else None,
    )
    return conn, db_path


async def create_store_group(
    db_path: str,
    slot_key: str = DEFAULT_SLOT_KEY,
) -> StoreGroup:
    """创建 Store 实例组并加载任务列表

    Args:
        db_path: SQLite 数据库文件路径
        slot_key: 任务列表存储槽名称

    Returns:
        已完成 load() 的 StoreGroup 实例；数据库不可用时集合为空
    """
    try:
        conn = await _open_connection(db_path)
        opened_path = db_path
    except (aiosqlite.Error, OSError) as e:
        error = SlotStorageError(slot_key, e)
        log.warning(
            "task_list_load_failed",
            slot_key=slot_key,
            error=str(error),
            error_type=type(e).__name__,
        )
        conn, opened_path = await _recover_connection(db_path, slot_key)

    group = StoreGroup(conn=conn, slot_key=slot_key, db_path=opened_path)
    await group.task_store.load()
    return group


__all__ = [
    "StoreGroup",
    "create_store_group",
    "MEMORY_DB_PATH",
    "SlotStore",
    "SqliteSlotStore",
    "TaskStore",
    "init_db",
    "serialize_tasks",
    "deserialize_tasks",
]
