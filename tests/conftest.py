"""全局 pytest 配置 -- 临时 SQLite 数据库 + Store fixture"""

from collections.abc import AsyncGenerator
from pathlib import Path

import aiosqlite
import pytest_asyncio
from tasklist.exceptions import SlotStorageError
from tasklist.store import StoreGroup, create_store_group


class MemorySlotStore:
    """内存 SlotStore，可模拟读写失败"""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(initial or {})
        self.fail_reads = False
        self.fail_writes = False
        self.write_count = 0

    async def get_item(self, key: str) -> str | None:
        if self.fail_reads:
            raise SlotStorageError(key, OSError("read failed"))
        return self.items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise SlotStorageError(key, OSError("disk full"))
        self.write_count += 1
        self.items[key] = value


@pytest_asyncio.fixture
async def tmp_db_path(tmp_path: Path) -> Path:
    """提供临时 SQLite 数据库路径"""
    return tmp_path / "sqlite" / "test.db"


@pytest_asyncio.fixture
async def db_conn(tmp_path: Path) -> AsyncGenerator[aiosqlite.Connection, None]:
    """提供已初始化的临时 SQLite 数据库连接"""
    from tasklist.store.sqlite_init import init_db

    conn = await aiosqlite.connect(str(tmp_path / "conn.db"))
    await init_db(conn)
    yield conn
    await conn.close()


@pytest_asyncio.fixture
async def store_group(tmp_db_path: Path) -> AsyncGenerator[StoreGroup, None]:
    """提供已加载的 StoreGroup（空存储）"""
    sg = await create_store_group(str(tmp_db_path))
    yield sg
    await sg.close()


@pytest_asyncio.fixture
async def memory_slot_store() -> MemorySlotStore:
    """提供空的内存 SlotStore"""
    return MemorySlotStore()
