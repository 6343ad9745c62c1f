"""SlotStore SQLite 实现

每次 set_item 在单个事务内整体覆盖一行，读方不会看到写了一半的值。
"""

import contextlib
from datetime import UTC, datetime

import aiosqlite

from ..exceptions import SlotStorageError


class SqliteSlotStore:
    """SlotStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def get_item(self, key: str) -> str | None:
        """读取存储槽，不存在时返回 None"""
        try:
            cursor = await self._conn.execute(
                "SELECT value FROM slots WHERE key = ?",
                (key,),
            )
            row = await cursor.fetchone()
        except (aiosqlite.Error, ValueError) as e:
            # aiosqlite 在连接关闭后抛出 ValueError
            raise SlotStorageError(key, e) from e
        return row[0] if row else None

    async def set_item(self, key: str, value: str) -> None:
        """整体写入存储槽（INSERT OR REPLACE + commit）"""
        try:
            await self._conn.execute(
                """
                INSERT INTO slots (key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value, datetime.now(UTC).isoformat()),
            )
            await self._conn.commit()
        except (aiosqlite.Error, ValueError) as e:
            await self._safe_rollback()
            raise SlotStorageError(key, e) from e

    async def _safe_rollback(self) -> None:
        with contextlib.suppress(aiosqlite.Error, ValueError):
            await self._conn.rollback()
