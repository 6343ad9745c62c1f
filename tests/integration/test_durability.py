"""进程重启持久性测试

1. 变更 -> 关闭 -> 重新打开 -> 集合一致
2. 损坏的存储槽以空集合启动，随后可以正常写入
"""

from pathlib import Path

import aiosqlite
from tasklist import create_store_group
from tasklist.store.slot_store import SqliteSlotStore
from tasklist.store.sqlite_init import init_db


class TestDurability:
    """重启后任务不丢失"""

    async def test_data_survives_restart(self, tmp_path: Path):
        db_path = str(tmp_path / "durable.db")

        sg1 = await create_store_group(db_path)
        a = await sg1.task_store.create("first")
        b = await sg1.task_store.create("second")
        c = await sg1.task_store.create("third")
        await sg1.task_store.delete(b.id)
        await sg1.task_store.edit(c.id, "  third, edited ")
        expected = sg1.task_store.snapshot()
        await sg1.close()

        sg2 = await create_store_group(db_path)
        try:
            assert sg2.task_store.snapshot() == expected
            assert [t.id for t in sg2.task_store.snapshot()] == [a.id, c.id]
            assert sg2.task_store.get(c.id).text == "third, edited"
        finally:
            await sg2.close()

    async def test_missing_database_starts_empty(self, tmp_path: Path):
        """数据库目录不存在时自动创建，集合为空"""
        sg = await create_store_group(str(tmp_path / "nested" / "dir" / "new.db"))
        try:
            assert len(sg.task_store) == 0
        finally:
            await sg.close()

    async def test_corrupt_slot_starts_empty_then_recovers(self, tmp_path: Path):
        db_path = str(tmp_path / "corrupt.db")

        conn = await aiosqlite.connect(db_path)
        await init_db(conn)
        await SqliteSlotStore(conn).set_item("todos", "{not valid json")
        await conn.close()

        sg = await create_store_group(db_path)
        try:
            assert len(sg.task_store) == 0
            await sg.task_store.create("fresh start")
        finally:
            await sg.close()

        sg2 = await create_store_group(db_path)
        try:
            assert [t.text for t in sg2.task_store.snapshot()] == ["fresh start"]
        finally:
            await sg2.close()

    async def test_slot_keys_isolate_lists(self, tmp_path: Path):
        db_path = str(tmp_path / "multi.db")

        personal = await create_store_group(db_path, slot_key="todos")
        await personal.task_store.create("mine")
        await personal.close()

        other = await create_store_group(db_path, slot_key="shared")
        try:
            assert len(other.task_store) == 0
        finally:
            await other.close()


class TestUnusableDatabase:
    """数据库文件不可用时以空集合启动，不阻塞进程"""

    async def test_garbage_file_is_moved_aside_and_recreated(self, tmp_path: Path):
        """非 SQLite 文件：移到一旁后重建，新数据可持久化"""
        db_file = tmp_path / "garbage.db"
        db_file.write_bytes(b"this is not a sqlite database" * 100)

        sg = await create_store_group(str(db_file))
        try:
            assert len(sg.task_store) == 0
            assert sg.is_durable is True
            assert await sg.task_store.create("after recovery") is not None
        finally:
            await sg.close()

        corrupt_copies = list(tmp_path.glob("garbage.db.corrupt-*"))
        assert len(corrupt_copies) == 1
        assert corrupt_copies[0].read_bytes().startswith(b"this is not a sqlite database")

        sg2 = await create_store_group(str(db_file))
        try:
            assert [t.text for t in sg2.task_store.snapshot()] == ["after recovery"]
        finally:
            await sg2.close()

    async def test_directory_path_falls_back_to_memory(self, tmp_path: Path):
        """路径无法作为数据库打开时退回内存数据库，变更仍可用"""
        db_dir = tmp_path / "not-a-file.db"
        db_dir.mkdir()

        sg = await create_store_group(str(db_dir))
        try:
            assert sg.is_durable is False
            assert len(sg.task_store) == 0
            task = await sg.task_store.create("kept in memory")
            assert await sg.task_store.toggle(task.id) is not None
            assert len(sg.task_store) == 1
        finally:
            await sg.close()

        assert db_dir.is_dir()
        assert list(tmp_path.glob("*.corrupt-*")) == []
