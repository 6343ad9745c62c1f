"""CLI 入口模块 -- python -m tasklist <command>

支持的命令：
  list [sort_mode] [search]  加载任务列表并打印投影结果
"""

import asyncio
import sys

from .config import load_config
from .logging_config import setup_logging
from .models.enums import SortMode


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print("用法: python -m tasklist <command>")
        print("命令:")
        print("  list [sort_mode] [search]  打印任务列表（sort_mode: dueDate/createdAt/alphabetical）")
        sys.exit(1)

    command = sys.argv[1]

    if command == "list":
        # 先以默认格式接管日志，load_config 的 warning 也走统一渲染
        setup_logging()
        config = load_config()
        setup_logging(config.log_format, config.log_level)
        sort_mode = sys.argv[2] if len(sys.argv) > 2 else config.default_sort.value
        search = sys.argv[3] if len(sys.argv) > 3 else ""
        if sort_mode not in {m.value for m in SortMode}:
            print(f"未知排序方式: {sort_mode}")
            sys.exit(1)
        asyncio.run(list_tasks(config.db_path, config.slot_key, sort_mode, search))
    else:
        print(f"未知命令: {command}")
        print("可用命令: list")
        sys.exit(1)


async def list_tasks(db_path: str, slot_key: str, sort_mode: str, search: str) -> None:
    """加载存储并打印投影后的任务列表"""
    from .projection import project
    from .store import create_store_group

    store_group = await create_store_group(db_path, slot_key)

    try:
        rows = project(store_group.task_store.snapshot(), search, sort_mode)
        print(f"数据库路径: {db_path}")
        print(f"共 {len(rows)} 条（总计 {len(store_group.task_store)} 条）")
        for task in rows:
            mark = "x" if task.completed else " "
            due = task.due_date.date().isoformat() if task.due_date else "-"
            print(f"[{mark}] {task.text}  ({task.category.value}, 截止 {due})")
    finally:
        await store_group.close()


if __name__ == "__main__":
    main()
