"""配置模块 -- 可通过环境变量覆盖

包含数据库路径、存储槽名称、默认排序方式等可配置项。
"""

import os
from pathlib import Path
from typing import Literal

import structlog
from pydantic import BaseModel, Field

from .models.enums import DEFAULT_SORT_MODE, SortMode

log = structlog.get_logger()

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
_LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR")

# 任务列表所在存储槽的固定名称
DEFAULT_SLOT_KEY: str = "todos"


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("TASKLIST_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "TASKLIST_DB_PATH",
        str(_get_base_dir() / "sqlite" / "tasklist.db"),
    )


class TaskListConfig(BaseModel):
    """tasklist 配置 -- 从环境变量加载

    环境变量:
        TASKLIST_DB_PATH: SQLite 数据库路径
        TASKLIST_SLOT_KEY: 任务列表存储槽名称（默认 todos）
        TASKLIST_DEFAULT_SORT: 默认排序方式（dueDate/createdAt/alphabetical）
        TASKLIST_LOG_FORMAT: 日志格式（dev/json）
        TASKLIST_LOG_LEVEL: 日志级别（DEBUG/INFO/WARNING/ERROR）
    """

    db_path: str = Field(description="SQLite 数据库路径")
    slot_key: str = Field(
        default=DEFAULT_SLOT_KEY,
        min_length=1,
        description="任务列表存储槽名称",
    )
    default_sort: SortMode = Field(
        default=DEFAULT_SORT_MODE,
        description="默认排序方式",
    )
    log_format: Literal["dev", "json"] = Field(
        default="dev",
        description="日志输出格式",
    )
    log_level: LogLevel = Field(
        default="INFO",
        description="根 logger 级别",
    )


def load_config() -> TaskListConfig:
    """从环境变量加载配置

    非法的排序方式或日志级别不阻塞启动：记录 warning 并回退到默认值。

    Returns:
        TaskListConfig 实例
    """
    kwargs: dict = {"db_path": get_db_path()}

    if val := os.environ.get("TASKLIST_SLOT_KEY"):
        kwargs["slot_key"] = val

    if val := os.environ.get("TASKLIST_DEFAULT_SORT"):
        try:
            kwargs["default_sort"] = SortMode(val)
        except ValueError:
            log.warning(
                "invalid_sort_config",
                env_var="TASKLIST_DEFAULT_SORT",
                value=val,
                fallback=DEFAULT_SORT_MODE.value,
            )

    if val := os.environ.get("TASKLIST_LOG_FORMAT"):
        kwargs["log_format"] = "json" if val == "json" else "dev"

    if val := os.environ.get("TASKLIST_LOG_LEVEL"):
        if val.upper() in _LOG_LEVELS:
            kwargs["log_level"] = val.upper()
        else:
            log.warning(
                "invalid_log_level_config",
                env_var="TASKLIST_LOG_LEVEL",
                value=val,
                fallback="INFO",
            )

    return TaskListConfig(**kwargs)
