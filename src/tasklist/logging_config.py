"""structlog 配置模块

格式与级别来自 TaskListConfig（TASKLIST_LOG_FORMAT / TASKLIST_LOG_LEVEL），本模块不读环境变量。
dev 模式：ConsoleRenderer 可读输出（自带异常格式化）
json 模式：一行一个 JSON 事件，异常展开为 exception 字段
"""

import logging

import structlog

# aiosqlite 在 DEBUG 级别逐条记录 SQL 操作，每次写回存储槽都会刷屏
_NOISY_LOGGERS: tuple[str, ...] = ("aiosqlite",)


def _build_renderer(log_format: str) -> tuple[list[structlog.types.Processor], structlog.types.Processor]:
    """返回 (渲染前的额外处理器, 渲染器)"""
    if log_format == "json":
        return [structlog.processors.format_exc_info], structlog.processors.JSONRenderer(
            ensure_ascii=False
        )
    return [], structlog.dev.ConsoleRenderer()


def setup_logging(log_format: str = "dev", log_level: str = "INFO") -> None:
    """初始化 structlog 配置

    可重复调用：每次都会替换根 logger 上的 handler。

    Args:
        log_format: "json" 或 "dev"
        log_level: 根 logger 级别名称（DEBUG/INFO/WARNING/ERROR）
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    extra_processors, renderer = _build_renderer(log_format)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *extra_processors,
            renderer,
        ],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
