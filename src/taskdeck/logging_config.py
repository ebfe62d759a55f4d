"""structlog 配置模块

CLI 的结果写 stdout，日志统一写 stderr，二者互不干扰。
TASKDECK_LOG_FORMAT: "dev"（默认，可读输出）或 "json"（结构化输出）
TASKDECK_LOG_LEVEL: 根日志级别，默认 WARNING
"""

import logging
import os
import sys

import structlog

# 第三方库的请求级日志过于嘈杂，最低只放行到 WARNING
_NOISY_LOGGERS = ("httpx", "httpcore", "aiosqlite")


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.WARNING


def setup_logging(level: str | None = None, log_format: str | None = None) -> None:
    """初始化 structlog 与标准库 logging

    Args:
        level: 日志级别；未指定时取 TASKDECK_LOG_LEVEL
        log_format: "dev" 或 "json"；未指定时取 TASKDECK_LOG_FORMAT
    """
    log_format = log_format or os.environ.get("TASKDECK_LOG_FORMAT", "dev")
    root_level = _resolve_level(level or os.environ.get("TASKDECK_LOG_LEVEL", "WARNING"))

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(root_level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(root_level, logging.WARNING))
