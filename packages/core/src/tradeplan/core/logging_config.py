"""structlog 配置模块

日志统一写 stderr，stdout 留给 CLI 的命令输出（提醒列表等）。
dev 模式：彩色可读输出
json 模式：每行一个 JSON 对象，宿主进程收集日志时使用
级别过滤在 bound logger 层完成，低于 TRADEPLAN_LOG_LEVEL 的调用直接丢弃。
"""

import logging
import sys

import structlog

from .config import get_log_format, get_log_level


def _stderr_logger_factory(*args: object) -> structlog.PrintLogger:
    # 每次取当前 sys.stderr，测试替换 stderr 后仍能写到新的流
    return structlog.PrintLogger(file=sys.stderr)


def _level_number(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging() -> None:
    """初始化 structlog 配置

    读取 TRADEPLAN_LOG_FORMAT（dev / json）与 TRADEPLAN_LOG_LEVEL。
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if get_log_format() == "json":
        processors += [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_level_number(get_log_level())),
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )
