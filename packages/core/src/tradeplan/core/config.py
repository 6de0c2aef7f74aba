"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径、查询窗口天数、日志格式等可配置常量。
"""

import os
from pathlib import Path


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("TRADEPLAN_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "TRADEPLAN_DB_PATH",
        str(_get_base_dir() / "sqlite" / "tradeplan.db"),
    )


def get_log_format() -> str:
    """获取日志渲染模式：dev / json"""
    return os.environ.get("TRADEPLAN_LOG_FORMAT", "dev")


def get_log_level() -> str:
    """获取日志级别"""
    return os.environ.get("TRADEPLAN_LOG_LEVEL", "INFO")


# upcoming_tasks 默认向前查看的天数
UPCOMING_DAYS_AHEAD: int = int(os.environ.get("TRADEPLAN_UPCOMING_DAYS_AHEAD", "14"))

# 截止日期展示为 "upcoming" 的最大天数，超过即为 "future"
DUE_SOON_WINDOW_DAYS: int = int(os.environ.get("TRADEPLAN_DUE_SOON_WINDOW_DAYS", "7"))

# 存储日期的格式（yyyy-MM-dd）
DATE_FORMAT: str = "%Y-%m-%d"
