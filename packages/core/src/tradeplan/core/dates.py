"""日期/偏移工具 -- 所有上层逻辑共用的纯函数

日期一律为不带时间分量的 datetime.date，序列化为 yyyy-MM-dd。
"今天" 只在调用方未显式传入 today 时才读取系统时钟。
"""

from datetime import UTC, date, datetime, timedelta

from .config import DATE_FORMAT
from .exceptions import InvalidDateError


def parse_date(value: date | str | None) -> date:
    """将 date 或 yyyy-MM-dd 字符串解析为 date

    Raises:
        InvalidDateError: 值为空或格式不合法
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        raise InvalidDateError(value)
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except (AttributeError, ValueError) as e:
        raise InvalidDateError(value) from e


def format_date(value: date) -> str:
    """格式化为 yyyy-MM-dd"""
    return value.strftime(DATE_FORMAT)


def format_display_date(value: date) -> str:
    """格式化为展示用日期，如 Mar 6, 2025"""
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def add_days(value: date, days: int) -> date:
    """value 之后（负数为之前）第 days 天"""
    return value + timedelta(days=days)


def days_between(start: date, end: date) -> int:
    """end - start 的整天数，end 早于 start 时为负"""
    return (end - start).days


def today() -> date:
    """本地日历的今天"""
    return date.today()


def utc_now() -> datetime:
    """当前 UTC 时间戳"""
    return datetime.now(UTC)


def resolve_today(value: date | None) -> date:
    """显式传入的参考日期优先，否则读取系统时钟"""
    return value if value is not None else today()


def is_past(value: date, reference: date) -> bool:
    """value 是否严格早于 reference 当天"""
    return value < reference


def days_until(value: date, reference: date) -> int:
    return days_between(reference, value)


def days_since(value: date, reference: date) -> int:
    return days_between(value, reference)


def pluralize_days(count: int) -> str:
    """返回 "1 day" / "N days" 形式的天数文本"""
    return f"{count} day{'' if count == 1 else 's'}"
