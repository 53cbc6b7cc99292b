"""时间戳索引命名工具.

索引名称格式为 ``<prefix>_<YYYYMMDDHHMMSS>``，时间统一使用 UTC，
保证命名与保留期截止时间的计算口径一致，避免夏令时切换带来的歧义。
"""

from __future__ import annotations

import re
from datetime import datetime, UTC

from .models import TIMESTAMP_FORMAT

_TIMESTAMP_SUFFIX_PATTERN = re.compile(r"^(?P<prefix>.+)_(?P<timestamp>\d{14})$")


def utc_now() -> datetime:
    """返回当前 UTC 时间（tz-aware）."""
    return datetime.now(UTC)


def _to_utc(dt: datetime) -> datetime:
    # naive datetime 视为 UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def start_of_day(dt: datetime) -> datetime:
    """截断到当天 00:00:00（UTC）."""
    return _to_utc(dt).replace(hour=0, minute=0, second=0, microsecond=0)


def to_epoch_millis(dt: datetime) -> int:
    """将 datetime 转换为毫秒时间戳."""
    return int(_to_utc(dt).timestamp() * 1000)


def timestamped_name(prefix: str, now: datetime | None = None) -> str:
    """生成带时间戳的索引名称.

    Args:
        prefix: 索引名称前缀，通常与别名同名
        now: 生成名称所用的时间，默认为当前 UTC 时间

    Returns:
        形如 ``logs_20240101000000`` 的索引名称

    Note:
        时间戳精度为秒，同一秒内对同一前缀重复调用会得到相同名称，
        此时由集群拒绝创建并报告为创建失败。

    Example:
        >>> timestamped_name("logs", datetime(2024, 1, 1, tzinfo=UTC))
        'logs_20240101000000'
    """
    moment = _to_utc(now) if now is not None else utc_now()
    return f"{prefix}_{moment.strftime(TIMESTAMP_FORMAT)}"


def parse_timestamped_name(index_name: str) -> tuple[str, datetime] | None:
    """解析时间戳索引名称.

    Args:
        index_name: 索引名称

    Returns:
        (前缀, UTC 创建时间) 元组；名称不符合时间戳格式时返回 None
    """
    match = _TIMESTAMP_SUFFIX_PATTERN.match(index_name)
    if not match:
        return None
    try:
        moment = datetime.strptime(match.group("timestamp"), TIMESTAMP_FORMAT)
    except ValueError:
        return None
    return match.group("prefix"), moment.replace(tzinfo=UTC)
