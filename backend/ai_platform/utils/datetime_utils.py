"""
日期时间工具模块
提供统一的日期时间处理函数
"""

import time
from datetime import datetime, timezone


def get_current_timestamp() -> int:
    """获取当前时间戳（秒级）"""
    return int(time.time())


def get_current_timestamp_ms() -> int:
    """获取当前时间戳（毫秒级）"""
    return int(time.time() * 1000)


def get_current_iso_string() -> str:
    """
    获取当前时间的ISO字符串（UTC）

    Returns:
        str: 当前时间的ISO格式字符串
    """
    return datetime.now(timezone.utc).isoformat()
