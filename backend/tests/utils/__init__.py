"""
测试工具包
提供统一的测试工具和辅助函数
"""

from .mock_utils import (
    MockBuilder,
    KlingTransportRecorder,
    kling_envelope,
    kling_task_data,
    status_response,
    static_config_provider,
)

__all__ = [
    'MockBuilder',
    'KlingTransportRecorder',
    'kling_envelope',
    'kling_task_data',
    'status_response',
    'static_config_provider',
]
