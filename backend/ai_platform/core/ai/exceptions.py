"""
视频生成异常定义
定义视频生成流程中使用的所有异常类型
"""

from typing import Any, Dict, Optional


class VideoGenerationError(Exception):
    """
    视频生成基础异常

    所有视频生成相关异常的基类。

    Attributes:
        message: 错误消息
        code: 错误码
        details: 错误详情
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class GenerationValidationError(VideoGenerationError):
    """请求参数校验失败（调用方错误，不做降级处理）"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class ConfigurationError(VideoGenerationError):
    """Provider配置缺失或无效"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="CONFIG_ERROR", details=details)


class ProviderError(VideoGenerationError):
    """Provider拒绝提交或任务执行失败"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message, code="PROVIDER_ERROR", details=details)
        self.status_code = status_code


class MissingAssetError(VideoGenerationError):
    """任务成功但响应中没有可用的视频URL"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="MISSING_ASSET", details=details)


class TaskTimeoutError(VideoGenerationError):
    """轮询次数耗尽仍未到达终态"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="TASK_TIMEOUT", details=details)


__all__ = [
    'VideoGenerationError',
    'GenerationValidationError',
    'ConfigurationError',
    'ProviderError',
    'MissingAssetError',
    'TaskTimeoutError',
]
