"""
AI模型交互统一模块
提供统一的AI Provider接口和视频生成Provider实现
"""

from .base import BaseAIProvider
from .models import ModelCapability, TaskKind, JobStatus, Job, VideoTaskResult
from .factory import AIProviderFactory
from .registry import register_all_providers

__all__ = [
    "BaseAIProvider",
    "ModelCapability",
    "TaskKind",
    "JobStatus",
    "Job",
    "VideoTaskResult",
    "AIProviderFactory",
    "register_all_providers",
]
