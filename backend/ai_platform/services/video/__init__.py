"""
视频生成服务模块
包含请求构建、任务提交轮询和业务处理器
"""

from .request_builder import build_generation_request
from .video_generation_service import VideoGenerationService, get_video_provider
from .video_generation_handler import VideoGenerationHandler

__all__ = [
    'build_generation_request',
    'VideoGenerationService',
    'get_video_provider',
    'VideoGenerationHandler',
]
