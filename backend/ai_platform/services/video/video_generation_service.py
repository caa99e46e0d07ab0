"""
视频生成服务
负责向Provider提交任务并轮询任务状态直到终态或超时
"""

import asyncio
from typing import Optional, List, Dict, Any

from ai_platform.core.config import get_settings
from ai_platform.core.log_utils import get_logger
from ai_platform.core.log_messages import log_messages
from ai_platform.core.ai.config import load_kling_config
from ai_platform.core.ai.exceptions import ProviderError, MissingAssetError, TaskTimeoutError
from ai_platform.core.ai.factory import AIProviderFactory
from ai_platform.core.ai.models import (
    ModelCapability,
    Job,
    JobStatus,
    TaskKind,
    VideoTaskResult,
    TextToVideoRequest,
    SingleImageToVideoRequest,
    MultiImageToVideoRequest,
    VideoGenerationRequest,
)
from ai_platform.core.ai.providers.base.video_gen import BaseVideoGenProvider
from ai_platform.core.ai.registry import register_all_providers

logger = get_logger(__name__)

DEFAULT_VIDEO_PROVIDER = "kling"


def get_video_provider(provider_name: str = DEFAULT_VIDEO_PROVIDER) -> BaseVideoGenProvider:
    """通过工厂创建视频生成Provider，凭据在每次调用时读取"""
    if not AIProviderFactory.is_registered(ModelCapability.VIDEO_GEN, provider_name):
        register_all_providers()

    return AIProviderFactory.create(
        capability=ModelCapability.VIDEO_GEN,
        provider_name=provider_name,
        config_provider=load_kling_config
    )


class VideoGenerationService:
    """视频生成服务"""

    def __init__(
        self,
        provider: Optional[BaseVideoGenProvider] = None,
        poll_interval: Optional[float] = None,
        max_attempts: Optional[int] = None
    ):
        current_settings = get_settings()
        self.provider = provider or get_video_provider()
        self.poll_interval = (
            poll_interval if poll_interval is not None
            else current_settings.video_poll_interval
        )
        self.max_attempts = (
            max_attempts if max_attempts is not None
            else current_settings.video_poll_max_attempts
        )

    def ensure_configured(self) -> None:
        """
        检查Provider凭据

        Raises:
            ConfigurationError: 缺少可灵API密钥
        """
        self.provider.validate_config()

    async def submit(self, request: VideoGenerationRequest) -> Job:
        """
        按请求变体提交任务，每个请求只调用一次Provider

        Raises:
            ProviderError: Provider拒绝提交
        """
        if isinstance(request, MultiImageToVideoRequest):
            logger.info(
                "使用多图参考生视频模式",
                extra={"image_count": len(request.image_list), "model": request.model}
            )
            return await self.provider.submit_multi_image_to_video(request)

        if isinstance(request, SingleImageToVideoRequest):
            logger.info("使用单图生视频模式", extra={"model": request.model})
            return await self.provider.submit_image_to_video(request)

        if isinstance(request, TextToVideoRequest):
            logger.info("使用文生视频模式", extra={"model": request.model})
            return await self.provider.submit_text_to_video(request)

        raise TypeError(f"未知的视频生成请求类型: {type(request).__name__}")

    async def await_completion(
        self,
        job: Job,
        task_kind: Optional[TaskKind] = None
    ) -> VideoTaskResult:
        """
        轮询任务直到终态

        每次先等待 poll_interval 秒再查询，最多查询 max_attempts 次。

        Args:
            job: submit 返回的任务
            task_kind: 查询所用的接口类型，默认取 job.task_kind

        Returns:
            VideoTaskResult: 成功生成的视频

        Raises:
            ProviderError: 任务失败或状态查询失败
            MissingAssetError: 任务成功但没有视频URL
            TaskTimeoutError: 轮询次数耗尽
        """
        task_kind = task_kind or job.task_kind

        for attempt in range(1, self.max_attempts + 1):
            await asyncio.sleep(self.poll_interval)

            current = await self.provider.get_task_status(job.task_id, task_kind)
            job.status = current.status
            job.video_url = current.video_url
            job.duration = current.duration
            job.failure_message = current.failure_message

            logger.info(
                log_messages.VIDEO_TASK_POLLING,
                attempt=attempt,
                max_attempts=self.max_attempts,
                task_status=job.status.value,
                task_id=job.task_id
            )

            if job.status == JobStatus.SUCCEEDED:
                if not job.video_url:
                    raise MissingAssetError(
                        "视频生成成功但未获取到视频URL",
                        details={"task_id": job.task_id}
                    )
                logger.info(log_messages.VIDEO_TASK_SUCCEEDED, task_id=job.task_id)
                return VideoTaskResult(
                    task_id=job.task_id,
                    video_url=job.video_url,
                    duration=job.duration
                )

            if job.status == JobStatus.FAILED:
                logger.warning(log_messages.VIDEO_TASK_FAILED, task_id=job.task_id)
                raise ProviderError(
                    f"任务失败: {job.failure_message or '未知错误'}",
                    details={"task_id": job.task_id}
                )

        logger.warning(log_messages.VIDEO_TASK_TIMEOUT, task_id=job.task_id)
        raise TaskTimeoutError(
            "任务超时，请稍后重试",
            details={"task_id": job.task_id, "attempts": self.max_attempts}
        )

    async def get_task_status(self, task_id: str, task_kind: TaskKind) -> Job:
        """查询一次任务状态"""
        return await self.provider.get_task_status(task_id, task_kind)

    def get_supported_models(self) -> List[Dict[str, Any]]:
        """获取Provider支持的模型列表"""
        return self.provider.get_supported_models()
