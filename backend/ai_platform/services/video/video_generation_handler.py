"""
视频生成业务处理器
处理视频生成请求的测试模式、降级策略和响应组装
"""

import asyncio
from typing import Optional, Union, Dict, Any

from fastapi import HTTPException, status

from ai_platform.core.config import get_settings
from ai_platform.core.log_utils import get_logger
from ai_platform.core.log_messages import log_messages
from ai_platform.core.ai.exceptions import GenerationValidationError, ProviderError
from ai_platform.core.ai.models import TaskKind, VideoGenerationRequest, SingleImageToVideoRequest
from ai_platform.schemas.common import StandardResponse
from ai_platform.schemas.video_generation import (
    VideoGenerateRequest,
    VideoGenerateResponse,
    VideoGenerateMetadata,
    VideoModelInfo,
    VideoTaskStatusResponse,
)
from ai_platform.services.video.request_builder import build_generation_request
from ai_platform.services.video.video_generation_service import VideoGenerationService
from ai_platform.utils.datetime_utils import get_current_iso_string, get_current_timestamp_ms
from ai_platform.utils.string_utils import truncate_string

logger = get_logger(__name__)

SUCCESS_RESULT = "✅ 视频生成完成"
TEST_MODE_RESULT = "✅ 视频生成完成（测试模式）"
USER_TEST_TYPE = "用户主动测试"
VIDEO_FORMAT = "mp4"


def _normalize_duration(value: Union[int, float]) -> Union[int, float]:
    """整数秒的时长以整数返回"""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class VideoGenerationHandler:
    """视频生成业务处理器"""

    def __init__(self, service: Optional[VideoGenerationService] = None):
        self._service = service

    @property
    def service(self) -> VideoGenerationService:
        """延迟创建服务，测试模式请求不需要Provider"""
        if self._service is None:
            self._service = VideoGenerationService()
        return self._service

    async def handle_generate_video(self, request: VideoGenerateRequest) -> VideoGenerateResponse:
        """
        处理视频生成请求

        Args:
            request: 视频生成请求

        Returns:
            VideoGenerateResponse: 真实结果、降级结果或测试模式结果

        Raises:
            GenerationValidationError: 请求参数非法
            ConfigurationError: 缺少可灵API密钥
        """
        current_settings = get_settings()
        prompt = (request.input or "").strip()

        if prompt and prompt == current_settings.video_test_sentinel:
            return await self._handle_test_mode(request)

        generation_request = build_generation_request(request, current_settings)

        logger.info(
            log_messages.VIDEO_REQUEST_RECEIVED,
            model=generation_request.model,
            prompt_preview=truncate_string(prompt, 50)
        )

        self.service.ensure_configured()

        try:
            job = await self.service.submit(generation_request)
            result = await self.service.await_completion(job)
        except GenerationValidationError:
            raise
        except Exception as e:
            logger.error(
                log_messages.OPERATION_FAILED,
                exception=e,
                operation_name="视频生成"
            )
            return self._build_fallback_response(request, generation_request, e)

        duration = _normalize_duration(
            result.duration if result.duration is not None else generation_request.duration
        )
        aspect_ratio = self._resolve_aspect_ratio(request, generation_request)

        return VideoGenerateResponse(
            result=SUCCESS_RESULT,
            video_url=result.video_url,
            thumbnail_url=result.video_url,
            duration=duration,
            aspect_ratio=aspect_ratio,
            metadata=VideoGenerateMetadata(
                model=generation_request.model,
                input=self._preview_input(request.input),
                timestamp=get_current_iso_string(),
                task_id=result.task_id,
                settings={
                    "aspect_ratio": aspect_ratio,
                    "mode": generation_request.mode,
                    "duration": duration,
                    "format": VIDEO_FORMAT,
                }
            )
        )

    async def _handle_test_mode(self, request: VideoGenerateRequest) -> VideoGenerateResponse:
        """
        用户输入测试口令时跳过Provider，延迟后返回测试视频

        测试口令在参数校验之前处理：model、aspect_ratio、duration 按请求原样回显，
        缺省时取默认值，不做取值范围校验。
        """
        current_settings = get_settings()
        logger.info(log_messages.VIDEO_TEST_MODE, delay=current_settings.video_test_delay)

        await asyncio.sleep(current_settings.video_test_delay)

        model = request.model or current_settings.video_default_model
        aspect_ratio = request.aspect_ratio or current_settings.video_default_aspect_ratio
        duration = request.duration or current_settings.video_default_duration

        return VideoGenerateResponse(
            result=TEST_MODE_RESULT,
            video_url=current_settings.video_fallback_url,
            thumbnail_url=current_settings.video_fallback_url,
            duration=duration,
            aspect_ratio=aspect_ratio,
            metadata=VideoGenerateMetadata(
                model=f"{model} (测试模式)",
                input=self._preview_input(request.input),
                timestamp=get_current_iso_string(),
                task_id=f"test_{get_current_timestamp_ms()}",
                settings={
                    "aspect_ratio": aspect_ratio,
                    "duration": duration,
                    "format": VIDEO_FORMAT,
                },
                is_test_mode=True,
                test_type=USER_TEST_TYPE
            )
        )

    def _build_fallback_response(
        self,
        request: VideoGenerateRequest,
        generation_request: VideoGenerationRequest,
        error: Exception
    ) -> VideoGenerateResponse:
        """Provider失败后返回降级视频，apiStatus 中保留原始错误"""
        current_settings = get_settings()
        fallback_url = current_settings.video_fallback_url
        logger.warning(log_messages.VIDEO_FALLBACK, fallback_url=fallback_url)

        aspect_ratio = self._resolve_aspect_ratio(request, generation_request)

        return VideoGenerateResponse(
            result=TEST_MODE_RESULT,
            video_url=fallback_url,
            thumbnail_url=fallback_url,
            duration=generation_request.duration,
            aspect_ratio=aspect_ratio,
            metadata=VideoGenerateMetadata(
                model=f"{generation_request.model} (测试模式)",
                input=self._preview_input(request.input),
                timestamp=get_current_iso_string(),
                task_id=f"test_{get_current_timestamp_ms()}",
                settings={
                    "aspect_ratio": aspect_ratio,
                    "mode": generation_request.mode,
                    "duration": generation_request.duration,
                    "format": VIDEO_FORMAT,
                },
                is_test_mode=True,
                api_status=f"API调用失败，已返回降级视频: {error}"
            )
        )

    @staticmethod
    def _resolve_aspect_ratio(
        request: VideoGenerateRequest,
        generation_request: VideoGenerationRequest
    ) -> str:
        # 单图生视频的画面比例由参考图决定，响应中沿用请求值或默认值
        if isinstance(generation_request, SingleImageToVideoRequest):
            return request.aspect_ratio or get_settings().video_default_aspect_ratio
        return generation_request.aspect_ratio

    @staticmethod
    def _preview_input(text: str) -> str:
        return truncate_string(text or "", get_settings().video_input_preview_length, suffix="")

    async def handle_get_models(self) -> StandardResponse:
        """获取支持的视频模型列表"""
        models = [
            VideoModelInfo(**model).model_dump()
            for model in self.service.get_supported_models()
        ]
        return StandardResponse(
            status="success",
            message=f"成功获取 {len(models)} 个视频模型",
            data={"items": models, "total": len(models)}
        )

    async def handle_get_task_status(self, task_kind: str, task_id: str) -> StandardResponse:
        """
        查询一次任务状态

        Raises:
            GenerationValidationError: 任务类型非法
            ConfigurationError: 缺少可灵API密钥
            HTTPException: Provider查询失败（502）
        """
        try:
            kind = TaskKind(task_kind)
        except ValueError:
            raise GenerationValidationError(
                f"不支持的任务类型: {task_kind}",
                details={"supported": [item.value for item in TaskKind]}
            )

        self.service.ensure_configured()

        try:
            job = await self.service.get_task_status(task_id, kind)
        except ProviderError as e:
            logger.error(log_messages.OPERATION_FAILED, exception=e, operation_name="查询视频任务状态")
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=f"查询任务状态失败: {e.message}"
            )

        task_status: Dict[str, Any] = VideoTaskStatusResponse(
            task_id=job.task_id,
            task_kind=job.task_kind.value,
            status=job.status.value,
            video_url=job.video_url,
            duration=job.duration,
            failure_message=job.failure_message
        ).model_dump()

        return StandardResponse(
            status="success",
            message="成功获取任务状态",
            data=task_status
        )
