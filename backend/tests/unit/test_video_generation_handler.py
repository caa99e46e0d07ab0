"""
视频生成处理器单元测试
覆盖测试口令、降级策略、参数校验和响应组装
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import HTTPException

from ai_platform.core.ai.exceptions import (
    GenerationValidationError,
    ConfigurationError,
    ProviderError,
    MissingAssetError,
    TaskTimeoutError,
)
from ai_platform.core.ai.models import JobStatus, TaskKind, VideoTaskResult
from ai_platform.schemas.video_generation import VideoGenerateRequest
from ai_platform.services.video.video_generation_handler import VideoGenerationHandler
from ai_platform.services.video.video_generation_service import VideoGenerationService
from tests.utils.mock_utils import MockBuilder

HANDLER_SLEEP_TARGET = "ai_platform.services.video.video_generation_handler.asyncio.sleep"


def make_service(provider=None) -> MagicMock:
    """构造只替换提交与轮询的服务mock"""
    service = MagicMock(spec=VideoGenerationService)
    service.provider = provider or MockBuilder.create_mock_video_provider()
    service.submit = AsyncMock(return_value=MockBuilder.create_job(JobStatus.SUBMITTED))
    service.await_completion = AsyncMock(
        return_value=VideoTaskResult(task_id="task-001", video_url="https://x/a.mp4", duration=5.0)
    )
    service.get_task_status = AsyncMock()
    service.ensure_configured = MagicMock(return_value=None)
    service.get_supported_models = MagicMock(
        return_value=MockBuilder.create_mock_video_provider().get_supported_models()
    )
    return service


def dump(response) -> dict:
    return response.model_dump(by_alias=True, exclude_none=True)


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.video
class TestHandleGenerateVideo:
    """视频生成请求处理"""

    def setup_method(self):
        self.service = make_service()
        self.handler = VideoGenerationHandler(service=self.service)

    async def test_success_response(self):
        response = await self.handler.handle_generate_video(
            VideoGenerateRequest(input="A cat on a skateboard", model="kling-v1", duration=5)
        )
        data = dump(response)

        assert data["success"] is True
        assert data["result"] == "✅ 视频生成完成"
        assert data["videoUrl"] == "https://x/a.mp4"
        assert data["thumbnailUrl"] == "https://x/a.mp4"
        assert data["duration"] == 5
        assert isinstance(data["duration"], int)
        assert data["aspect_ratio"] == "16:9"
        assert data["metadata"]["model"] == "kling-v1"
        assert data["metadata"]["task_id"] == "task-001"
        assert data["metadata"]["settings"] == {
            "aspect_ratio": "16:9", "mode": "std", "duration": 5, "format": "mp4"
        }
        assert "isTestMode" not in data["metadata"]
        assert "apiStatus" not in data["metadata"]
        self.service.ensure_configured.assert_called_once()

    async def test_fractional_duration_kept(self):
        self.service.await_completion.return_value = VideoTaskResult(
            task_id="task-001", video_url="https://x/a.mp4", duration=5.1
        )
        response = await self.handler.handle_generate_video(VideoGenerateRequest(input="海边日落"))
        assert response.duration == 5.1

    async def test_requested_duration_used_when_provider_silent(self):
        self.service.await_completion.return_value = VideoTaskResult(
            task_id="task-001", video_url="https://x/a.mp4"
        )
        response = await self.handler.handle_generate_video(VideoGenerateRequest(input="海边日落", duration=10))
        assert response.duration == 10

    async def test_metadata_input_truncated(self):
        long_input = "猫" * 150
        response = await self.handler.handle_generate_video(VideoGenerateRequest(input=long_input))
        assert response.metadata.input == "猫" * 100

    @pytest.mark.parametrize("error", [
        ProviderError("任务失败: 内容审核未通过"),
        MissingAssetError("视频生成成功但未获取到视频URL"),
        TaskTimeoutError("任务超时，请稍后重试"),
        RuntimeError("unexpected"),
    ])
    async def test_errors_degrade_to_fallback(self, error):
        self.service.await_completion.side_effect = error

        response = await self.handler.handle_generate_video(
            VideoGenerateRequest(input="test", images=["https://example.com/a.png"])
        )
        data = dump(response)

        assert data["success"] is True
        assert data["videoUrl"] == "/测试.mp4"
        assert data["thumbnailUrl"] == "/测试.mp4"
        assert data["metadata"]["isTestMode"] is True
        assert str(error) in data["metadata"]["apiStatus"]
        assert "testType" not in data["metadata"]
        assert data["metadata"]["task_id"].startswith("test_")
        assert data["metadata"]["model"] == "kling-v1 (测试模式)"

    async def test_submit_error_degrades(self):
        self.service.submit.side_effect = ProviderError("API密钥无效或已过期", status_code=401)

        response = await self.handler.handle_generate_video(VideoGenerateRequest(input="海边日落"))

        assert response.metadata.is_test_mode is True
        assert "API密钥无效或已过期" in response.metadata.api_status
        self.service.await_completion.assert_not_awaited()

    async def test_validation_error_not_degraded(self):
        with pytest.raises(GenerationValidationError):
            await self.handler.handle_generate_video(
                VideoGenerateRequest(input="两只猫", model="kling-v1", image_list=[{"image": "https://x/a.png"}])
            )
        self.service.submit.assert_not_awaited()

    async def test_validation_error_from_service_propagates(self):
        self.service.submit.side_effect = GenerationValidationError("参考图片不能为空")
        with pytest.raises(GenerationValidationError):
            await self.handler.handle_generate_video(VideoGenerateRequest(input="海边日落"))

    async def test_blank_input_rejected(self):
        with pytest.raises(GenerationValidationError):
            await self.handler.handle_generate_video(VideoGenerateRequest(input=" "))

    async def test_missing_configuration_not_degraded(self):
        self.service.ensure_configured.side_effect = ConfigurationError("API配置错误：缺少可灵API密钥")

        with pytest.raises(ConfigurationError):
            await self.handler.handle_generate_video(VideoGenerateRequest(input="海边日落"))
        self.service.submit.assert_not_awaited()

    async def test_sentinel_bypasses_provider(self):
        with patch(HANDLER_SLEEP_TARGET, new_callable=AsyncMock) as mock_sleep:
            response = await self.handler.handle_generate_video(VideoGenerateRequest(input=" 测试 "))
        data = dump(response)

        mock_sleep.assert_awaited_once_with(5.0)
        self.service.ensure_configured.assert_not_called()
        self.service.submit.assert_not_awaited()
        assert data["videoUrl"] == "/测试.mp4"
        assert data["result"] == "✅ 视频生成完成（测试模式）"
        assert data["duration"] == 5
        assert data["metadata"]["isTestMode"] is True
        assert data["metadata"]["testType"] == "用户主动测试"
        assert "apiStatus" not in data["metadata"]

    @pytest.mark.parametrize("duration", [10, -3])
    async def test_sentinel_echoes_requested_duration(self, duration):
        """测试口令不做参数校验，时长按请求原样回显"""
        with patch(HANDLER_SLEEP_TARGET, new_callable=AsyncMock):
            response = await self.handler.handle_generate_video(
                VideoGenerateRequest(input="测试", duration=duration, aspect_ratio="9:16")
            )

        assert response.duration == duration
        assert response.aspect_ratio == "9:16"
        self.service.submit.assert_not_awaited()

    async def test_sentinel_without_credentials(self, missing_kling_credentials):
        """测试口令不需要可灵密钥，也不创建Provider"""
        handler = VideoGenerationHandler()
        with patch(HANDLER_SLEEP_TARGET, new_callable=AsyncMock):
            response = await handler.handle_generate_video(VideoGenerateRequest(input="测试"))
        assert response.metadata.test_type == "用户主动测试"


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.video
class TestHandleTaskQueries:
    """模型列表与任务状态查询"""

    def setup_method(self):
        self.service = make_service()
        self.handler = VideoGenerationHandler(service=self.service)

    async def test_get_models(self):
        response = await self.handler.handle_get_models()

        assert response.status == "success"
        assert response.data["total"] == 4
        assert response.data["items"][1]["id"] == "kling-v1-6"

    async def test_get_task_status(self):
        self.service.get_task_status.return_value = MockBuilder.create_job(
            JobStatus.SUCCEEDED,
            task_id="t-42",
            task_kind=TaskKind.MULTI_IMAGE_TO_VIDEO,
            video_url="https://x/a.mp4",
            duration=5.0
        )

        response = await self.handler.handle_get_task_status("multi-image2video", "t-42")

        self.service.get_task_status.assert_awaited_once_with("t-42", TaskKind.MULTI_IMAGE_TO_VIDEO)
        assert response.data["status"] == "succeeded"
        assert response.data["video_url"] == "https://x/a.mp4"

    async def test_invalid_task_kind(self):
        with pytest.raises(GenerationValidationError):
            await self.handler.handle_get_task_status("video2video", "t-42")

    async def test_provider_error_maps_to_502(self):
        self.service.get_task_status.side_effect = ProviderError("可灵服务器内部错误，请稍后重试", status_code=500)

        with pytest.raises(HTTPException) as exc_info:
            await self.handler.handle_get_task_status("text2video", "t-42")
        assert exc_info.value.status_code == 502
