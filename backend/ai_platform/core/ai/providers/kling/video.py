"""
可灵 Video Provider
封装可灵视频生成的三种提交接口和任务状态查询接口
"""

from typing import Optional, List, Dict, Any

import httpx

from ai_platform.core.log_utils import get_logger
from ai_platform.core.log_messages import log_messages
from ai_platform.core.ai.config import ConfigProvider
from ai_platform.core.ai.exceptions import ProviderError
from ai_platform.core.ai.models import (
    Job,
    JobStatus,
    TaskKind,
    TextToVideoRequest,
    SingleImageToVideoRequest,
    MultiImageToVideoRequest,
)
from ai_platform.core.ai.providers.base.video_gen import BaseVideoGenProvider
from .utils import (
    generate_token,
    build_headers,
    process_image_data,
    redact_payload,
    handle_kling_http_error,
)

logger = get_logger(__name__)


class KlingVideoProvider(BaseVideoGenProvider):
    """可灵 Video Provider"""

    # 图生视频支持的模型
    IMAGE_TO_VIDEO_MODELS = ("kling-v1", "kling-v1-6", "kling-v2-master", "kling-v2-1-master")

    # 可灵多图参考接口自身的图片数量上限
    MAX_MULTI_IMAGES = 4

    MAX_PROMPT_LENGTH = 2500

    # 可灵任务状态 -> 统一任务状态
    STATUS_MAPPING = {
        "submitted": JobStatus.SUBMITTED,
        "processing": JobStatus.PROCESSING,
        "succeed": JobStatus.SUCCEEDED,
        "failed": JobStatus.FAILED,
    }

    SUPPORTED_MODELS = [
        {
            "id": "kling-v1",
            "platform": "kling",
            "available": True,
            "type": "both",
            "name": "可灵 v1",
            "description": "可灵v1模型，支持文本生成视频和图生视频",
        },
        {
            "id": "kling-v1-6",
            "platform": "kling",
            "available": True,
            "type": "image2video",
            "name": "可灵 v1.6",
            "description": "可灵v1.6图生视频模型，支持多图参考",
        },
        {
            "id": "kling-v2-master",
            "platform": "kling",
            "available": True,
            "type": "both",
            "name": "可灵 v2 Master",
            "description": "可灵v2主模型，最高质量",
        },
        {
            "id": "kling-v2-1-master",
            "platform": "kling",
            "available": True,
            "type": "both",
            "name": "可灵 v2.1 Master",
            "description": "可灵v2.1主模型，最新版本",
        },
    ]

    def __init__(
        self,
        config_provider: ConfigProvider,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        初始化Provider

        Args:
            config_provider: 返回最新可灵配置的可调用对象
            transport: 自定义HTTP传输层（测试时注入 httpx.MockTransport）
        """
        self._transport = transport
        super().__init__(config_provider)

    def get_provider_name(self) -> str:
        """获取Provider名称"""
        return "kling"

    def get_supported_models(self) -> List[Dict[str, Any]]:
        """获取支持的模型列表"""
        return [dict(model) for model in self.SUPPORTED_MODELS]

    # ==================== 任务提交 ====================

    async def submit_text_to_video(self, request: TextToVideoRequest) -> Job:
        """提交文生视频任务"""
        self._validate_prompts(request.prompt, request.negative_prompt)

        payload: Dict[str, Any] = {
            "model_name": request.model,
            "prompt": request.prompt,
            "aspect_ratio": request.aspect_ratio,
            "duration": str(request.duration),
            "mode": request.mode,
        }
        if request.cfg_scale is not None:
            payload["cfg_scale"] = self._validate_cfg_scale(request.cfg_scale)
        if request.negative_prompt:
            payload["negative_prompt"] = request.negative_prompt

        return await self._submit(TaskKind.TEXT_TO_VIDEO, payload)

    async def submit_image_to_video(self, request: SingleImageToVideoRequest) -> Job:
        """提交单图生视频任务"""
        if request.model not in self.IMAGE_TO_VIDEO_MODELS:
            raise ProviderError(
                f"不支持的模型: {request.model}。支持的模型: {', '.join(self.IMAGE_TO_VIDEO_MODELS)}"
            )
        self._validate_prompts(request.prompt, request.negative_prompt)

        payload: Dict[str, Any] = {
            "model_name": request.model,
            "mode": request.mode,
            "duration": str(request.duration),
            "image": process_image_data(request.image),
            "prompt": request.prompt,
        }
        if request.negative_prompt:
            payload["negative_prompt"] = request.negative_prompt
        # kling-v2 系列图生视频不接受 cfg_scale
        if request.cfg_scale is not None:
            cfg_scale = self._validate_cfg_scale(request.cfg_scale)
            if not request.model.startswith("kling-v2"):
                payload["cfg_scale"] = cfg_scale

        return await self._submit(TaskKind.IMAGE_TO_VIDEO, payload)

    async def submit_multi_image_to_video(self, request: MultiImageToVideoRequest) -> Job:
        """提交多图参考生视频任务"""
        if len(request.image_list) > self.MAX_MULTI_IMAGES:
            raise ProviderError(f"最多支持{self.MAX_MULTI_IMAGES}张参考图片")
        self._validate_prompts(request.prompt, request.negative_prompt)

        payload: Dict[str, Any] = {
            "model_name": request.model,
            "mode": request.mode,
            "duration": str(request.duration),
            "aspect_ratio": request.aspect_ratio,
            "image_list": [{"image": process_image_data(image)} for image in request.image_list],
            "prompt": request.prompt,
        }
        if request.negative_prompt:
            payload["negative_prompt"] = request.negative_prompt
        if request.cfg_scale is not None:
            payload["cfg_scale"] = self._validate_cfg_scale(request.cfg_scale)

        return await self._submit(TaskKind.MULTI_IMAGE_TO_VIDEO, payload)

    # ==================== 状态查询 ====================

    async def get_task_status(self, task_id: str, task_kind: TaskKind) -> Job:
        """查询任务状态"""
        data = await self._request("GET", f"/v1/videos/{task_kind.value}/{task_id}")
        return self._parse_job(data, task_kind, fallback_task_id=task_id)

    # ==================== 内部方法 ====================

    async def _submit(self, task_kind: TaskKind, payload: Dict[str, Any]) -> Job:
        """提交任务并返回 submitted 状态的Job"""
        logger.info(
            "提交可灵视频任务",
            extra={"task_kind": task_kind.value, "payload": redact_payload(payload)}
        )

        data = await self._request("POST", f"/v1/videos/{task_kind.value}", payload)

        task_id = data.get("task_id")
        if not task_id:
            raise ProviderError("可灵API响应中缺少task_id", details={"data": data})

        logger.info(
            log_messages.VIDEO_TASK_SUBMITTED,
            task_id=task_id,
            task_kind=task_kind.value
        )
        return Job(task_id=str(task_id), task_kind=task_kind, status=JobStatus.SUBMITTED)

    async def _request(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        调用可灵API并返回响应中的 data 字段

        Raises:
            ProviderError: HTTP错误、网络错误、响应格式错误或业务错误码非0
        """
        config = self.model_config
        url = f"{config.base_url}{path}"
        headers = build_headers(generate_token(config))

        logger.debug(
            log_messages.PROVIDER_REQUEST,
            method=method,
            endpoint=path,
            base_url=config.base_url,
            access_key=config.masked_access_key()
        )

        async with httpx.AsyncClient(timeout=config.timeout, transport=self._transport) as client:
            try:
                response = await client.request(method, url, headers=headers, json=payload)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise handle_kling_http_error(e) from e
            except httpx.RequestError as e:
                logger.error(log_messages.PROVIDER_REQUEST_FAILED, exception=e, endpoint=path)
                raise ProviderError(
                    "网络请求失败，请检查网络连接",
                    details={"endpoint": path, "error": str(e)}
                ) from e

        try:
            body = response.json()
        except ValueError as e:
            raise ProviderError("服务器响应格式错误", details={"endpoint": path}) from e

        if not isinstance(body, dict):
            raise ProviderError("服务器响应格式错误", details={"endpoint": path})

        if body.get("code", 0) != 0:
            raise ProviderError(
                f"可灵API返回错误: {body.get('message') or '未知错误'}",
                details={"code": body.get("code"), "request_id": body.get("request_id")}
            )

        data = body.get("data")
        if not isinstance(data, dict):
            raise ProviderError("可灵API响应中缺少data字段", details={"endpoint": path})
        return data

    def _parse_job(self, data: Dict[str, Any], task_kind: TaskKind, fallback_task_id: str) -> Job:
        """将可灵任务数据转换为Job"""
        raw_status = data.get("task_status", "")
        # 未知状态按处理中对待，继续轮询
        status = self.STATUS_MAPPING.get(raw_status, JobStatus.PROCESSING)

        videos = (data.get("task_result") or {}).get("videos") or []
        first_video = videos[0] if videos else {}

        return Job(
            task_id=str(data.get("task_id") or fallback_task_id),
            task_kind=task_kind,
            status=status,
            video_url=first_video.get("url") or None,
            duration=self._parse_duration(first_video.get("duration")),
            failure_message=data.get("task_status_msg") or None,
        )

    @staticmethod
    def _parse_duration(value: Any) -> Optional[float]:
        """可灵返回的时长可能是字符串"""
        if value is None or value == "":
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None

    def _validate_prompts(self, prompt: str, negative_prompt: Optional[str]) -> None:
        if len(prompt) > self.MAX_PROMPT_LENGTH:
            raise ProviderError(f"正向提示词不能超过{self.MAX_PROMPT_LENGTH}个字符")
        if negative_prompt and len(negative_prompt) > self.MAX_PROMPT_LENGTH:
            raise ProviderError(f"负向提示词不能超过{self.MAX_PROMPT_LENGTH}个字符")

    @staticmethod
    def _validate_cfg_scale(cfg_scale: float) -> float:
        if cfg_scale < 0 or cfg_scale > 1:
            raise ProviderError("cfg_scale取值范围必须在[0, 1]之间")
        return cfg_scale
