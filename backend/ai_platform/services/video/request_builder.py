"""
视频生成请求构建
将API层的请求体转换为三种请求变体之一，并补全默认参数
"""

from typing import Optional

from ai_platform.core.config import Settings, get_settings
from ai_platform.core.ai.exceptions import GenerationValidationError
from ai_platform.core.ai.models import (
    EMPTY_PROMPT_MESSAGE,
    MAX_REFERENCE_IMAGES,
    TextToVideoRequest,
    SingleImageToVideoRequest,
    MultiImageToVideoRequest,
    VideoGenerationRequest,
)
from ai_platform.schemas.video_generation import VideoGenerateRequest


def build_generation_request(
    request: VideoGenerateRequest,
    current_settings: Optional[Settings] = None
) -> VideoGenerationRequest:
    """
    根据参考图片的数量选择请求变体

    - image_list 非空: 多图参考生视频
    - images 非空: 单图生视频（只使用第一张）
    - 否则: 文生视频

    Args:
        request: API层请求体
        current_settings: 默认参数来源，不传则读取最新配置

    Returns:
        已通过校验的请求变体

    Raises:
        GenerationValidationError: 提示词为空、参考图片过多或参数非法
    """
    current_settings = current_settings or get_settings()

    prompt = (request.input or "").strip()
    if not prompt:
        raise GenerationValidationError(EMPTY_PROMPT_MESSAGE)

    images = request.images or []
    image_list = [item.image for item in request.image_list or []]
    for count in (len(images), len(image_list)):
        if count > MAX_REFERENCE_IMAGES:
            raise GenerationValidationError(
                f"最多支持{MAX_REFERENCE_IMAGES}张参考图片，当前: {count}张"
            )

    model = request.model or current_settings.video_default_model
    mode = request.mode or current_settings.video_default_mode
    aspect_ratio = request.aspect_ratio or current_settings.video_default_aspect_ratio
    duration = (
        request.duration if request.duration is not None
        else current_settings.video_default_duration
    )

    if image_list:
        return MultiImageToVideoRequest(
            prompt=prompt,
            model=model,
            duration=duration,
            mode=mode,
            aspect_ratio=aspect_ratio,
            image_list=image_list,
            negative_prompt=request.negative_prompt,
            cfg_scale=request.cfg_scale,
        )

    if images:
        return SingleImageToVideoRequest(
            prompt=prompt,
            model=model,
            duration=duration,
            mode=mode,
            image=images[0],
            negative_prompt=request.negative_prompt,
            cfg_scale=request.cfg_scale,
        )

    cfg_scale = (
        request.cfg_scale if request.cfg_scale is not None
        else current_settings.video_default_cfg_scale
    )
    return TextToVideoRequest(
        prompt=prompt,
        model=model,
        duration=duration,
        mode=mode,
        aspect_ratio=aspect_ratio,
        negative_prompt=request.negative_prompt,
        cfg_scale=cfg_scale,
    )

