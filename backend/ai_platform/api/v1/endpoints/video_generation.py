"""
视频生成API端点
提交可灵视频任务、查询任务状态以及获取支持的模型
"""

from fastapi import APIRouter, Depends

from ai_platform.schemas.common import StandardResponse, ErrorResponse
from ai_platform.schemas.video_generation import VideoGenerateRequest, VideoGenerateResponse
from ai_platform.services.video.video_generation_handler import VideoGenerationHandler

router = APIRouter(tags=["视频生成"])


def get_video_generation_handler() -> VideoGenerationHandler:
    """视频生成处理器依赖"""
    return VideoGenerationHandler()


@router.post(
    "/generate",
    response_model=VideoGenerateResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="生成视频",
    description="根据提示词和参考图片生成视频，等待任务完成后返回视频地址；"
                "可灵API失败时返回降级视频（metadata.isTestMode=true）"
)
async def generate_video(
    request: VideoGenerateRequest,
    handler: VideoGenerationHandler = Depends(get_video_generation_handler)
) -> VideoGenerateResponse:
    """
    生成视频

    - image_list 非空时使用多图参考（仅 kling-v1-6）
    - images 非空时使用第一张图片生成视频
    - 否则为文生视频
    """
    return await handler.handle_generate_video(request)


@router.get(
    "/models",
    response_model=StandardResponse,
    summary="获取视频模型列表",
    description="获取可灵视频生成支持的模型"
)
async def list_video_models(
    handler: VideoGenerationHandler = Depends(get_video_generation_handler)
) -> StandardResponse:
    return await handler.handle_get_models()


@router.get(
    "/tasks/{task_kind}/{task_id}",
    response_model=StandardResponse,
    summary="查询视频任务状态",
    description="查询一次已提交任务的状态，task_kind 为 text2video、image2video 或 multi-image2video"
)
async def get_video_task_status(
    task_kind: str,
    task_id: str,
    handler: VideoGenerationHandler = Depends(get_video_generation_handler)
) -> StandardResponse:
    """查询视频任务状态"""
    return await handler.handle_get_task_status(task_kind, task_id)
