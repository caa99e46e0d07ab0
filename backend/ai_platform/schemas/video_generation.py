"""
视频生成相关的Pydantic数据模型
用于视频生成API的请求和响应验证，字段名与前端保持一致（videoUrl、isTestMode等）
"""

from typing import Optional, List, Dict, Any, Union
from pydantic import BaseModel, ConfigDict, Field


class ReferenceImage(BaseModel):
    """多图参考中的单张图片"""
    image: str = Field(..., description="图片URL或Base64数据")


class VideoGenerateRequest(BaseModel):
    """视频生成请求"""
    input: str = Field(default="", description="视频描述提示词")
    model: Optional[str] = Field(None, description="模型ID，默认 kling-v1")
    mode: Optional[str] = Field(None, description="生成模式：std 或 pro")
    aspect_ratio: Optional[str] = Field(None, description="画面比例：16:9、9:16、1:1")
    duration: Optional[int] = Field(None, description="视频时长（秒）")
    images: Optional[List[str]] = Field(None, description="单图生视频的参考图片（仅使用第一张）")
    image_list: Optional[List[ReferenceImage]] = Field(None, description="多图参考列表，仅 kling-v1-6 支持")
    negative_prompt: Optional[str] = Field(None, description="负向提示词")
    cfg_scale: Optional[float] = Field(None, description="提示词相关性 [0, 1]")


class VideoGenerateMetadata(BaseModel):
    """视频生成结果元数据"""
    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    model: str = Field(..., description="使用的模型")
    input: str = Field(..., description="输入内容（截断）")
    timestamp: str = Field(..., description="生成时间（ISO-8601）")
    task_id: str = Field(..., description="任务ID")
    settings: Dict[str, Any] = Field(default_factory=dict, description="生成参数")
    is_test_mode: Optional[bool] = Field(None, alias="isTestMode", description="是否为测试/降级结果")
    test_type: Optional[str] = Field(None, alias="testType", description="用户主动测试的标注")
    api_status: Optional[str] = Field(None, alias="apiStatus", description="降级原因及原始错误信息")


class VideoGenerateResponse(BaseModel):
    """视频生成响应（真实成功、降级成功、测试模式共用）"""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    result: str = Field(..., description="可读的状态描述")
    video_url: str = Field(..., alias="videoUrl", description="视频URL")
    thumbnail_url: str = Field(..., alias="thumbnailUrl", description="缩略图URL")
    duration: Union[int, float] = Field(..., description="视频时长（秒）")
    aspect_ratio: str = Field(..., description="画面比例")
    metadata: VideoGenerateMetadata


class VideoModelInfo(BaseModel):
    """支持的视频模型"""
    id: str
    platform: str
    available: bool
    type: str
    name: str
    description: str


class VideoTaskStatusResponse(BaseModel):
    """单次任务状态查询结果"""
    task_id: str
    task_kind: str
    status: str
    video_url: Optional[str] = None
    duration: Optional[float] = None
    failure_message: Optional[str] = None
