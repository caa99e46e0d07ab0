"""
AI模型交互的数据模型
包含视频生成请求（按输入形态区分的三种变体）、任务与结果
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, List, Union

from .exceptions import GenerationValidationError


class ModelCapability(str, Enum):
    """模型能力枚举"""
    VIDEO_GEN = "video_gen"


class TaskKind(str, Enum):
    """视频任务类型，同时对应Provider的接口路径"""
    TEXT_TO_VIDEO = "text2video"
    IMAGE_TO_VIDEO = "image2video"
    MULTI_IMAGE_TO_VIDEO = "multi-image2video"


class JobStatus(str, Enum):
    """视频任务状态"""
    SUBMITTED = "submitted"
    PROCESSING = "processing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


SUPPORTED_ASPECT_RATIOS = ("16:9", "9:16", "1:1")
SUPPORTED_MODES = ("std", "pro")

# 唯一支持多图参考的模型
MULTI_REFERENCE_MODEL = "kling-v1-6"
MAX_REFERENCE_IMAGES = 5

EMPTY_PROMPT_MESSAGE = "请提供视频生成内容"


class _RequestValidationMixin:
    """三种请求变体共用的字段校验"""

    prompt: str
    model: str
    duration: int
    mode: str

    def _validate_common(self) -> None:
        if not self.prompt or not self.prompt.strip():
            raise GenerationValidationError(EMPTY_PROMPT_MESSAGE)
        if not self.model:
            raise GenerationValidationError("模型名称不能为空")
        if isinstance(self.duration, bool) or not isinstance(self.duration, int) or self.duration <= 0:
            raise GenerationValidationError(
                f"视频时长必须为正整数秒，当前值: {self.duration}"
            )
        if self.mode not in SUPPORTED_MODES:
            raise GenerationValidationError(
                f"不支持的生成模式: {self.mode}，支持的模式: {', '.join(SUPPORTED_MODES)}"
            )

    @staticmethod
    def _validate_aspect_ratio(aspect_ratio: str) -> None:
        if aspect_ratio not in SUPPORTED_ASPECT_RATIOS:
            raise GenerationValidationError(
                f"不支持的画面比例: {aspect_ratio}，"
                f"支持的比例: {', '.join(SUPPORTED_ASPECT_RATIOS)}"
            )


@dataclass(frozen=True)
class TextToVideoRequest(_RequestValidationMixin):
    """文生视频请求"""
    prompt: str
    model: str
    duration: int
    mode: str
    aspect_ratio: str
    negative_prompt: Optional[str] = None
    cfg_scale: Optional[float] = None

    def __post_init__(self):
        self._validate_common()
        self._validate_aspect_ratio(self.aspect_ratio)


@dataclass(frozen=True)
class SingleImageToVideoRequest(_RequestValidationMixin):
    """单图生视频请求（画面比例由参考图决定）"""
    prompt: str
    model: str
    duration: int
    mode: str
    image: str
    negative_prompt: Optional[str] = None
    cfg_scale: Optional[float] = None

    def __post_init__(self):
        self._validate_common()
        if not self.image:
            raise GenerationValidationError("参考图片不能为空")


@dataclass(frozen=True)
class MultiImageToVideoRequest(_RequestValidationMixin):
    """多图参考生视频请求，仅 MULTI_REFERENCE_MODEL 支持"""
    prompt: str
    model: str
    duration: int
    mode: str
    aspect_ratio: str
    image_list: List[str] = field(default_factory=list)
    negative_prompt: Optional[str] = None
    cfg_scale: Optional[float] = None

    def __post_init__(self):
        self._validate_common()
        self._validate_aspect_ratio(self.aspect_ratio)
        if not self.image_list:
            raise GenerationValidationError("必须提供至少一张参考图片")
        if len(self.image_list) > MAX_REFERENCE_IMAGES:
            raise GenerationValidationError(
                f"最多支持{MAX_REFERENCE_IMAGES}张参考图片，当前: {len(self.image_list)}张"
            )
        if any(not image for image in self.image_list):
            raise GenerationValidationError("参考图片不能为空")
        if self.model != MULTI_REFERENCE_MODEL:
            raise GenerationValidationError(
                "多图参考功能仅支持可灵 v1.6 模型，请切换模型后重试",
                details={"model": self.model, "required_model": MULTI_REFERENCE_MODEL}
            )


VideoGenerationRequest = Union[
    TextToVideoRequest,
    SingleImageToVideoRequest,
    MultiImageToVideoRequest,
]


@dataclass
class Job:
    """Provider侧的异步视频任务"""
    task_id: str
    task_kind: TaskKind
    status: JobStatus = JobStatus.SUBMITTED
    video_url: Optional[str] = None
    duration: Optional[float] = None
    failure_message: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        """是否已到达终态"""
        return self.status in (JobStatus.SUCCEEDED, JobStatus.FAILED)


@dataclass
class VideoTaskResult:
    """视频任务成功完成后的结果"""
    task_id: str
    video_url: str
    duration: Optional[float] = None
