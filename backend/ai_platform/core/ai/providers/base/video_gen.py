"""
文生视频能力Provider基类
"""

from abc import abstractmethod
from typing import Set, List, Dict, Any

from ai_platform.core.ai.base import BaseAIProvider
from ai_platform.core.ai.models import (
    ModelCapability,
    Job,
    TaskKind,
    TextToVideoRequest,
    SingleImageToVideoRequest,
    MultiImageToVideoRequest,
)


class BaseVideoGenProvider(BaseAIProvider):
    """
    视频生成Provider基类

    视频生成是异步任务：提交接口返回任务ID，调用方通过
    get_task_status 轮询直至任务到达终态。
    """

    def get_capabilities(self) -> Set[ModelCapability]:
        """获取支持的能力"""
        return {ModelCapability.VIDEO_GEN}

    @abstractmethod
    async def submit_text_to_video(self, request: TextToVideoRequest) -> Job:
        """
        提交文生视频任务

        Args:
            request: 文生视频请求

        Returns:
            Job: 处于 submitted 状态的任务

        Raises:
            ProviderError: Provider拒绝提交或网络请求失败
        """
        pass

    @abstractmethod
    async def submit_image_to_video(self, request: SingleImageToVideoRequest) -> Job:
        """提交单图生视频任务"""
        pass

    @abstractmethod
    async def submit_multi_image_to_video(self, request: MultiImageToVideoRequest) -> Job:
        """提交多图参考生视频任务"""
        pass

    @abstractmethod
    async def get_task_status(self, task_id: str, task_kind: TaskKind) -> Job:
        """
        查询任务状态

        Args:
            task_id: Provider签发的任务ID
            task_kind: 任务类型，决定查询的接口路径

        Returns:
            Job: 最新的任务快照
        """
        pass

    @abstractmethod
    def get_supported_models(self) -> List[Dict[str, Any]]:
        """获取支持的模型列表"""
        pass
