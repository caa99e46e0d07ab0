"""
AI Provider统一抽象基类
"""

from abc import ABC, abstractmethod
from typing import Set, TYPE_CHECKING

from .models import ModelCapability

if TYPE_CHECKING:
    from ai_platform.core.ai.config import ConfigProvider, ModelConfig


class BaseAIProvider(ABC):
    """所有AI Provider的统一抽象基类"""

    def __init__(self, config_provider: 'ConfigProvider'):
        """
        初始化Provider

        Args:
            config_provider: 返回最新模型配置的可调用对象，在每次调用时解析
        """
        self._config_provider = config_provider
        self._initialize()

    def _initialize(self):
        """Provider初始化逻辑（子类可以覆盖）"""
        pass

    @property
    def model_config(self) -> 'ModelConfig':
        """当前生效的模型配置（每次访问都重新读取）"""
        return self._config_provider()

    def validate_config(self) -> bool:
        """
        验证配置是否完整

        Raises:
            ConfigurationError: 配置缺失时由 config_provider 抛出
        """
        self._config_provider()
        return True

    @abstractmethod
    def get_capabilities(self) -> Set[ModelCapability]:
        """
        获取Provider支持的能力

        Returns:
            能力集合
        """
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        """
        获取Provider名称

        Returns:
            Provider名称（如 "kling"）
        """
        pass

    def supports_capability(self, capability: ModelCapability) -> bool:
        """
        检查是否支持某种能力

        Args:
            capability: 能力枚举

        Returns:
            是否支持该能力
        """
        return capability in self.get_capabilities()
