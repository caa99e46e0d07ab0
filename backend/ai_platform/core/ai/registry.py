"""
AI Provider注册中心
管理所有Provider的注册
"""

from ai_platform.core.log_utils import get_logger
from .factory import AIProviderFactory
from .models import ModelCapability

logger = get_logger(__name__)


def register_all_providers():
    """注册所有Provider（按提供商组织）"""

    logger.info("开始注册所有AI Provider")

    # ===== 可灵 =====
    from .providers.kling.video import KlingVideoProvider

    if not AIProviderFactory.is_registered(ModelCapability.VIDEO_GEN, "kling"):
        AIProviderFactory.register(ModelCapability.VIDEO_GEN, "kling", KlingVideoProvider)
    logger.info("可灵 Provider注册完成")

    logger.info(
        "所有AI Provider注册完成",
        operation="register_all_providers_complete",
        total_capabilities=len(AIProviderFactory._providers)
    )
