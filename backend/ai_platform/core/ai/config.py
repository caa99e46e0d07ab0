"""
AI Provider配置管理
Provider在每次调用时通过 config_provider 获取最新配置，密钥更新无需重启进程
"""

from typing import Callable

from ai_platform.core.config import get_settings
from ai_platform.core.log_utils import get_logger
from ai_platform.core.log_messages import log_messages
from ai_platform.utils.string_utils import mask_sensitive_info
from .exceptions import ConfigurationError

logger = get_logger(__name__)


class ModelConfig:
    """Provider连接配置"""

    def __init__(
        self,
        provider_name: str,
        access_key: str,
        secret_key: str,
        base_url: str,
        timeout: int = 30,
        token_ttl: int = 1800,
        token_nbf_skew: int = 5
    ):
        """
        初始化Provider配置

        Args:
            provider_name: Provider名称（如 "kling"）
            access_key: 访问密钥
            secret_key: 签名密钥
            base_url: API基础URL
            timeout: 单次HTTP请求超时（秒）
            token_ttl: 鉴权令牌有效期（秒）
            token_nbf_skew: 令牌生效时间提前量（秒），容忍时钟偏差
        """
        self.provider_name = provider_name
        self.access_key = access_key
        self.secret_key = secret_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.token_ttl = token_ttl
        self.token_nbf_skew = token_nbf_skew

    def masked_access_key(self) -> str:
        """用于日志输出的脱敏访问密钥"""
        return mask_sensitive_info(self.access_key)


ConfigProvider = Callable[[], ModelConfig]


def load_kling_config() -> ModelConfig:
    """
    读取最新的可灵API配置

    每次调用都重新构造Settings，从环境变量读取当前密钥。

    Raises:
        ConfigurationError: 缺少 KLING_ACCESS_KEY 或 KLING_SECRET_KEY
    """
    current = get_settings()

    if not current.kling_enabled:
        logger.error(
            log_messages.PROVIDER_CONFIG_MISSING,
            extra={
                "kling_access_key": "已配置" if current.kling_access_key else "未配置",
                "kling_secret_key": "已配置" if current.kling_secret_key else "未配置",
            }
        )
        raise ConfigurationError(
            "API配置错误：缺少可灵API密钥",
            details={"hint": "请在环境变量或config/.env中配置KLING_ACCESS_KEY和KLING_SECRET_KEY"}
        )

    return ModelConfig(
        provider_name="kling",
        access_key=current.kling_access_key,
        secret_key=current.kling_secret_key,
        base_url=current.kling_base_url,
        timeout=current.kling_request_timeout,
        token_ttl=current.kling_token_ttl,
        token_nbf_skew=current.kling_token_nbf_skew
    )
