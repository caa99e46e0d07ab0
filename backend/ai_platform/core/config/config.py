"""
应用配置管理模块
统一管理所有配置信息，包括环境变量和文件配置
"""

from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import field_validator, ConfigDict

from ai_platform.utils.config_utils import (
    get_workspace_path, get_config_path, parse_json_config
)


class Settings(BaseSettings):
    """应用配置类 - 统一管理所有配置信息"""

    # ==================== 基础配置 ====================
    app_name: str = "AI Platform"
    app_version: str = "0.1.0"
    app_debug: bool = True

    # ==================== API配置 ====================
    api_v1_str: str = "/api/v1"
    project_name: str = "AI Platform API"

    # ==================== 日志配置 ====================
    log_level: str = "INFO"
    log_dir: str = "log"
    log_file: str = "backend.log"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # ==================== 应用服务配置 ====================
    app_port: int = 8080
    app_host: str = "0.0.0.0"

    # ==================== 可灵API配置 ====================
    kling_access_key: Optional[str] = None
    kling_secret_key: Optional[str] = None
    kling_base_url: str = "https://api-beijing.klingai.com"
    kling_request_timeout: int = 30
    kling_token_ttl: int = 1800
    kling_token_nbf_skew: int = 5

    # ==================== 视频生成配置 ====================
    video_default_model: str = "kling-v1"
    video_default_mode: str = "std"
    video_default_aspect_ratio: str = "16:9"
    video_default_duration: int = 5
    video_default_cfg_scale: float = 0.5

    # 轮询间隔（秒）和最大轮询次数，上限约为 interval * attempts
    video_poll_interval: float = 10.0
    video_poll_max_attempts: int = 30

    # 降级与测试模式
    video_fallback_url: str = "/测试.mp4"
    video_test_sentinel: str = "测试"
    video_test_delay: float = 5.0

    # 元数据中输入内容的截断长度
    video_input_preview_length: int = 100

    # ==================== CORS配置 ====================
    cors_origins: str = '["http://localhost:3000", "http://127.0.0.1:3000"]'

    # ==================== 验证器 ====================
    @field_validator("cors_origins")
    @classmethod
    def parse_cors_origins(cls, value: str) -> List[str]:
        """解析CORS origins配置"""
        return parse_json_config(value)

    # ==================== 计算属性 ====================
    @property
    def workspace_dir(self) -> str:
        """获取workspace目录路径"""
        return str(get_workspace_path())

    @property
    def absolute_log_dir(self) -> str:
        """获取绝对日志目录路径"""
        return str(get_workspace_path(self.log_dir))

    @property
    def kling_enabled(self) -> bool:
        """检查可灵API密钥是否已配置"""
        return bool(self.kling_access_key and self.kling_secret_key)

    model_config = ConfigDict(
        env_file=get_config_path(".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
        validate_default=True
    )


def get_settings() -> Settings:
    """
    获取应用配置实例

    每次调用都会重新读取环境变量，密钥更新后无需重启进程
    """
    return Settings()


# 全局配置实例（仅用于应用启动阶段）
settings = get_settings()
