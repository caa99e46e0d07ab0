"""
可灵Provider工具函数

鉴权令牌生成、图片数据预处理以及HTTP错误转换
"""

from typing import Optional, Dict, Any

import httpx
import jwt

from ai_platform.core.ai.config import ModelConfig
from ai_platform.core.ai.exceptions import ProviderError
from ai_platform.core.log_utils import get_logger
from ai_platform.utils.datetime_utils import get_current_timestamp

logger = get_logger(__name__)

# 纯Base64图片数据的最小长度，过短的数据不可能是有效图片
MIN_BASE64_IMAGE_LENGTH = 100


def generate_token(config: ModelConfig, now: Optional[int] = None) -> str:
    """生成可灵API的HS256鉴权令牌

    Args:
        config: Provider配置，access_key 作为签发者，secret_key 用于签名
        now: 当前时间戳（秒），默认取系统时间

    Returns:
        JWT字符串
    """
    issued_at = get_current_timestamp() if now is None else now
    payload = {
        "iss": config.access_key,
        "exp": issued_at + config.token_ttl,
        "nbf": issued_at - config.token_nbf_skew,
    }
    return jwt.encode(
        payload,
        config.secret_key,
        algorithm="HS256",
        headers={"alg": "HS256", "typ": "JWT"}
    )


def build_headers(token: str) -> Dict[str, str]:
    """构建请求头"""
    return {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
        "Accept": "application/json",
        "User-Agent": "KlingAI-Client/1.0",
    }


def process_image_data(image_data: str) -> str:
    """处理图片数据，支持URL和Base64两种格式

    - http(s) URL 原样返回
    - data:image/...;base64, 前缀会被去除
    - 纯Base64数据需达到最小长度

    Raises:
        ProviderError: 图片数据过短
    """
    if image_data.startswith(("http://", "https://")):
        return image_data

    if image_data.startswith("data:image/"):
        return image_data.split(",", 1)[1] if "," in image_data else ""

    if len(image_data) < MIN_BASE64_IMAGE_LENGTH:
        raise ProviderError(
            f"图片数据过短 ({len(image_data)}字符)，请提供有效的图片URL或Base64数据"
        )
    return image_data


def describe_image(image_data: str) -> str:
    """生成适合写入日志的图片描述，不输出完整Base64"""
    if image_data.startswith(("http://", "https://")):
        return f"[图片URL: {image_data[:50]}...]"
    return f"[Base64数据,长度:{len(image_data)}]"


def redact_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """替换请求体中的图片数据，用于日志记录"""
    redacted = dict(payload)
    for key in ("image", "image_tail"):
        if redacted.get(key):
            redacted[key] = describe_image(redacted[key])
    if redacted.get("image_list"):
        redacted["image_list"] = [
            describe_image(item.get("image", "")) for item in redacted["image_list"]
        ]
    return redacted


def handle_kling_http_error(error: httpx.HTTPStatusError) -> ProviderError:
    """将可灵API的HTTP错误转换为ProviderError

    Args:
        error: httpx抛出的状态码异常

    Returns:
        携带状态码和Provider消息的ProviderError
    """
    status_code = error.response.status_code
    try:
        body = error.response.json()
    except ValueError:
        body = {}
    provider_message = body.get("message") if isinstance(body, dict) else None

    if status_code == 400:
        message = f"请求参数错误: {provider_message or '参数验证失败'}"
    elif status_code == 401:
        message = "API密钥无效或已过期，请检查accessKey和secretKey"
    elif status_code == 403:
        message = "访问被拒绝，请检查API权限"
    elif status_code == 429:
        message = "API调用频率过高，请稍后重试"
    elif status_code == 500:
        message = "可灵服务器内部错误，请稍后重试"
    else:
        message = f"API调用失败 ({status_code}): {provider_message or '未知错误'}"

    logger.error(
        f"可灵API返回错误状态码: {status_code}",
        extra={"status_code": status_code, "response": body}
    )
    return ProviderError(message, status_code=status_code, details={"response": body})
