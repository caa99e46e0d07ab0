"""
字符串工具模块
提供统一的字符串处理函数
"""


def truncate_string(text: str, max_length: int, suffix: str = "...") -> str:
    """
    截断字符串，如果超过最大长度则添加后缀

    Args:
        text: 要截断的字符串
        max_length: 最大长度（包含后缀）
        suffix: 截断后添加的后缀，传空字符串则直接截断

    Returns:
        str: 截断后的字符串
    """
    if len(text) <= max_length:
        return text

    if max_length <= len(suffix):
        return suffix[:max_length]

    return text[:max_length - len(suffix)] + suffix


def mask_sensitive_info(text: str, visible_chars: int = 8, mask: str = "...") -> str:
    """
    遮盖敏感信息，仅保留开头若干字符

    Args:
        text: 原始文本（如API密钥）
        visible_chars: 保留的字符数
        mask: 遮盖后缀

    Returns:
        str: 遮盖后的文本，空值返回 "未配置"
    """
    if not text:
        return "未配置"
    return f"{text[:visible_chars]}{mask}"
