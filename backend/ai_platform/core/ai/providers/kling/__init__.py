"""
可灵（Kling）视频生成Provider
"""

from .video import KlingVideoProvider

__all__ = [
    "KlingVideoProvider",
]
