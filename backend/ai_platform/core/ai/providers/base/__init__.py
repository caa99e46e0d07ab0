"""
AI能力基类定义
"""

from .video_gen import BaseVideoGenProvider

__all__ = [
    "BaseVideoGenProvider",
]
