"""
核心模块
========

包含字段帧处理、连接管理和校验算法等核心功能。
"""

from .frame_handler import FrameHandler
from .checksum import calculate_file_md5
from .socket_manager import SocketManager, resolve_endpoints

__all__ = [
    "FrameHandler",
    "calculate_file_md5",
    "SocketManager",
    "resolve_endpoints",
]
