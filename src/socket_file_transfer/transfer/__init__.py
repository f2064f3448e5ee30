"""
传输模块
========

包含单文件发送、连接重试和批量发送功能。
"""

from .sender import FileSender
from .connection_manager import ConnectionManager
from .file_manager import SenderFileManager

__all__ = [
    "FileSender",
    "ConnectionManager",
    "SenderFileManager",
]
