"""
网络文件上传工具
==============

这是一个基于TCP字节流的文件上传客户端，递归遍历本地目录，
将每个普通文件按长度前缀协议发送到固定的服务器，并附带MD5校验值。

主要功能：
- 批量文件顺序上传
- MD5数据校验
- 进度显示
- 连接失败重试

作者: lanford
版本: 1.0.0
"""

__version__ = "1.0.0"
__author__ = "lanford"
__email__ = ""
__description__ = "基于TCP字节流的文件上传工具"

# 导出主要类
from .transfer.sender import FileSender
from .transfer.connection_manager import ConnectionManager
from .transfer.file_manager import SenderFileManager

__all__ = [
    "FileSender",
    "ConnectionManager",
    "SenderFileManager",
]
