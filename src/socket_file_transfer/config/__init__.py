"""
配置模块
=======

包含系统常量定义和配置管理功能。
"""

from .constants import *
from .settings import *

__all__ = [
    # 常量
    "CHUNK_SIZE",
    "MAX_RETRIES",
    "RETRY_INTERVAL",
    "FIELD_LENGTH_FORMAT",
    "FIELD_LENGTH_SIZE",
    "MAX_FIELD_VALUE",
    "CHECKSUM_HEX_LENGTH",
    # 配置
    "ServerConfig",
    "TransferConfig",
]
