"""
系统常量定义
============

定义文件上传协议中使用的各种常量。
"""

import struct
from typing import Final, Optional

# 字段格式定义（网络字节序，大端）
FIELD_LENGTH_FORMAT: Final[str] = "!I"  # 字段长度前缀(4字节)
FILE_SIZE_FORMAT: Final[str] = "!I"  # 文件大小(4字节，无长度前缀)

FIELD_LENGTH_SIZE: Final[int] = struct.calcsize(FIELD_LENGTH_FORMAT)
FILE_SIZE_FIELD_SIZE: Final[int] = struct.calcsize(FILE_SIZE_FORMAT)

# 4字节无符号整数能表示的最大值，同时也是单个文件的大小上限
MAX_FIELD_VALUE: Final[int] = 0xFFFFFFFF

# 传输配置默认值
CHUNK_SIZE: Final[int] = 4096  # 每个数据块的大小
MAX_RETRIES: Final[int] = 3  # 最大连接尝试次数
RETRY_INTERVAL: Final[float] = 5.0  # 重试间隔时间(秒)
BACKOFF_JITTER_RATIO: Final[float] = 0.1  # 指数退避抖动比例

# 连接配置默认值
DEFAULT_WRITE_TIMEOUT: Final[Optional[float]] = None  # 写超时，None表示阻塞写

# 校验算法
CHECKSUM_ALGORITHM: Final[str] = "md5"
CHECKSUM_HEX_LENGTH: Final[int] = 32  # 128位摘要的十六进制长度

# pyserial URL处理器的协议前缀
SOCKET_URL_SCHEME: Final[str] = "socket"
