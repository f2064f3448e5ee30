"""
配置管理
========

提供服务器连接和传输相关的配置类。
"""

from dataclasses import dataclass
from typing import Optional

from .constants import (
    CHUNK_SIZE,
    MAX_RETRIES,
    RETRY_INTERVAL,
    DEFAULT_WRITE_TIMEOUT,
    SOCKET_URL_SCHEME,
)


@dataclass
class ServerConfig:
    """服务器连接配置类"""

    host: str  # 服务器域名或IP
    port: int  # 服务器端口
    write_timeout: Optional[float] = DEFAULT_WRITE_TIMEOUT  # 写超时，None为阻塞

    def __post_init__(self):
        """参数验证"""
        if not self.host:
            raise ValueError("host不能为空")
        if not 0 < self.port <= 65535:
            raise ValueError("port必须在1到65535之间")
        # pyserial 将 0 视为非阻塞写，这里不允许
        if self.write_timeout is not None and self.write_timeout <= 0:
            raise ValueError("write_timeout必须大于0")

    @staticmethod
    def to_url(host: str, port: int) -> str:
        """
        转换为pyserial的socket URL

        Args:
            host: 已解析的IP地址
            port: 端口号

        Returns:
            形如 socket://127.0.0.1:8889 的URL，IPv6地址加方括号
        """
        if ":" in host:
            host = f"[{host}]"
        return f"{SOCKET_URL_SCHEME}://{host}:{port}"

    def to_link_kwargs(self) -> dict:
        """转换为serial_for_url的参数字典"""
        return {
            "do_not_open": True,
            "write_timeout": self.write_timeout,
        }


@dataclass
class TransferConfig:
    """传输配置类"""

    chunk_size: int = CHUNK_SIZE  # 每个数据块的大小
    max_attempts: int = MAX_RETRIES  # 最大连接尝试次数
    retry_interval: float = RETRY_INTERVAL  # 重试间隔(秒)
    backoff: bool = False  # 是否启用指数退避，默认固定间隔
    show_progress: bool = True  # 是否显示进度

    def __post_init__(self):
        """参数验证"""
        if self.chunk_size <= 0:
            raise ValueError("chunk_size必须大于0")
        if self.max_attempts <= 0:
            raise ValueError("max_attempts必须大于0")
        if self.retry_interval < 0:
            raise ValueError("retry_interval不能为负数")

    def retry_policy(self):
        """
        根据配置生成重试策略

        Returns:
            RetryPolicy实例
        """
        from ..utils.retry import RetryPolicy

        return RetryPolicy(
            max_attempts=self.max_attempts,
            interval=self.retry_interval,
            backoff=self.backoff,
        )
