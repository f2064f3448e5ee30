"""
连接管理模块
============

通过 pyserial 的 socket:// URL 处理器提供TCP字节流连接的统一管理和操作接口。
"""

import socket
from typing import List, Optional

import serial

from ..config.settings import ServerConfig
from .errors import ResolutionError, TransferConnectionError, WriteError
from .structures import Endpoint
from ..utils.logger import get_logger

logger = get_logger(__name__)


def resolve_endpoints(host: str, port: int) -> List[Endpoint]:
    """
    解析服务器地址

    Args:
        host: 服务器域名或IP
        port: 服务器端口

    Returns:
        按解析顺序排列、去重后的地址列表

    Raises:
        ResolutionError: 地址无法解析时抛出
    """
    try:
        infos = socket.getaddrinfo(host, port, type=socket.SOCK_STREAM)
    except (socket.gaierror, UnicodeError) as e:
        raise ResolutionError(f"无法解析服务器地址 {host}:{port}: {e}") from e

    endpoints: List[Endpoint] = []
    for family, _, _, _, sockaddr in infos:
        if family not in (socket.AF_INET, socket.AF_INET6):
            continue
        endpoint = Endpoint(host=sockaddr[0], port=sockaddr[1], family=family)
        if endpoint not in endpoints:
            endpoints.append(endpoint)

    if not endpoints:
        raise ResolutionError(f"服务器地址没有可用的IPv4/IPv6记录: {host}:{port}")

    logger.debug(f"解析 {host}:{port} -> {', '.join(str(e) for e in endpoints)}")
    return endpoints


class SocketManager:
    """TCP连接管理器，每个实例只对应一次连接"""

    def __init__(self, endpoint: Endpoint, config: ServerConfig):
        """
        初始化连接管理器

        Args:
            endpoint: 已解析的服务器地址
            config: 服务器连接配置
        """
        self.endpoint = endpoint
        self.config = config
        self._link: Optional[serial.SerialBase] = None

    @property
    def url(self) -> str:
        """pyserial 使用的连接URL"""
        return ServerConfig.to_url(self.endpoint.host, self.endpoint.port)

    @property
    def link(self) -> Optional[serial.SerialBase]:
        """获取底层连接对象"""
        return self._link

    @property
    def is_open(self) -> bool:
        """检查连接是否已建立"""
        return self._link is not None and self._link.is_open

    def open(self) -> None:
        """
        建立连接

        Raises:
            TransferConnectionError: 连接失败时抛出
        """
        if self.is_open:
            logger.warning(f"连接 {self.endpoint} 已经建立")
            return

        try:
            link = serial.serial_for_url(self.url, **self.config.to_link_kwargs())
            link.open()
        except (serial.SerialException, OSError, ValueError) as e:
            self._link = None
            raise TransferConnectionError(f"无法连接到 {self.endpoint}: {e}") from e

        self._link = link
        logger.debug(f"已连接到 {self.endpoint}")

    def close(self) -> None:
        """关闭连接"""
        try:
            if self._link is not None and self._link.is_open:
                self._link.close()
                logger.debug(f"已关闭连接 {self.endpoint}")
        except (serial.SerialException, OSError) as e:
            logger.error(f"关闭连接失败: {e}")
        finally:
            self._link = None

    def write(self, data: bytes) -> int:
        """
        向连接写入数据

        Args:
            data: 要写入的字节数据

        Returns:
            写入的字节数

        Raises:
            WriteError: 连接未建立、写入失败或写超时时抛出
        """
        if not self.is_open:
            raise WriteError("连接未建立，无法写入数据")

        try:
            written = self._link.write(data)
        except serial.SerialTimeoutException as e:
            raise WriteError(f"写入超时: {e}") from e
        except (serial.SerialException, OSError) as e:
            raise WriteError(f"写入数据失败: {e}") from e

        if written != len(data):
            raise WriteError(f"数据未完整写入: {written}/{len(data)}")
        return written

    def __enter__(self):
        """支持with语句"""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """支持with语句"""
        self.close()
