"""
连接重试管理模块
================

负责单个文件的投递：解析地址、建立连接、调用发送器，
失败时按重试策略换新连接重试。
"""

import time
from pathlib import Path
from typing import Callable, List, Optional, Union

from ..config.settings import ServerConfig, TransferConfig
from ..core.errors import TransferConnectionError
from ..core.socket_manager import SocketManager, resolve_endpoints
from ..core.structures import DeliveryResult, DeliveryState, Endpoint, TransferOutcome
from ..utils.logger import get_logger
from ..utils.progress import TransferReporter
from ..utils.retry import RetryPolicy
from .sender import FileSender

logger = get_logger(__name__)

LinkFactory = Callable[[Endpoint], SocketManager]
Resolver = Callable[[str, int], List[Endpoint]]


class ConnectionManager:
    """连接管理器：一个文件一次投递，每次尝试使用新连接"""

    def __init__(
        self,
        server_config: Optional[ServerConfig] = None,
        transfer_config: Optional[TransferConfig] = None,
        reporter: Optional[TransferReporter] = None,
        sender: Optional[FileSender] = None,
        link_factory: Optional[LinkFactory] = None,
        resolver: Resolver = resolve_endpoints,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        初始化连接管理器

        Args:
            server_config: 服务器连接配置，提供写超时等参数
            transfer_config: 传输配置（可选）
            reporter: 进度观察者（可选）
            sender: 文件发送器，默认按 transfer_config 创建
            link_factory: 根据地址创建连接对象，默认创建 SocketManager
            resolver: 地址解析函数
            sleep: 重试等待函数
        """
        self.server_config = server_config
        self.transfer_config = transfer_config or TransferConfig()
        self.reporter = reporter or TransferReporter()
        self.sender = sender or FileSender(self.transfer_config, self.reporter)
        self.retry_policy: RetryPolicy = self.transfer_config.retry_policy()
        self._link_factory = link_factory
        self._resolver = resolver
        self._sleep = sleep
        self.state = DeliveryState.RESOLVING

    def deliver(self, host: str, port: int, file_path: Union[str, Path]) -> DeliveryResult:
        """
        投递一个文件

        Args:
            host: 服务器域名或IP
            port: 服务器端口
            file_path: 文件路径

        Returns:
            投递结果；重试耗尽时返回 FAILED 状态而不抛出异常

        Raises:
            ResolutionError: 服务器地址无法解析时抛出，不重试
        """
        file_path = Path(file_path)

        self.state = DeliveryState.RESOLVING
        endpoints = self._resolver(host, port)

        retry = self.retry_policy.new_state()
        outcome: Optional[TransferOutcome] = None

        while True:
            self.state = DeliveryState.CONNECTING
            try:
                link = self._connect(endpoints, port)
            except TransferConnectionError as e:
                logger.error(f"连接错误: {e}")
                outcome = TransferOutcome.CONNECTION_FAILED
            else:
                self.state = DeliveryState.TRANSFERRING
                try:
                    outcome = self.sender.transfer(link, file_path)
                finally:
                    # 失败后的连接不可复用，成功后也不再使用
                    link.close()

            if outcome is TransferOutcome.SUCCESS:
                self.state = DeliveryState.SUCCEEDED
                return DeliveryResult(file_path, self.state, retry.attempt + 1, outcome)

            retry.record_failure()
            self.reporter.on_attempt_failed(file_path, outcome.value)

            if not outcome.retryable:
                # 文件本身无法打开，换连接也无济于事
                logger.error(f"文件无法发送，跳过: {file_path}")
                break

            if retry.exhausted:
                logger.error(f"尝试 {retry.attempt} 次后仍发送失败: {file_path}")
                break

            self.state = DeliveryState.RETRYING
            retry.delay = self.retry_policy.delay_after(retry.attempt)
            logger.warning(
                f"发送失败，{retry.delay:.1f}秒后重试 ({retry.attempt}/{retry.max_attempts}): {file_path}"
            )
            self.reporter.on_retry(file_path, retry.attempt, retry.max_attempts, retry.delay)
            self._sleep(retry.delay)

        self.state = DeliveryState.FAILED
        self.reporter.on_file_failed(file_path, retry.attempt)
        return DeliveryResult(file_path, self.state, retry.attempt, outcome)

    def _connect(self, endpoints: List[Endpoint], port: int) -> SocketManager:
        """
        依次尝试所有解析地址，返回第一个连接成功的连接对象

        Raises:
            TransferConnectionError: 所有地址均连接失败时抛出
        """
        last_error: Optional[TransferConnectionError] = None
        for endpoint in endpoints:
            link = self._create_link(endpoint)
            try:
                link.open()
            except TransferConnectionError as e:
                logger.debug(f"连接 {endpoint} 失败: {e}")
                last_error = e
                continue
            logger.info(f"已连接到服务器 {endpoint}")
            return link

        raise last_error or TransferConnectionError(f"没有可用的服务器地址 (端口 {port})")

    def _create_link(self, endpoint: Endpoint) -> SocketManager:
        if self._link_factory is not None:
            return self._link_factory(endpoint)
        config = self.server_config or ServerConfig(host=endpoint.host, port=endpoint.port)
        return SocketManager(endpoint, config)
