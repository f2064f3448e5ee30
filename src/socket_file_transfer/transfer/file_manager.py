"""
批量文件管理模块
================

负责遍历目录并逐个投递文件。
"""

import time
from pathlib import Path
from typing import Optional, Union

from ..config.settings import ServerConfig, TransferConfig
from ..core.structures import BatchSummary
from ..utils.logger import get_logger
from ..utils.path_utils import iter_regular_files
from ..utils.progress import TransferReporter
from .connection_manager import ConnectionManager

logger = get_logger(__name__)


class SenderFileManager:
    """发送端文件管理器"""

    def __init__(
        self,
        folder_path: Union[str, Path],
        server_config: ServerConfig,
        config: Optional[TransferConfig] = None,
        reporter: Optional[TransferReporter] = None,
        connection_manager: Optional[ConnectionManager] = None,
    ):
        """
        初始化发送端文件管理器

        Args:
            folder_path: 要发送的文件夹路径
            server_config: 服务器连接配置
            config: 传输配置（可选）
            reporter: 进度观察者，由本管理器持有并向下传递
            connection_manager: 连接管理器，默认按配置创建
        """
        self.folder_path = Path(folder_path)
        self.server_config = server_config
        self.config = config or TransferConfig()
        self.reporter = reporter or TransferReporter()
        self.connection_manager = connection_manager or ConnectionManager(
            server_config, self.config, self.reporter
        )

    def run(self) -> BatchSummary:
        """
        依次发送目录下的所有普通文件

        单个文件失败只记录并继续下一个文件。

        Returns:
            批量发送汇总

        Raises:
            DirectoryScanError: 目录遍历失败时抛出，整个任务中止
            ResolutionError: 服务器地址无法解析时抛出，整个任务中止
        """
        summary = BatchSummary()
        start_time = time.time()
        host, port = self.server_config.host, self.server_config.port

        logger.info(f"开始批量文件发送: {self.folder_path}")

        for file_path in iter_regular_files(self.folder_path):
            logger.info(f"连接服务器 {host} 端口 {port}，准备发送文件: [{file_path}]")
            result = self.connection_manager.deliver(host, port, file_path)
            summary.record(result)

            if result.succeeded:
                logger.info(f"文件 [{file_path}] 发送完成")
            else:
                logger.error(f"文件 [{file_path}] 发送失败，尝试次数: {result.attempts}")

        elapsed_time = time.time() - start_time
        logger.info(
            f"所有文件处理完毕: 成功 {summary.succeeded}/{summary.total}, "
            f"用时 {elapsed_time:.2f}秒"
        )
        self.reporter.on_batch_finished(summary)
        return summary
