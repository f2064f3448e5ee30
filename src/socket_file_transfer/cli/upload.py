"""
文件上传命令行接口
==================

根据命令行参数构造配置并启动批量上传。
"""

import argparse
import logging
from pathlib import Path

from ..config.settings import ServerConfig, TransferConfig
from ..core.errors import DirectoryScanError, ResolutionError
from ..transfer.file_manager import SenderFileManager
from ..utils.logger import configure_logging, get_logger
from ..utils.progress import ConsoleReporter

logger = get_logger(__name__)


class UploadCLI:
    """文件上传命令行接口"""

    @staticmethod
    def build_configs(args: argparse.Namespace) -> tuple[ServerConfig, TransferConfig]:
        """
        根据命令行参数构造配置

        Raises:
            ValueError: 参数不合法时抛出
        """
        server_config = ServerConfig(
            host=args.host,
            port=args.port,
            write_timeout=args.write_timeout,
        )
        transfer_config = TransferConfig(
            chunk_size=args.chunk_size,
            max_attempts=args.retries,
            retry_interval=args.interval,
            backoff=args.backoff,
            show_progress=not args.no_progress,
        )
        return server_config, transfer_config

    @staticmethod
    def setup_logging(args: argparse.Namespace) -> None:
        """根据命令行参数配置日志"""
        level = logging.DEBUG if args.verbose else logging.INFO
        configure_logging(level=level, log_file=args.log_file)

    @staticmethod
    def send(args: argparse.Namespace) -> bool:
        """
        发送文件或文件夹

        Returns:
            所有文件发送成功返回True，否则返回False
        """
        UploadCLI.setup_logging(args)

        try:
            server_config, transfer_config = UploadCLI.build_configs(args)
        except ValueError as e:
            logger.error(f"参数错误: {e}")
            print(f"❌ 参数错误: {e}")
            return False

        source = Path(args.path)
        print(f"连接服务器 {server_config.host} 端口 {server_config.port}")
        print(f"发送路径: {source}")

        reporter = ConsoleReporter(show_progress=transfer_config.show_progress)
        manager = SenderFileManager(source, server_config, transfer_config, reporter)

        try:
            summary = manager.run()
        except ResolutionError as e:
            logger.error(f"地址解析失败，任务中止: {e}")
            print(f"❌ 无法解析服务器地址: {e}")
            return False
        except DirectoryScanError as e:
            logger.error(f"目录遍历失败，任务中止: {e}")
            print(f"❌ 目录遍历失败: {e}")
            return False

        if summary.total == 0:
            print("⚠️ 没有找到需要发送的文件")
        return summary.all_succeeded
