"""
文件发送模块
============

负责单个文件在一条已建立连接上的发送逻辑。

发送顺序：文件名字段 -> 文件大小(4字节) -> 文件内容 -> MD5字段
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO, Optional, Union

from ..config.constants import MAX_FIELD_VALUE
from ..config.settings import TransferConfig
from ..core.checksum import calculate_file_md5
from ..core.errors import FileOpenError, TransferConnectionError, WriteError
from ..core.frame_handler import FrameHandler
from ..core.structures import FileDescriptor, TransferOutcome
from ..utils.logger import get_logger
from ..utils.progress import TransferReporter, percent_of

logger = get_logger(__name__)


@dataclass
class OpenedFile:
    """打开成功的待发送文件"""

    descriptor: FileDescriptor
    stream: BinaryIO


def open_source_file(file_path: Union[str, Path]) -> Union[OpenedFile, FileOpenError]:
    """
    打开待发送文件并读取其大小

    打开失败不抛出异常，而是返回 FileOpenError 实例，
    调用方必须在写出任何协议数据之前检查。

    Args:
        file_path: 文件路径

    Returns:
        OpenedFile 或 FileOpenError
    """
    file_path = Path(file_path)
    try:
        stream = file_path.open("rb")
    except OSError as e:
        return FileOpenError(f"无法打开文件: {file_path}: {e}")

    try:
        size = os.fstat(stream.fileno()).st_size
    except OSError as e:
        stream.close()
        return FileOpenError(f"无法读取文件大小: {file_path}: {e}")

    if size > MAX_FIELD_VALUE:
        stream.close()
        return FileOpenError(f"文件超过4字节大小字段的上限: {file_path} ({size} 字节)")

    return OpenedFile(FileDescriptor(path=file_path, size=size), stream)


class FileSender:
    """文件发送器"""

    def __init__(
        self,
        config: Optional[TransferConfig] = None,
        reporter: Optional[TransferReporter] = None,
    ):
        """
        初始化文件发送器

        Args:
            config: 传输配置（可选）
            reporter: 进度观察者（可选）
        """
        self.config = config or TransferConfig()
        self.reporter = reporter or TransferReporter()

    def send(self, conn: Any, file_path: Union[str, Path]) -> bool:
        """
        在已建立的连接上发送一个文件

        Args:
            conn: 提供 write(bytes) 方法的连接
            file_path: 文件路径

        Returns:
            所有数据写出成功返回True，否则返回False
        """
        return self.transfer(conn, file_path) is TransferOutcome.SUCCESS

    def transfer(self, conn: Any, file_path: Union[str, Path]) -> TransferOutcome:
        """
        在已建立的连接上发送一个文件，并返回详细结果

        Args:
            conn: 提供 write(bytes) 方法的连接
            file_path: 文件路径

        Returns:
            本次尝试的传输结果
        """
        opened = open_source_file(file_path)
        if isinstance(opened, FileOpenError):
            logger.error(str(opened))
            return TransferOutcome.OPEN_FAILED

        descriptor = opened.descriptor
        try:
            with opened.stream:
                self._send_header(conn, descriptor)
                if not self._send_payload(conn, descriptor, opened.stream):
                    return TransferOutcome.WRITE_FAILED

            digest = calculate_file_md5(descriptor.path, self.config.chunk_size)
            self.reporter.on_checksum(descriptor, digest)
            FrameHandler.write_field(conn, digest.encode("ascii"))

        except FileOpenError as e:
            logger.error(f"计算文件校验值失败: {e}")
            return TransferOutcome.WRITE_FAILED
        except WriteError as e:
            logger.error(f"发送数据失败: {e}")
            return TransferOutcome.WRITE_FAILED
        except TransferConnectionError as e:
            logger.error(f"连接异常: {e}")
            return TransferOutcome.CONNECTION_FAILED

        logger.info(f"已发送文件: {descriptor.path} ({descriptor.size} 字节), MD5: {digest}")
        self.reporter.on_file_sent(descriptor, digest)
        return TransferOutcome.SUCCESS

    def _send_header(self, conn: Any, descriptor: FileDescriptor) -> None:
        """发送文件名字段和文件大小"""
        FrameHandler.write_field(conn, os.fsencode(descriptor.path))
        FrameHandler.write_u32(conn, descriptor.size)
        logger.debug(f"已发送文件头: {descriptor.path}, 大小: {descriptor.size / 1024:.2f} KB")

    def _send_payload(self, conn: Any, descriptor: FileDescriptor, stream: BinaryIO) -> bool:
        """
        按块发送文件内容

        Returns:
            发送完整返回True；文件在传输过程中变短时返回False
        """
        self.reporter.on_file_start(descriptor)

        if descriptor.size == 0:
            self.reporter.on_progress(descriptor, 0, 100)
            return True

        total_bytes_sent = 0
        while total_bytes_sent < descriptor.size:
            remaining = descriptor.size - total_bytes_sent
            try:
                chunk = stream.read(min(self.config.chunk_size, remaining))
            except OSError as e:
                logger.error(f"读取文件失败: {descriptor.path}: {e}")
                return False

            if not chunk:
                logger.error(
                    f"文件在传输过程中被截断: {descriptor.path} "
                    f"({total_bytes_sent}/{descriptor.size} 字节)"
                )
                return False

            FrameHandler.write_raw(conn, chunk)
            total_bytes_sent += len(chunk)
            self.reporter.on_progress(
                descriptor, total_bytes_sent, percent_of(total_bytes_sent, descriptor.size)
            )

        return True
