"""
字段帧处理模块
==============

负责上传协议中字段的封装、写出和解析。

字段格式：| 长度(4B, 大端) | 数据内容(NB) |
文件大小字段不带长度前缀，本身就是4字节大端无符号整数。
"""

import struct
from typing import Any, Tuple, Union

from ..config.constants import (
    FIELD_LENGTH_FORMAT,
    FIELD_LENGTH_SIZE,
    FILE_SIZE_FORMAT,
    FILE_SIZE_FIELD_SIZE,
    MAX_FIELD_VALUE,
)
from .errors import FrameDecodeError, TransferConnectionError, WriteError
from ..utils.logger import get_logger

logger = get_logger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]


class FrameHandler:
    """字段帧处理器"""

    @staticmethod
    def pack_u32(value: int) -> bytes:
        """
        将整数打包为4字节大端无符号整数

        Args:
            value: 0 到 0xFFFFFFFF 之间的整数

        Returns:
            4字节数据

        Raises:
            ValueError: 数值超出范围时抛出

        Examples:
            >>> FrameHandler.pack_u32(10000)
            b"\\x00\\x00'\\x10"
        """
        if not 0 <= value <= MAX_FIELD_VALUE:
            raise ValueError(f"数值超出4字节无符号整数范围: {value}")
        return struct.pack(FILE_SIZE_FORMAT, value)

    @staticmethod
    def pack_field(data: BytesLike) -> bytes:
        """
        将数据打包成带长度前缀的字段

        Args:
            data: 字段内容

        Returns:
            长度前缀 + 数据内容
        """
        if data is None:
            raise ValueError("字段数据不能为空")
        if len(data) > MAX_FIELD_VALUE:
            raise ValueError(f"字段长度超出范围: {len(data)}")
        return struct.pack(FIELD_LENGTH_FORMAT, len(data)) + bytes(data)

    @staticmethod
    def write_raw(conn: Any, data: BytesLike) -> int:
        """
        向连接写入原始字节，不加任何帧头

        Args:
            conn: 提供 write(bytes) 方法的连接对象
            data: 要写入的数据

        Returns:
            写入的字节数

        Raises:
            WriteError: 写入失败或未完整写入时抛出
            TransferConnectionError: 连接层异常原样抛出
        """
        try:
            written = conn.write(data)
        except TransferConnectionError:
            raise
        except OSError as e:
            raise WriteError(f"写入数据失败: {e}") from e

        # 部分连接对象不返回写入长度
        if written is not None and written != len(data):
            raise WriteError(f"数据未完整写入: {written}/{len(data)}")
        return len(data)

    @staticmethod
    def write_field(conn: Any, data: BytesLike) -> int:
        """
        写入带长度前缀的字段

        Args:
            conn: 连接对象
            data: 字段内容

        Returns:
            写入的总字节数（含长度前缀）
        """
        return FrameHandler.write_raw(conn, FrameHandler.pack_field(data))

    @staticmethod
    def write_u32(conn: Any, value: int) -> int:
        """
        写入4字节大端无符号整数，不带长度前缀

        Args:
            conn: 连接对象
            value: 要写入的数值

        Returns:
            写入的字节数
        """
        return FrameHandler.write_raw(conn, FrameHandler.pack_u32(value))

    @staticmethod
    def unpack_u32(buffer: BytesLike, offset: int = 0) -> Tuple[int, int]:
        """
        从缓冲区解析4字节大端无符号整数

        Args:
            buffer: 数据缓冲区
            offset: 起始偏移

        Returns:
            元组(数值, 下一个字段的偏移)

        Raises:
            FrameDecodeError: 数据不足时抛出
        """
        end = offset + FILE_SIZE_FIELD_SIZE
        if len(buffer) < end:
            raise FrameDecodeError(f"数据长度不足: 需要{end}字节, 实际{len(buffer)}字节")
        (value,) = struct.unpack_from(FILE_SIZE_FORMAT, buffer, offset)
        return value, end

    @staticmethod
    def unpack_field(buffer: BytesLike, offset: int = 0) -> Tuple[bytes, int]:
        """
        从缓冲区解析带长度前缀的字段

        Args:
            buffer: 数据缓冲区
            offset: 起始偏移

        Returns:
            元组(字段内容, 下一个字段的偏移)

        Raises:
            FrameDecodeError: 长度前缀或数据不完整时抛出
        """
        header_end = offset + FIELD_LENGTH_SIZE
        if len(buffer) < header_end:
            raise FrameDecodeError(f"字段长度前缀不完整: 偏移{offset}")

        (length,) = struct.unpack_from(FIELD_LENGTH_FORMAT, buffer, offset)
        data_end = header_end + length
        if len(buffer) < data_end:
            logger.debug(f"字段数据不完整: 声明长度={length}, 剩余={len(buffer) - header_end}")
            raise FrameDecodeError(f"字段数据不完整: 声明长度={length}")

        return bytes(buffer[header_end:data_end]), data_end
