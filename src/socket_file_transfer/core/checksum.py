"""
校验算法模块
============

提供文件内容校验相关的算法实现。
"""

import hashlib
from pathlib import Path
from typing import Union

from ..config.constants import CHUNK_SIZE, CHECKSUM_ALGORITHM
from .errors import FileOpenError


def calculate_file_md5(file_path: Union[str, Path], chunk_size: int = CHUNK_SIZE) -> str:
    """
    计算文件的MD5摘要

    以二进制方式按块读取文件，每块按实际读取的字节数送入摘要，
    最后一块可能不足 chunk_size。

    Args:
        file_path: 文件路径
        chunk_size: 每次读取的字节数

    Returns:
        小写十六进制摘要字符串（32个字符）

    Raises:
        FileOpenError: 文件无法打开或读取时抛出
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size必须大于0")

    digest = hashlib.new(CHECKSUM_ALGORITHM)
    try:
        with open(file_path, "rb") as f:
            while True:
                chunk = f.read(chunk_size)
                if not chunk:
                    break
                digest.update(chunk)
    except OSError as e:
        raise FileOpenError(f"无法读取文件: {file_path}: {e}") from e

    return digest.hexdigest()
