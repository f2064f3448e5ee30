"""
路径处理工具模块
================

提供待发送文件的递归枚举功能。
"""

import os
from pathlib import Path
from typing import Iterator, Union

from ..core.errors import DirectoryScanError
from ..utils.logger import get_logger

logger = get_logger(__name__)


def iter_regular_files(root: Union[str, Path]) -> Iterator[Path]:
    """
    惰性地深度优先枚举根目录下的所有普通文件

    子目录递归进入，但不跟随指向目录的符号链接；
    指向普通文件的符号链接会被当作文件返回。
    目录内的顺序不作保证。

    Args:
        root: 根目录，也可以直接是一个文件

    Yields:
        普通文件路径

    Raises:
        DirectoryScanError: 根路径不存在或遍历过程中目录无法读取时抛出
    """
    root = Path(root)

    if root.is_file():
        yield root
        return

    if not root.is_dir():
        raise DirectoryScanError(f"目录不存在或不是文件夹: {root}")

    yield from _walk(root)


def _walk(directory: Path) -> Iterator[Path]:
    """递归遍历单个目录"""
    try:
        with os.scandir(directory) as it:
            entries = list(it)
    except OSError as e:
        raise DirectoryScanError(f"无法遍历目录: {directory}: {e}") from e

    for entry in entries:
        try:
            if entry.is_dir(follow_symlinks=False):
                yield from _walk(Path(entry.path))
            elif entry.is_file():
                yield Path(entry.path)
            else:
                logger.debug(f"跳过非普通文件: {entry.path}")
        except OSError as e:
            raise DirectoryScanError(f"无法读取目录项: {entry.path}: {e}") from e
