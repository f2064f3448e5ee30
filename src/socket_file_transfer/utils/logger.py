"""
日志记录模块
============

提供统一的日志记录功能，支持彩色输出和函数调用追踪。
"""

import datetime
import inspect
import logging
import sys
from typing import Dict, Optional
from pathlib import Path

DEFAULT_LOGGER_NAME = "socket_file_transfer"


class ColoredFormatter(logging.Formatter):
    """彩色日志格式化器"""

    # ANSI颜色代码
    COLORS = {
        'DEBUG': '\033[36m',    # 青色
        'INFO': '\033[0m',      # 默认色
        'WARNING': '\033[33m',  # 黄色
        'ERROR': '\033[31m',    # 红色
        'CRITICAL': '\033[35m', # 紫色
        'RESET': '\033[0m'      # 重置
    }

    def format(self, record):
        """格式化日志记录"""
        # 获取调用信息
        frame = inspect.currentframe()
        try:
            # 跳过本模块和logging模块自身的栈帧
            while frame:
                filename = frame.f_code.co_filename
                if filename != __file__ and filename != logging.__file__:
                    caller_filename = Path(filename).name
                    caller_function = frame.f_code.co_name
                    caller_line = frame.f_lineno
                    break
                frame = frame.f_back
            else:
                caller_filename = "unknown"
                caller_function = "unknown"
                caller_line = 0
        finally:
            del frame

        # 添加毫秒精度的时间戳
        now = datetime.datetime.fromtimestamp(record.created)
        milliseconds = now.microsecond // 1000
        timestamp = now.strftime(f"%Y-%m-%d %H:%M:%S.{milliseconds:03d}")

        color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
        reset = self.COLORS['RESET']

        return (
            f"{color}[{timestamp}] {record.getMessage()} "
            f"[{caller_filename}.{caller_function}():{caller_line}]{reset}"
        )


# 全局日志器字典及其当前配置
_loggers: Dict[str, logging.Logger] = {}
_settings = {
    "level": logging.INFO,
    "log_file": None,
    "console_output": True,
}


def setup_logger(
    name: str = DEFAULT_LOGGER_NAME,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    console_output: bool = True
) -> logging.Logger:
    """
    设置日志器

    Args:
        name: 日志器名称
        level: 日志级别
        log_file: 日志文件路径，None表示不写入文件
        console_output: 是否输出到控制台

    Returns:
        配置好的日志器
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # 清除已有的处理器
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # 控制台处理器
    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(ColoredFormatter())
        logger.addHandler(console_handler)

    # 文件处理器
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    # 防止重复输出
    logger.propagate = False

    return logger


def _is_package_child(name: str) -> bool:
    return name.startswith(DEFAULT_LOGGER_NAME + ".")


def get_logger(name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """
    获取日志器实例

    包内模块的日志器不挂处理器，统一上传给包日志器输出，
    因此控制台和日志文件各只有一个处理器。

    Args:
        name: 日志器名称

    Returns:
        日志器实例
    """
    if name not in _loggers:
        if _is_package_child(name):
            logger = logging.getLogger(name)
            logger.setLevel(logging.NOTSET)
            logger.propagate = True
            _loggers[name] = logger
        else:
            _loggers[name] = setup_logger(name, **_settings)
    return _loggers[name]


def configure_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    console_output: bool = True,
) -> None:
    """
    重新配置所有已创建及之后创建的日志器

    命令行入口在解析参数后调用，用于切换日志级别或追加日志文件。

    Args:
        level: 日志级别
        log_file: 日志文件路径
        console_output: 是否输出到控制台
    """
    _settings.update(level=level, log_file=log_file, console_output=console_output)
    for name in list(_loggers):
        if not _is_package_child(name):
            _loggers[name] = setup_logger(name, **_settings)


# 默认设置根日志器
_default_logger = get_logger()
