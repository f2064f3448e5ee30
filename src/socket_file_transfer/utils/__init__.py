"""
工具模块
========

包含日志记录、进度显示、重试策略等工具功能。
"""

from .logger import get_logger, setup_logger, configure_logging
from .progress import ProgressBar, TransferReporter, ConsoleReporter
from .retry import RetryPolicy, exponential_backoff

__all__ = [
    "get_logger",
    "setup_logger",
    "configure_logging",
    "ProgressBar",
    "TransferReporter",
    "ConsoleReporter",
    "RetryPolicy",
    "exponential_backoff",
]
