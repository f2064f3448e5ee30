"""重试与退避工具
====================

提供连接重试策略、重试状态以及指数退避计算。
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from ..config.constants import BACKOFF_JITTER_RATIO, MAX_RETRIES, RETRY_INTERVAL


def exponential_backoff(
    base: float, attempt: int, jitter_ratio: float = BACKOFF_JITTER_RATIO
) -> float:
    """计算指数退避时间

    Args:
        base: 基础延时（秒）
        attempt: 第 *attempt* 次重试（从 0 开始）
        jitter_ratio: 抖动比例，默认 10%

    Returns:
        等待时间，秒
    """
    delay = base * (2 ** attempt)
    jitter = random.uniform(0, delay * jitter_ratio)
    return delay + jitter


@dataclass(frozen=True)
class RetryPolicy:
    """连接重试策略

    默认每次失败后等待固定间隔，开启 backoff 后改为指数退避。
    """

    max_attempts: int = MAX_RETRIES
    interval: float = RETRY_INTERVAL
    backoff: bool = False

    def delay_after(self, attempt: int) -> float:
        """第 *attempt* 次尝试（从 1 开始）失败后应等待的秒数"""
        if self.backoff:
            return exponential_backoff(self.interval, attempt - 1)
        return self.interval

    def new_state(self) -> "RetryState":
        """为一次文件投递创建新的重试状态"""
        return RetryState(max_attempts=self.max_attempts, delay=self.interval)


@dataclass
class RetryState:
    """单个文件投递期间的重试状态，每个文件重新创建"""

    max_attempts: int
    delay: float
    attempt: int = 0

    def record_failure(self) -> None:
        """记录一次失败的尝试"""
        self.attempt += 1

    @property
    def exhausted(self) -> bool:
        """尝试次数是否已达上限"""
        return self.attempt >= self.max_attempts
