"""
进度显示模块
============

提供文件传输进度显示功能，以及传输过程的观察者接口。
"""

import time
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from .logger import get_logger

if TYPE_CHECKING:
    from ..core.structures import BatchSummary, FileDescriptor

logger = get_logger(__name__)


def percent_of(sent: int, total: int) -> int:
    """
    计算整数百分比 floor(100 * sent / total)

    Args:
        sent: 已发送字节数
        total: 总字节数

    Returns:
        0-100 的整数，总大小为0时视为已完成
    """
    if total <= 0:
        return 100
    return (100 * sent) // total


class SpeedMeter:
    """实时传输速率计算器"""

    def __init__(self, alpha: float = 0.3):
        """
        初始化速率计算器

        Args:
            alpha: EMA 平滑系数 (0.0 - 1.0)，值越大越接近瞬时速度
        """
        self.last_bytes = 0
        self.last_ts = time.time()
        self.ema_rate = 0.0  # 指数移动平均速率 (bytes/s)
        self.alpha = alpha

    def update(self, current_bytes: int) -> float:
        """
        更新并返回实时传输速率 (KB/s)

        Args:
            current_bytes: 当前已传输的总字节数

        Returns:
            float: 实时传输速率 (KB/s)
        """
        now = time.time()
        interval = now - self.last_ts

        if interval > 0.05:  # 至少等待50ms更新，避免频繁计算和抖动
            instant_rate = (current_bytes - self.last_bytes) / interval  # bytes/s
            self.ema_rate = self.alpha * instant_rate + (1 - self.alpha) * self.ema_rate
            self.last_bytes = current_bytes
            self.last_ts = now

        return self.ema_rate / 1024


class ProgressBar:
    """纯文本进度条，显示整数百分比"""

    def __init__(
        self,
        total: int = 100,
        width: int = 30,
        show_rate: bool = True,
        refresh_interval: float = 0.2,
    ):
        """
        初始化进度条

        Args:
            total: 总字节数
            width: 进度条宽度（字符数）
            show_rate: 是否显示速率
            refresh_interval: 最小刷新间隔(秒)，减少重复绘制
        """
        self.total = total
        self.width = width
        self.show_rate = show_rate
        self.refresh_interval = refresh_interval
        self.speed_meter = SpeedMeter()
        self.last_display_length = 0  # 记录上次显示字符串的长度，用于清空行
        self._last_draw_ts = 0.0
        self._finished = False

    def render(self, percent: int, rate_kbps: float = 0.0) -> str:
        """构建进度条显示字符串"""
        filled_width = (percent * self.width) // 100
        bar = "█" * filled_width + "░" * (self.width - filled_width)
        display = f"Progress: [{percent:3d}%][{bar}]"
        if self.show_rate:
            display += f"[{rate_kbps:8.2f}k/s]"
        return display

    def update(self, current: int, percent: Optional[int] = None) -> None:
        """
        更新进度

        Args:
            current: 当前已发送字节数
            percent: 已计算好的百分比，省略时按 total 计算
        """
        if self._finished:
            return
        if percent is None:
            percent = percent_of(current, self.total)

        now_ts = time.time()
        # 未到刷新间隔且未完成时不重绘
        if percent < 100 and (now_ts - self._last_draw_ts) < self.refresh_interval:
            return
        self._last_draw_ts = now_ts

        display_str = self.render(percent, self.speed_meter.update(current))

        # 用空格填充，覆盖旧内容
        padding = " " * max(0, self.last_display_length - len(display_str))
        print("\r" + display_str + padding, end="", flush=True)
        self.last_display_length = len(display_str)

        if percent >= 100:
            print()
            self._finished = True

    def finish(self) -> None:
        """结束进度显示，未到100%时清空当前行"""
        if not self._finished and self.last_display_length:
            print("\r" + " " * self.last_display_length + "\r", end="", flush=True)
        self._finished = True


class TransferReporter:
    """
    传输过程观察者

    由批量发送器持有并向下传递，所有控制台输出都经由它完成。
    基类的方法全部为空实现，可直接作为静默观察者使用。
    """

    def on_file_start(self, descriptor: "FileDescriptor") -> None:
        """开始发送一个文件"""

    def on_progress(self, descriptor: "FileDescriptor", sent: int, percent: int) -> None:
        """写出一个数据块之后调用，percent 单调不减"""

    def on_checksum(self, descriptor: "FileDescriptor", digest: str) -> None:
        """校验值计算完成"""

    def on_file_sent(self, descriptor: "FileDescriptor", digest: str) -> None:
        """文件所有字段写出完成"""

    def on_attempt_failed(self, path: Path, reason: str) -> None:
        """一次尝试失败，连接已被丢弃"""

    def on_retry(self, path: Path, attempt: int, max_attempts: int, delay: float) -> None:
        """即将等待 delay 秒后重试"""

    def on_file_failed(self, path: Path, attempts: int) -> None:
        """文件最终发送失败"""

    def on_batch_finished(self, summary: "BatchSummary") -> None:
        """所有文件处理完毕"""


class ConsoleReporter(TransferReporter):
    """控制台进度输出"""

    def __init__(self, show_progress: bool = True, show_rate: bool = True):
        self.show_progress = show_progress
        self.show_rate = show_rate
        self.progress_bar: Optional[ProgressBar] = None
        self._start_time = 0.0

    def on_file_start(self, descriptor: "FileDescriptor") -> None:
        self._start_time = time.time()
        if self.show_progress:
            self.progress_bar = ProgressBar(total=descriptor.size, show_rate=self.show_rate)

    def on_progress(self, descriptor: "FileDescriptor", sent: int, percent: int) -> None:
        if self.progress_bar is not None:
            self.progress_bar.update(sent, percent)

    def on_checksum(self, descriptor: "FileDescriptor", digest: str) -> None:
        self._close_bar()
        logger.info(f"文件MD5: {digest}")

    def on_file_sent(self, descriptor: "FileDescriptor", digest: str) -> None:
        elapsed_time = time.time() - self._start_time
        avg_rate = (descriptor.size / elapsed_time / 1024) if elapsed_time > 0 else 0
        print(f"已发送文件: {descriptor.path} ({descriptor.size} 字节), MD5: {digest}")
        logger.debug(f"传输时间: {elapsed_time:.2f} 秒, 平均速率: {avg_rate:.2f} KB/s")

    def on_attempt_failed(self, path: Path, reason: str) -> None:
        self._close_bar()

    def on_retry(self, path: Path, attempt: int, max_attempts: int, delay: float) -> None:
        print(f"第{attempt}/{max_attempts}次尝试失败, {delay:.1f}秒后重试: {path}")

    def on_file_failed(self, path: Path, attempts: int) -> None:
        self._close_bar()
        print(f"尝试{attempts}次后仍发送失败: {path}")

    def on_batch_finished(self, summary: "BatchSummary") -> None:
        print(
            f"所有文件处理完毕。成功 {summary.succeeded}/{summary.total}, "
            f"失败 {len(summary.failed)}"
        )
        for path in summary.failed:
            print(f"  失败: {path}")

    def _close_bar(self) -> None:
        if self.progress_bar is not None:
            self.progress_bar.finish()
            self.progress_bar = None
