"""
进度显示测试
============

测试百分比计算、进度条输出和控制台观察者。
"""

from pathlib import Path

import pytest

from socket_file_transfer.core.structures import BatchSummary, DeliveryResult, DeliveryState, FileDescriptor
from socket_file_transfer.utils.progress import ConsoleReporter, ProgressBar, percent_of


class TestPercentOf:
    """整数百分比计算"""

    @pytest.mark.parametrize("sent,total,expected", [
        (0, 100, 0),
        (4096, 10000, 40),
        (8192, 10000, 81),
        (10000, 10000, 100),
        (9999, 10000, 99),
        (0, 0, 100),
    ])
    def test_floor_percentage(self, sent, total, expected):
        assert percent_of(sent, total) == expected


class TestProgressBar:
    """进度条输出"""

    def test_render(self):
        bar = ProgressBar(total=200, width=10, show_rate=False)

        assert bar.render(50) == "Progress: [ 50%][█████░░░░░]"

    def test_update_complete_prints_newline(self, capsys):
        bar = ProgressBar(total=10, width=10, show_rate=False, refresh_interval=0)

        bar.update(5)
        bar.update(10)

        out = capsys.readouterr().out
        assert "[ 50%]" in out
        assert "[100%]" in out
        assert out.endswith("\n")

    def test_throttled_until_complete(self, capsys):
        """刷新间隔内只绘制第一次和完成时"""
        bar = ProgressBar(total=100, width=10, show_rate=False, refresh_interval=3600)

        for current in range(1, 101):
            bar.update(current)

        out = capsys.readouterr().out
        assert out.count("Progress:") == 2

    def test_no_updates_after_finish(self, capsys):
        bar = ProgressBar(total=10, show_rate=False, refresh_interval=0)
        bar.finish()

        bar.update(10)

        assert capsys.readouterr().out == ""


class TestConsoleReporter:
    """控制台观察者"""

    def test_file_cycle(self, capsys):
        reporter = ConsoleReporter(show_progress=True, show_rate=False)
        descriptor = FileDescriptor(path=Path("data/a.bin"), size=10)

        reporter.on_file_start(descriptor)
        reporter.on_progress(descriptor, 10, 100)
        reporter.on_checksum(descriptor, "d41d8cd98f00b204e9800998ecf8427e")
        reporter.on_file_sent(descriptor, "d41d8cd98f00b204e9800998ecf8427e")

        out = capsys.readouterr().out
        assert "[100%]" in out
        assert "a.bin" in out
        assert "d41d8cd98f00b204e9800998ecf8427e" in out

    def test_no_progress(self, capsys):
        reporter = ConsoleReporter(show_progress=False)
        descriptor = FileDescriptor(path=Path("a.bin"), size=10)

        reporter.on_file_start(descriptor)
        reporter.on_progress(descriptor, 10, 100)

        assert "Progress" not in capsys.readouterr().out

    def test_retry_and_failure_messages(self, capsys):
        reporter = ConsoleReporter(show_progress=False)

        reporter.on_retry(Path("a.bin"), 1, 3, 5.0)
        reporter.on_file_failed(Path("a.bin"), 3)

        out = capsys.readouterr().out
        assert "1/3" in out
        assert "5.0" in out
        assert "3" in out

    def test_batch_summary(self, capsys):
        reporter = ConsoleReporter(show_progress=False)
        summary = BatchSummary()
        summary.record(DeliveryResult(Path("ok.bin"), DeliveryState.SUCCEEDED, 1))
        summary.record(DeliveryResult(Path("bad.bin"), DeliveryState.FAILED, 3))

        reporter.on_batch_finished(summary)

        out = capsys.readouterr().out
        assert "1/2" in out
        assert "bad.bin" in out
