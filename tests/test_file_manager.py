"""
批量文件管理测试
================

测试SenderFileManager按顺序投递目录中的每个文件。
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from socket_file_transfer.config.settings import ServerConfig, TransferConfig
from socket_file_transfer.core.errors import DirectoryScanError, ResolutionError
from socket_file_transfer.core.structures import DeliveryResult, DeliveryState, TransferOutcome
from socket_file_transfer.transfer.connection_manager import ConnectionManager
from socket_file_transfer.transfer.file_manager import SenderFileManager
from socket_file_transfer.utils.progress import TransferReporter


def succeeded(host, port, path):
    return DeliveryResult(Path(path), DeliveryState.SUCCEEDED, 1, TransferOutcome.SUCCESS)


def failed(host, port, path):
    return DeliveryResult(Path(path), DeliveryState.FAILED, 3, TransferOutcome.CONNECTION_FAILED)


@pytest.fixture
def folder(tmp_path):
    root = tmp_path / "dataset"
    (root / "nested").mkdir(parents=True)
    (root / "one.bin").write_bytes(b"1")
    (root / "two.bin").write_bytes(b"22")
    (root / "nested" / "three.bin").write_bytes(b"333")
    return root


@pytest.fixture
def server_config():
    return ServerConfig(host="tstit.example.net", port=8889)


@pytest.fixture
def connection_manager():
    manager = MagicMock(spec=ConnectionManager)
    manager.deliver.side_effect = succeeded
    return manager


class TestSenderFileManager:
    """批量发送测试"""

    def test_init_defaults(self, folder, server_config):
        """默认创建连接管理器并向下传递观察者"""
        reporter = TransferReporter()
        manager = SenderFileManager(folder, server_config, reporter=reporter)

        assert manager.folder_path == folder
        assert isinstance(manager.config, TransferConfig)
        assert isinstance(manager.connection_manager, ConnectionManager)
        assert manager.connection_manager.reporter is reporter
        assert manager.connection_manager.sender.reporter is reporter

    def test_delivers_every_file(self, folder, server_config, connection_manager):
        """每个文件调用一次deliver，使用配置中的主机和端口"""
        manager = SenderFileManager(
            folder, server_config, connection_manager=connection_manager
        )

        summary = manager.run()

        delivered = {c.args[2] for c in connection_manager.deliver.call_args_list}
        assert delivered == {
            folder / "one.bin",
            folder / "two.bin",
            folder / "nested" / "three.bin",
        }
        for c in connection_manager.deliver.call_args_list:
            assert c.args[:2] == ("tstit.example.net", 8889)
        assert summary.total == 3
        assert summary.succeeded == 3
        assert summary.all_succeeded

    def test_failure_does_not_stop_batch(self, folder, server_config, connection_manager):
        """单个文件失败后继续发送其余文件"""
        results = iter([failed, succeeded, succeeded])
        connection_manager.deliver.side_effect = lambda *args: next(results)(*args)
        manager = SenderFileManager(
            folder, server_config, connection_manager=connection_manager
        )

        summary = manager.run()

        assert connection_manager.deliver.call_count == 3
        assert summary.succeeded == 2
        assert len(summary.failed) == 1
        assert not summary.all_succeeded

    def test_resolution_error_aborts_batch(self, folder, server_config, connection_manager):
        """地址解析失败时整个任务中止"""
        connection_manager.deliver.side_effect = ResolutionError("unknown host")
        manager = SenderFileManager(
            folder, server_config, connection_manager=connection_manager
        )

        with pytest.raises(ResolutionError):
            manager.run()
        assert connection_manager.deliver.call_count == 1

    def test_missing_folder_aborts(self, tmp_path, server_config, connection_manager):
        """目录不存在时整个任务中止"""
        manager = SenderFileManager(
            tmp_path / "missing", server_config, connection_manager=connection_manager
        )

        with pytest.raises(DirectoryScanError):
            manager.run()
        connection_manager.deliver.assert_not_called()

    def test_reports_batch_summary(self, folder, server_config, connection_manager):
        """结束时通知观察者"""
        reporter = MagicMock(spec=TransferReporter)
        manager = SenderFileManager(
            folder, server_config, reporter=reporter, connection_manager=connection_manager
        )

        summary = manager.run()

        reporter.on_batch_finished.assert_called_once_with(summary)

    def test_sequential_delivery(self, folder, server_config, connection_manager):
        """前一个文件返回之前不会开始下一个文件"""
        in_flight = []

        def deliver(host, port, path):
            assert not in_flight, "同一时间只能有一个文件在发送"
            in_flight.append(path)
            try:
                return succeeded(host, port, path)
            finally:
                in_flight.pop()

        connection_manager.deliver.side_effect = deliver
        manager = SenderFileManager(
            folder, server_config, connection_manager=connection_manager
        )

        assert manager.run().total == 3
