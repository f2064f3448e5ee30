"""
日志模块测试
============

测试彩色格式化器和日志重新配置。
"""

import logging

import pytest

from socket_file_transfer.utils import logger as logger_module
from socket_file_transfer.utils.logger import ColoredFormatter, configure_logging, get_logger


@pytest.fixture
def restore_logging():
    """测试结束后恢复默认日志配置"""
    yield
    configure_logging()


class TestColoredFormatter:

    def test_format_contains_message_and_caller(self):
        record = logging.LogRecord("t", logging.ERROR, __file__, 10, "连接失败", None, None)

        text = ColoredFormatter().format(record)

        assert "连接失败" in text
        assert text.startswith(ColoredFormatter.COLORS["ERROR"])
        assert "test_logger.py" in text


class TestGetLogger:

    def test_cached(self):
        assert get_logger("socket_file_transfer.test") is get_logger("socket_file_transfer.test")

    def test_package_logger_does_not_propagate(self):
        assert get_logger().propagate is False

    def test_module_logger_uses_package_handlers(self):
        """包内模块日志器自身不挂处理器"""
        module_logger = get_logger("socket_file_transfer.test.module")

        assert module_logger.handlers == []
        assert module_logger.propagate is True


class TestConfigureLogging:

    def test_level_applies_to_existing_loggers(self, restore_logging):
        existing = get_logger("socket_file_transfer.test.level")

        configure_logging(level=logging.DEBUG)

        assert get_logger().level == logging.DEBUG
        assert existing.getEffectiveLevel() == logging.DEBUG

    def test_log_file(self, tmp_path, restore_logging):
        log_file = tmp_path / "upload.log"
        configure_logging(log_file=str(log_file), console_output=False)

        for index in range(5):
            get_logger(f"socket_file_transfer.test.file{index}").info("已发送文件")
        for handler in get_logger().handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert content.count("已发送文件") == 5

    def test_single_file_handler(self, tmp_path, restore_logging):
        """多个模块日志器共用包日志器上的一个文件处理器"""
        for index in range(3):
            get_logger(f"socket_file_transfer.test.handle{index}")

        configure_logging(log_file=str(tmp_path / "upload.log"))

        file_handlers = [
            handler
            for logger in logger_module._loggers.values()
            for handler in logger.handlers
            if isinstance(handler, logging.FileHandler)
        ]
        assert len(file_handlers) == 1
        assert get_logger().handlers[-1] is file_handlers[0]
