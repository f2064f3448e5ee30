#!/usr/bin/env python3
"""
校验算法测试
============

测试 socket_file_transfer.core.checksum 模块中的MD5计算。
"""

import hashlib
import sys
from pathlib import Path

import pytest

# 添加项目根目录到Python路径，确保能导入我们的模块
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from socket_file_transfer.core.checksum import calculate_file_md5
from socket_file_transfer.core.errors import FileOpenError

EMPTY_MD5 = "d41d8cd98f00b204e9800998ecf8427e"


class TestCalculateFileMd5:
    """测试文件MD5计算"""

    @pytest.mark.parametrize("data,expected", [
        (b"hello", "5d41402abc4b2a76b9719d911017c592"),
        (b"The quick brown fox jumps over the lazy dog", "9e107d9d372bb6826bd81d3542a419d6"),
    ])
    def test_known_values(self, tmp_path, data, expected):
        """测试已知数据的MD5值"""
        path = tmp_path / "data.bin"
        path.write_bytes(data)

        assert calculate_file_md5(path) == expected

    def test_empty_file(self, tmp_path):
        """空文件的摘要等于空数据的摘要"""
        path = tmp_path / "empty.bin"
        path.write_bytes(b"")

        assert calculate_file_md5(path) == EMPTY_MD5

    def test_lowercase_hex_32_chars(self, tmp_path):
        """结果为32个小写十六进制字符"""
        path = tmp_path / "data.bin"
        path.write_bytes(b"\xff" * 100)

        digest = calculate_file_md5(path)
        assert len(digest) == 32
        assert digest == digest.lower()
        int(digest, 16)

    @pytest.mark.parametrize("size", [1, 4095, 4096, 4097, 10000, 3 * 4096])
    def test_partial_last_chunk_uses_actual_length(self, tmp_path, size):
        """
        最后一块不足 chunk_size 时只计算实际读取的字节

        与一次性计算整个内容的结果一致即可证明没有多算缓冲区的残留数据
        """
        content = bytes((i * 7) % 256 for i in range(size))
        path = tmp_path / "data.bin"
        path.write_bytes(content)

        assert calculate_file_md5(path) == hashlib.md5(content).hexdigest()

    def test_chunk_size_does_not_change_result(self, tmp_path):
        """不同的块大小得到相同的摘要"""
        path = tmp_path / "data.bin"
        path.write_bytes(b"abcdefghij" * 1000)

        results = {calculate_file_md5(path, chunk_size) for chunk_size in (1, 7, 4096, 65536)}
        assert len(results) == 1

    def test_deterministic(self, tmp_path):
        """未修改的文件多次计算结果相同"""
        path = tmp_path / "data.bin"
        path.write_bytes(b"consistency test data" * 500)

        assert calculate_file_md5(path) == calculate_file_md5(path)

    def test_missing_file_raises_file_open_error(self, tmp_path):
        """文件不存在时抛出FileOpenError，它同时也是IOError"""
        missing = tmp_path / "missing.bin"

        with pytest.raises(FileOpenError):
            calculate_file_md5(missing)
        with pytest.raises(IOError):
            calculate_file_md5(missing)

    def test_invalid_chunk_size(self, tmp_path):
        """块大小必须为正数"""
        path = tmp_path / "data.bin"
        path.write_bytes(b"x")

        with pytest.raises(ValueError):
            calculate_file_md5(path, chunk_size=0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
