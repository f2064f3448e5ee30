"""
测试包
======

单元测试使用替身连接，integration 目录下的测试使用本机回环TCP服务。
"""

# 直接运行单个测试文件时 pytest 的 pythonpath 配置不生效，手动加入 src 目录
import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent.parent / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))
