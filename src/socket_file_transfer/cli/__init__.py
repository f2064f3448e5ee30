"""
命令行接口模块
==============

提供文件/文件夹上传的命令行接口。
"""

from .upload import UploadCLI

__all__ = [
    "UploadCLI",
]
