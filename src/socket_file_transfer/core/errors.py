"""
异常定义
========

文件上传过程中使用的异常层次。
"""


class TransferError(Exception):
    """所有传输相关异常的基类"""


class FileOpenError(TransferError, OSError):
    """文件无法打开或读取，不会重试，也不会触碰连接"""


class TransferConnectionError(TransferError, ConnectionError):
    """建立连接失败，触发重试状态机"""


class WriteError(TransferConnectionError):
    """向连接写入失败，连接视为已损坏，不可复用"""


class ResolutionError(TransferError):
    """服务器地址无法解析，整个批量任务中止"""


class DirectoryScanError(TransferError):
    """目录遍历失败，整个批量任务中止"""


class FrameDecodeError(TransferError, ValueError):
    """字段数据不完整或格式错误"""
