"""
传输数据结构
============

定义文件描述、传输结果和连接状态等数据结构。
"""

import socket
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class FileDescriptor:
    """待发送文件的描述，一次传输期间不可变"""

    path: Path
    size: int


@dataclass(frozen=True)
class Endpoint:
    """解析得到的服务器地址"""

    host: str
    port: int
    family: int = socket.AF_INET

    def __str__(self) -> str:
        if self.family == socket.AF_INET6:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


class TransferOutcome(Enum):
    """单次尝试的传输结果"""

    SUCCESS = "success"
    OPEN_FAILED = "open_failed"
    CONNECTION_FAILED = "connection_failed"
    WRITE_FAILED = "write_failed"

    @property
    def retryable(self) -> bool:
        """是否应当换新连接重试"""
        return self in (TransferOutcome.CONNECTION_FAILED, TransferOutcome.WRITE_FAILED)


class DeliveryState(Enum):
    """连接管理器的状态机状态"""

    RESOLVING = "resolving"
    CONNECTING = "connecting"
    TRANSFERRING = "transferring"
    SUCCEEDED = "succeeded"
    RETRYING = "retrying"
    FAILED = "failed"


@dataclass
class DeliveryResult:
    """单个文件的投递结果"""

    path: Path
    state: DeliveryState
    attempts: int
    outcome: Optional[TransferOutcome] = None

    @property
    def succeeded(self) -> bool:
        return self.state is DeliveryState.SUCCEEDED


@dataclass
class BatchSummary:
    """批量发送汇总"""

    total: int = 0
    succeeded: int = 0
    failed: List[Path] = field(default_factory=list)

    def record(self, result: DeliveryResult) -> None:
        """记录一个文件的投递结果"""
        self.total += 1
        if result.succeeded:
            self.succeeded += 1
        else:
            self.failed.append(result.path)

    @property
    def all_succeeded(self) -> bool:
        return not self.failed
