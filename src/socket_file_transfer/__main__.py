#!/usr/bin/env python3
"""
网络文件上传工具 - 模块CLI入口
==============================

支持通过 python -m socket_file_transfer 调用
"""

import sys
import argparse

from . import __version__
from .cli.upload import UploadCLI
from .config.constants import CHUNK_SIZE, MAX_RETRIES, RETRY_INTERVAL
from .utils.logger import get_logger

logger = get_logger(__name__)

PROGRAM_NAME = "网络文件上传工具"


def create_parser():
    """创建命令行参数解析器"""
    parser = argparse.ArgumentParser(
        prog="socket_file_transfer",
        description=f"{PROGRAM_NAME} v{__version__}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用示例：
  # 上传整个目录
  python -m socket_file_transfer send --host example.com --port 8889 --path ./dataset

  # 上传单个文件，最多尝试5次，每次间隔2秒
  python -m socket_file_transfer send --host 127.0.0.1 --port 8889 --path a.bin --retries 5 --interval 2
        """,
    )

    parser.add_argument(
        "--version", action="version", version=f"{PROGRAM_NAME} v{__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="可用命令")

    send_parser = subparsers.add_parser("send", help="上传文件或文件夹")
    send_parser.add_argument("--host", required=True, help="服务器域名或IP")
    send_parser.add_argument("--port", required=True, type=int, help="服务器端口")
    send_parser.add_argument("--path", required=True, help="要发送的文件或文件夹路径")
    send_parser.add_argument(
        "--retries", type=int, default=MAX_RETRIES, help=f"每个文件的最大尝试次数（默认{MAX_RETRIES}）"
    )
    send_parser.add_argument(
        "--interval", type=float, default=RETRY_INTERVAL, help=f"重试间隔秒数（默认{RETRY_INTERVAL:g}）"
    )
    send_parser.add_argument("--backoff", action="store_true", help="重试间隔按指数退避增长")
    send_parser.add_argument(
        "--chunk-size", type=int, default=CHUNK_SIZE, help=f"数据块大小（默认{CHUNK_SIZE}）"
    )
    send_parser.add_argument("--write-timeout", type=float, default=None, help="写超时秒数（默认阻塞）")
    send_parser.add_argument("--no-progress", action="store_true", help="不显示进度条")
    send_parser.add_argument("--log-file", default=None, help="日志文件路径")
    send_parser.add_argument("-v", "--verbose", action="store_true", help="输出调试日志")

    return parser


def main(argv=None):
    """主函数"""
    try:
        parser = create_parser()
        args = parser.parse_args(argv)

        if not args.command:
            parser.print_help()
            return

        if args.command == "send":
            success = UploadCLI.send(args)
            sys.exit(0 if success else 1)

    except KeyboardInterrupt:
        print("\n\n👋 用户中断程序，退出")
        sys.exit(1)
    except Exception as e:
        logger.error(f"程序异常: {e}")
        print(f"\n💥 程序异常: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
