"""
CLI主模块
"""

import argparse
import logging
import sys
from typing import List, Optional

from .commands import ChartCommand, CriticalPathCommand


def parse_arguments(argv: Optional[List[str]] = None):
    """解析命令行参数"""
    parser = argparse.ArgumentParser(
        description="Profile Chart Tool - 将构建 profile 转换为甘特图",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例用法:
  # 生成 JSON 格式的甘特图模型
  profile-chart-tool chart profile.json

  # 同时输出 JSON、Excel 和 PNG
  profile-chart-tool chart profile.json --output-format json,xlsx,png --output-dir out/

  # 不计算关键路径
  profile-chart-tool chart profile.json.gz --no-critical-path

  # 打印关键路径，忽略线程等待时间
  profile-chart-tool critical-path profile.json --exclude WAIT
        """
    )
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='日志级别 (默认: WARNING)')

    subparsers = parser.add_subparsers(dest='command', help='可用命令')

    # chart 命令 - 生成甘特图
    chart_parser = subparsers.add_parser('chart', help='从 profile 文件生成甘特图')
    chart_parser.add_argument('file', help='profile JSON 文件路径 (支持 .json.gz)')
    chart_parser.add_argument('--output-format', default='json',
                              help='输出格式，逗号分隔: json, xlsx, png (默认: json)')
    chart_parser.add_argument('--output-dir', default='.', help='输出目录 (默认: 当前目录)')
    chart_parser.add_argument('--name', default=None,
                              help='输出文件基础名称 (默认: <输入文件名>_chart)')
    chart_parser.add_argument('--no-critical-path', action='store_true',
                              help='不计算关键路径，所有 bar 都不标记 (默认: False)')

    # critical-path 命令 - 打印关键路径
    cp_parser = subparsers.add_parser('critical-path', help='计算并打印关键路径')
    cp_parser.add_argument('file', help='profile JSON 文件路径 (支持 .json.gz)')
    cp_parser.add_argument('--exclude', type=str, default='',
                           help='计算关键路径时忽略的任务类别，逗号分隔\n'
                                '示例: --exclude "WAIT,VFS_STAT"')

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """主函数"""
    args = parse_arguments(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='%(asctime)s %(name)s %(levelname)s: %(message)s')

    if not args.command:
        print("错误: 请指定命令 (chart, critical-path)")
        print("使用 --help 查看帮助信息")
        return 1

    if args.command == 'chart':
        command = ChartCommand()
        return command.run(args)
    elif args.command == 'critical-path':
        command = CriticalPathCommand()
        return command.run(args)
    else:
        print(f"错误: 未知命令: {args.command}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
