"""
关键路径命令模块
"""

import traceback

from ..validators import parse_category_filter
from ..file_utils import validate_profile_path
from ...parser import parse_profile
from ...critical_path import CriticalPathAnalyzer
from ...statistics import format_critical_path, format_critical_path_statistics


class CriticalPathCommand:
    """关键路径命令处理器"""

    def run(self, args) -> int:
        """计算并打印关键路径"""
        print(f"=== 关键路径分析 ===")
        print(f"文件: {args.file}")
        print(f"忽略类别: {args.exclude if args.exclude else '无'}")
        print()

        try:
            type_filter = parse_category_filter(args.exclude)
            file_path = validate_profile_path(args.file)
        except ValueError as e:
            print(f"错误: 参数验证失败 - {e}")
            return 1

        try:
            info = parse_profile(file_path)
            if info is None:
                print(f"错误: 解析文件失败: {file_path}")
                return 1

            analyzer = CriticalPathAnalyzer(info)
            path = analyzer.compute_critical_path(type_filter)
            if path is None:
                print("没有找到关键路径")
                return 0

            stats = analyzer.analyze_critical_path(type_filter, path)
            for line in format_critical_path(path):
                print(line)
            print()
            for line in format_critical_path_statistics(stats):
                print(line)
            return 0

        except Exception as e:
            print(f"错误: {e}")
            traceback.print_exc()
            return 1
