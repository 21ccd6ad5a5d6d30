"""
甘特图命令模块
"""

import time
import traceback
from pathlib import Path

from ..validators import parse_output_formats
from ..file_utils import validate_profile_path, default_base_name
from ...parser import parse_profile
from ...critical_path import CriticalPathAnalyzer
from ...chart import DetailedChartCreator, export_chart
from ...statistics import format_critical_path_statistics


class ChartCommand:
    """甘特图命令处理器"""

    def run(self, args) -> int:
        """生成甘特图并导出"""
        print(f"=== 生成甘特图 ===")
        print(f"文件: {args.file}")
        print(f"输出格式: {args.output_format}")
        print(f"输出目录: {args.output_dir}")
        print(f"关键路径: {'关闭' if args.no_critical_path else '开启'}")
        print()

        try:
            formats = parse_output_formats(args.output_format)
            file_path = validate_profile_path(args.file)
        except ValueError as e:
            print(f"错误: 参数验证失败 - {e}")
            return 1

        output_dir = Path(args.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        try:
            start_time = time.time()

            info = parse_profile(file_path)
            if info is None:
                print(f"错误: 解析文件失败: {file_path}")
                return 1

            # 统计文本需要在构建图表前准备好，图表构建完成后不再修改
            # 分析器在统计文本和图表之间共用，关键路径只计算一次
            analyzer = CriticalPathAnalyzer(info)
            statistics = []
            if not args.no_critical_path:
                path = analyzer.compute_critical_path()
                if path is not None:
                    analyzer.analyze_critical_path(frozenset(), path)
                statistics = format_critical_path_statistics(analyzer.statistics)

            creator = DetailedChartCreator(
                info,
                statistics,
                analyzer=analyzer,
                include_critical_path=not args.no_critical_path,
            )
            chart = creator.create()

            critical_count = sum(1 for bar in chart.bars if bar.on_critical_path)
            print(f"图表包含 {len(chart.bars)} 条 bar, 其中 {critical_count} 条在关键路径上, "
                  f"{len(chart.lines)} 条连接线")

            base_name = args.name or default_base_name(file_path)
            generated_files = export_chart(chart, output_dir, base_name, formats)

            total_time = time.time() - start_time
            print(f"\n生成完成，总耗时: {total_time:.2f} 秒")

            print("\n生成的文件:")
            for generated in generated_files:
                print(f"  {generated}")

            return 0

        except Exception as e:
            print(f"错误: {e}")
            traceback.print_exc()
            return 1
