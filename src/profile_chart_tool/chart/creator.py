"""
甘特图构建器

为 profile 中的每个任务生成一条 bar，并在关键路径切换线程时生成连接线。
"""

from typing import List, Optional
import logging

from ..critical_path import CriticalPathAnalyzer
from ..models import ProfileInfo, TaskCategory
from .model import Chart
from .registry import register_bar_types

logger = logging.getLogger(__name__)


def create_common_chart_items(chart: Chart, info: ProfileInfo) -> None:
    """为每个顶层构建阶段任务添加阶段标记列"""
    phase_type = chart.lookup_type(TaskCategory.PHASE.description)
    for task in info.top_level_tasks:
        if task.category is TaskCategory.PHASE:
            chart.add_column(task.start_time, task.duration, task.description, phase_type)


class DetailedChartCreator:
    """包含 profile 中所有任务的甘特图构建器"""

    def __init__(self, info: ProfileInfo, statistics: Optional[List[str]] = None,
                 analyzer=None, include_critical_path: bool = True):
        """
        Args:
            info: 构建的 profile 数据
            statistics: 已格式化好的统计文本，原样放入图表
            analyzer: 关键路径分析器，默认使用 CriticalPathAnalyzer
            include_critical_path: 是否计算并标记关键路径
        """
        self.info = info
        self.statistics = list(statistics) if statistics else []
        self.analyzer = analyzer if analyzer is not None else CriticalPathAnalyzer(info)
        self.include_critical_path = include_critical_path

    def create(self) -> Chart:
        """构建甘特图"""
        chart = Chart(self.info.comment, self.statistics)
        register_bar_types(chart)
        create_common_chart_items(chart, self.info)

        # 计算关键路径，不过滤任何类别
        type_filter = frozenset()
        critical_path = None
        if self.include_critical_path:
            critical_path = self.analyzer.compute_critical_path(type_filter)
            if critical_path is not None:
                self.analyzer.analyze_critical_path(type_filter, critical_path)

        for task in self.info.all_tasks_by_id:
            label = f"{task.category.description}: {task.description}"
            bar_type = chart.lookup_type(task.category.description)
            stop = task.start_time + task.duration
            entry = None

            # 只检查顶层任务是否在关键路径上
            if task.is_top_level and critical_path is not None:
                entry = self.analyzer.find_entry_for_task(critical_path, task)
                if entry is not None:
                    next_entry = critical_path.next_top_level_entry(entry)
                    if next_entry is not None:
                        # 关键路径是沿时间倒序构建的，所以使用开始时间而不是结束时间
                        chart.add_vertical_line(task.thread_id, next_entry.task.thread_id, task.start_time)

            chart.add_bar(task.thread_id, task.start_time, stop, bar_type, entry is not None, label)

        logger.info(f"图表构建完成: {len(chart.bars)} 条 bar, {len(chart.lines)} 条连接线")
        return chart


def create_chart(info: ProfileInfo, statistics: Optional[List[str]] = None, **kwargs) -> Chart:
    """便捷函数：使用 DetailedChartCreator 构建图表"""
    return DetailedChartCreator(info, statistics, **kwargs).create()
