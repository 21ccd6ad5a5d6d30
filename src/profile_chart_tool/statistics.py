"""
统计信息格式化
"""

from typing import List, Optional

from .critical_path import CriticalPath, CriticalPathStatistics


def format_duration(duration: int) -> str:
    """将纳秒时长格式化为易读字符串"""
    if duration >= 1_000_000_000:
        return f"{duration / 1_000_000_000:.3f} s"
    if duration >= 1_000_000:
        return f"{duration / 1_000_000:.3f} ms"
    if duration >= 1_000:
        return f"{duration / 1_000:.3f} us"
    return f"{duration} ns"


def format_critical_path_statistics(stats: Optional[CriticalPathStatistics]) -> List[str]:
    """
    生成关键路径统计的文本行

    Args:
        stats: 关键路径统计，None 表示没有关键路径

    Returns:
        List[str]: 每行一条统计信息
    """
    if stats is None:
        return ["Critical path: not available"]

    lines = [
        f"Critical path: {stats.entry_count} tasks, {format_duration(stats.critical_path_time)}",
        f"Wall time: {format_duration(stats.wall_time)} "
        f"({stats.critical_path_ratio * 100:.1f}% on critical path)",
    ]
    ordered = sorted(stats.time_by_category.items(), key=lambda item: (-item[1], item[0].name))
    for category, duration in ordered:
        lines.append(f"  {category.description}: {format_duration(duration)}")
    return lines


def format_critical_path(path: Optional[CriticalPath]) -> List[str]:
    """按时间顺序列出关键路径上的任务"""
    if path is None:
        return []
    lines = []
    for entry in reversed(path.entries):
        task = entry.task
        lines.append(
            f"{task.id:>6}  thread {task.thread_id:<4} {format_duration(entry.duration):>14}  "
            f"{task.category.description}: {task.description}"
        )
    return lines
