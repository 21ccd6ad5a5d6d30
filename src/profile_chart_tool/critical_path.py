"""
关键路径分析

从最后结束的任务开始，沿依赖关系向前（时间上向后）回溯，
每一步选择结束时间最晚的依赖任务，得到一条有序的关键路径。
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import AbstractSet, Dict, FrozenSet, List, Optional, Tuple
import logging

from .models import ProfileInfo, Task, TaskCategory

logger = logging.getLogger(__name__)


class CriticalPathError(Exception):
    """依赖关系存在环，无法计算关键路径"""


@dataclass(frozen=True)
class CriticalPathEntry:
    """关键路径上的一个节点"""
    task: Task
    index: int
    duration: int
    cumulative_duration: int


@dataclass(frozen=True)
class CriticalPath:
    """
    有序、可索引的关键路径

    entries[0] 是最后结束的任务，entries[i + 1] 是 entries[i] 所依赖的
    更早的任务。路径长度有限，遍历不会超出 entries 的范围。
    """
    entries: Tuple[CriticalPathEntry, ...]

    def __post_init__(self):
        object.__setattr__(self, '_by_task_id', {e.task.id: e for e in self.entries})

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    @property
    def head(self) -> CriticalPathEntry:
        return self.entries[0]

    def next_entry(self, entry: CriticalPathEntry) -> Optional[CriticalPathEntry]:
        """返回链上的下一个（更早的）节点，末尾返回 None"""
        next_index = entry.index + 1
        if next_index < len(self.entries):
            return self.entries[next_index]
        return None

    def next_top_level_entry(self, entry: CriticalPathEntry) -> Optional[CriticalPathEntry]:
        """从 entry 之后开始查找第一个顶层任务节点"""
        candidate = self.next_entry(entry)
        while candidate is not None and not candidate.task.is_top_level:
            candidate = self.next_entry(candidate)
        return candidate

    def entry_for_task(self, task: Task) -> Optional[CriticalPathEntry]:
        return self._by_task_id.get(task.id)


@dataclass
class CriticalPathStatistics:
    """关键路径的汇总统计"""
    entry_count: int
    critical_path_time: int
    wall_time: int
    time_by_category: Dict[TaskCategory, int] = field(default_factory=dict)

    @property
    def critical_path_ratio(self) -> float:
        if self.wall_time <= 0:
            return 0.0
        return self.critical_path_time / self.wall_time


def _latest_first(task: Task) -> Tuple[int, int]:
    return (task.stop_time, task.id)


class CriticalPathAnalyzer:
    """关键路径分析器"""

    def __init__(self, info: ProfileInfo):
        self.info = info
        self.statistics: Optional[CriticalPathStatistics] = None
        # 同一个 profile 快照上的结果按过滤条件缓存
        self._paths: Dict[FrozenSet[TaskCategory], Optional[CriticalPath]] = {}
        self._analyzed: Dict[FrozenSet[TaskCategory], CriticalPath] = {}

    def compute_critical_path(self, type_filter: AbstractSet[TaskCategory] = frozenset()) -> Optional[CriticalPath]:
        """
        计算关键路径，同一过滤条件只计算一次

        Args:
            type_filter: 需要忽略的任务类别，被忽略的任务会被穿过但不会出现在路径中

        Returns:
            CriticalPath: 关键路径；没有可用任务时返回 None

        Raises:
            CriticalPathError: 依赖关系中存在环
        """
        key = frozenset(type_filter)
        if key not in self._paths:
            self._paths[key] = self._build_path(key)
        return self._paths[key]

    def _build_path(self, type_filter: FrozenSet[TaskCategory]) -> Optional[CriticalPath]:
        candidates = [t for t in self.info.all_tasks_by_id if t.category not in type_filter]
        if not candidates:
            logger.info("没有可用于计算关键路径的任务")
            return None

        current: Optional[Task] = max(candidates, key=_latest_first)
        chain: List[Task] = []
        visited = set()
        while current is not None:
            if current.id in visited:
                raise CriticalPathError(f"任务 {current.id} 的依赖关系存在环")
            visited.add(current.id)
            if current.category not in type_filter:
                chain.append(current)
            current = self._latest_dependency(current)

        if not chain:
            return None

        entries = []
        cumulative = sum(t.duration for t in chain)
        for index, task in enumerate(chain):
            entries.append(CriticalPathEntry(
                task=task,
                index=index,
                duration=task.duration,
                cumulative_duration=cumulative,
            ))
            cumulative -= task.duration

        logger.info(f"关键路径包含 {len(entries)} 个任务")
        return CriticalPath(tuple(entries))

    def _latest_dependency(self, task: Task) -> Optional[Task]:
        dependencies = []
        for dep_id in task.dependencies:
            dep = self.info.get_task(dep_id)
            if dep is None:
                logger.warning(f"任务 {task.id} 引用了不存在的依赖 {dep_id}，已忽略")
                continue
            dependencies.append(dep)
        if not dependencies:
            return None
        return max(dependencies, key=_latest_first)

    def analyze_critical_path(self, type_filter: AbstractSet[TaskCategory],
                              path: CriticalPath) -> CriticalPathStatistics:
        """统计关键路径的耗时信息，结果同时保存在 self.statistics 中"""
        key = frozenset(type_filter)
        if self.statistics is not None and self._analyzed.get(key) is path:
            return self.statistics
        self.statistics = self._collect_statistics(key, path)
        self._analyzed = {key: path}
        return self.statistics

    def _collect_statistics(self, type_filter: FrozenSet[TaskCategory],
                            path: CriticalPath) -> CriticalPathStatistics:
        time_by_category: Dict[TaskCategory, int] = defaultdict(int)
        for entry in path:
            if entry.task.category in type_filter:
                continue
            time_by_category[entry.task.category] += entry.duration

        tasks = self.info.all_tasks_by_id
        wall_time = 0
        if tasks:
            wall_time = max(t.stop_time for t in tasks) - min(t.start_time for t in tasks)

        return CriticalPathStatistics(
            entry_count=len(path),
            critical_path_time=sum(time_by_category.values()),
            wall_time=wall_time,
            time_by_category=dict(time_by_category),
        )

    def find_entry_for_task(self, path: CriticalPath, task: Task) -> Optional[CriticalPathEntry]:
        """查找 task 在关键路径上对应的节点"""
        return path.entry_for_task(task)
