"""
关键路径分析单元测试
"""

import unittest

from profile_chart_tool.critical_path import CriticalPathAnalyzer, CriticalPathError
from profile_chart_tool.models import ProfileInfo, Task, TaskCategory


def make_task(task_id, thread_id, start, dur, deps=(), parent_id=0,
              category=TaskCategory.ACTION_EXECUTE):
    return Task(id=task_id, parent_id=parent_id, thread_id=thread_id, start_time=start,
                duration=dur, category=category, description=f"task{task_id}",
                dependencies=tuple(deps))


class TestCriticalPathAnalyzer(unittest.TestCase):
    """测试关键路径计算"""

    def setUp(self):
        # 1 -> 2 -> 4，3 是较短的分支
        self.tasks = [
            make_task(1, thread_id=1, start=0, dur=10),
            make_task(2, thread_id=2, start=10, dur=20, deps=[1]),
            make_task(3, thread_id=1, start=10, dur=5, deps=[1]),
            make_task(4, thread_id=1, start=30, dur=10, deps=[2, 3]),
        ]
        self.info = ProfileInfo(comment="", tasks=self.tasks)
        self.analyzer = CriticalPathAnalyzer(self.info)

    def test_chain_runs_backward_in_time(self):
        path = self.analyzer.compute_critical_path()
        self.assertEqual([e.task.id for e in path], [4, 2, 1])
        self.assertEqual([e.index for e in path], [0, 1, 2])
        self.assertEqual(path.head.task.id, 4)

    def test_cumulative_duration(self):
        path = self.analyzer.compute_critical_path()
        self.assertEqual(path.head.cumulative_duration, 40)
        self.assertEqual([e.cumulative_duration for e in path], [40, 30, 10])

    def test_next_entry(self):
        path = self.analyzer.compute_critical_path()
        head = path.head
        self.assertEqual(path.next_entry(head).task.id, 2)
        self.assertIsNone(path.next_entry(path.entries[-1]))

    def test_find_entry_for_task(self):
        path = self.analyzer.compute_critical_path()
        self.assertEqual(self.analyzer.find_entry_for_task(path, self.tasks[1]).index, 1)
        self.assertIsNone(self.analyzer.find_entry_for_task(path, self.tasks[2]))

    def test_type_filter_skips_category(self):
        tasks = [
            make_task(1, thread_id=1, start=0, dur=10),
            make_task(2, thread_id=1, start=10, dur=5, deps=[1], category=TaskCategory.WAIT),
            make_task(3, thread_id=2, start=15, dur=10, deps=[2]),
        ]
        analyzer = CriticalPathAnalyzer(ProfileInfo(comment="", tasks=tasks))
        path = analyzer.compute_critical_path(frozenset({TaskCategory.WAIT}))
        self.assertEqual([e.task.id for e in path], [3, 1])

    def test_empty_profile(self):
        analyzer = CriticalPathAnalyzer(ProfileInfo(comment="", tasks=[]))
        self.assertIsNone(analyzer.compute_critical_path())

    def test_cycle_is_rejected(self):
        tasks = [
            make_task(1, thread_id=1, start=0, dur=10, deps=[2]),
            make_task(2, thread_id=1, start=10, dur=10, deps=[1]),
        ]
        analyzer = CriticalPathAnalyzer(ProfileInfo(comment="", tasks=tasks))
        with self.assertRaises(CriticalPathError):
            analyzer.compute_critical_path()

    def test_dangling_dependency_is_ignored(self):
        tasks = [make_task(1, thread_id=1, start=0, dur=10, deps=[99])]
        analyzer = CriticalPathAnalyzer(ProfileInfo(comment="", tasks=tasks))
        path = analyzer.compute_critical_path()
        self.assertEqual([e.task.id for e in path], [1])

    def test_analyze_critical_path(self):
        path = self.analyzer.compute_critical_path()
        stats = self.analyzer.analyze_critical_path(frozenset(), path)
        self.assertIs(self.analyzer.statistics, stats)
        self.assertEqual(stats.entry_count, 3)
        self.assertEqual(stats.critical_path_time, 40)
        self.assertEqual(stats.wall_time, 40)
        self.assertAlmostEqual(stats.critical_path_ratio, 1.0)
        self.assertEqual(stats.time_by_category, {TaskCategory.ACTION_EXECUTE: 40})

    def test_results_are_cached_per_filter(self):
        path = self.analyzer.compute_critical_path()
        self.assertIs(self.analyzer.compute_critical_path(frozenset()), path)
        stats = self.analyzer.analyze_critical_path(frozenset(), path)
        self.assertIs(self.analyzer.analyze_critical_path(set(), path), stats)

        filtered = self.analyzer.compute_critical_path({TaskCategory.WAIT, TaskCategory.ACTION_EXECUTE})
        self.assertIsNone(filtered)
        self.assertIs(self.analyzer.compute_critical_path(), path)


class TestNextTopLevelEntry(unittest.TestCase):
    """测试向后查找下一个顶层节点"""

    def test_skips_nested_entries(self):
        tasks = [
            make_task(1, thread_id=1, start=0, dur=10),
            make_task(2, thread_id=2, start=10, dur=2, deps=[1], parent_id=5),
            make_task(3, thread_id=3, start=12, dur=8, deps=[2]),
            make_task(5, thread_id=2, start=9, dur=4),
        ]
        analyzer = CriticalPathAnalyzer(ProfileInfo(comment="", tasks=tasks))
        path = analyzer.compute_critical_path()
        self.assertEqual([e.task.id for e in path], [3, 2, 1])
        self.assertEqual(path.next_top_level_entry(path.head).task.id, 1)
        self.assertIsNone(path.next_top_level_entry(path.entries[-1]))


if __name__ == '__main__':
    unittest.main()
