"""
图表导出单元测试
"""

import json
import tempfile
import unittest
from pathlib import Path

import pandas as pd

from profile_chart_tool.chart import create_chart, export_chart
from profile_chart_tool.models import ProfileInfo, Task, TaskCategory


class TestExportChart(unittest.TestCase):
    """测试 JSON / Excel / PNG 导出"""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.output_dir = Path(self.temp_dir.name)
        tasks = [
            Task(id=1, parent_id=0, thread_id=1, start_time=0, duration=10,
                 category=TaskCategory.ACTION_EXECUTE, description="compile"),
            Task(id=2, parent_id=0, thread_id=2, start_time=10, duration=5,
                 category=TaskCategory.ACTION_EXECUTE, description="link", dependencies=(1,)),
            Task(id=3, parent_id=0, thread_id=1, start_time=0, duration=14,
                 category=TaskCategory.PHASE, description="execution"),
        ]
        self.chart = create_chart(ProfileInfo(comment="export test", tasks=tasks), ["stat line"])

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_export_json(self):
        files = export_chart(self.chart, self.output_dir, "chart", ["json"])
        self.assertEqual(files, [self.output_dir / "chart.json"])
        with open(files[0], encoding='utf-8') as f:
            data = json.load(f)
        self.assertEqual(data, self.chart.to_dict())
        self.assertEqual(len(data['bars']), 3)
        self.assertEqual(data['lines'], [{'from_thread': 2, 'to_thread': 1, 'time': 10}])

    def test_export_excel(self):
        files = export_chart(self.chart, self.output_dir, "chart", ["xlsx"])
        sheets = pd.read_excel(files[0], sheet_name=None)
        self.assertEqual(set(sheets), {'Legend', 'Bars', 'Lines', 'Columns', 'Summary'})
        self.assertEqual(len(sheets['Bars']), 3)
        self.assertEqual(len(sheets['Legend']), len(TaskCategory))
        self.assertEqual(len(sheets['Columns']), 1)

    def test_render_png(self):
        files = export_chart(self.chart, self.output_dir, "chart", ["png"])
        self.assertTrue(files[0].exists())
        self.assertGreater(files[0].stat().st_size, 0)

    def test_unknown_format(self):
        with self.assertRaises(ValueError):
            export_chart(self.chart, self.output_dir, "chart", ["svg"])


if __name__ == '__main__':
    unittest.main()
