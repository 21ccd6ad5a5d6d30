"""
图表数据模型与 bar 类型注册单元测试
"""

import unittest

from profile_chart_tool.chart import (
    BAR_TYPE_TABLE, Chart, ChartBarType, RegistryError, UnknownBarTypeError,
    register_bar_types, validate_registry,
)
from profile_chart_tool.chart.model import color_to_hex
from profile_chart_tool.models import TaskCategory


class TestChart(unittest.TestCase):
    """测试 Chart"""

    def setUp(self):
        self.chart = Chart("comment", ["stats"])
        self.exec_type = self.chart.create_type("exec", 0x00ff00)

    def test_lookup_type(self):
        self.assertIs(self.chart.lookup_type("exec"), self.exec_type)

    def test_lookup_unknown_type(self):
        with self.assertRaises(UnknownBarTypeError):
            self.chart.lookup_type("missing")
        # 同时也是 KeyError
        with self.assertRaises(KeyError):
            self.chart.lookup_type("missing")

    def test_append_order_preserved(self):
        self.chart.add_bar(2, 5, 9, self.exec_type, False, "second thread")
        self.chart.add_bar(1, 0, 3, self.exec_type, True, "first thread")
        self.chart.add_bar(2, 9, 9, self.exec_type, False, "point")
        self.chart.add_vertical_line(1, 2, 5)

        self.assertEqual([b.label for b in self.chart.bars], ["second thread", "first thread", "point"])
        self.assertEqual(list(self.chart.rows), [2, 1])
        self.assertEqual(len(self.chart.rows[2]), 2)
        self.assertEqual(self.chart.bars[2].width, 0)
        self.assertEqual(self.chart.max_stop, 9)
        self.assertEqual(len(self.chart.lines), 1)

    def test_empty_chart(self):
        chart = Chart("")
        self.assertIsNone(chart.max_stop)
        self.assertEqual(chart.rows, {})

    def test_equality_includes_contents(self):
        def build():
            chart = Chart("c")
            chart.create_type("exec", 0x00ff00)
            return chart

        first, second = build(), build()
        self.assertEqual(first, second)

        first.add_bar(1, 0, 3, first.lookup_type("exec"), False, "a")
        self.assertNotEqual(first, second)
        self.assertIn("bars", repr(first))

        second.add_bar(1, 0, 3, second.lookup_type("exec"), False, "a")
        self.assertEqual(first, second)

        second.add_vertical_line(1, 2, 0)
        self.assertNotEqual(first, second)

        third = build()
        third.create_type("wait", 0x0000ff)
        self.assertNotEqual(third, build())

    def test_to_dict(self):
        self.chart.add_bar(1, 0, 3, self.exec_type, True, "exec: a")
        self.chart.add_vertical_line(1, 2, 0)
        self.chart.add_column(0, 10, "phase", self.exec_type)
        data = self.chart.to_dict()

        self.assertEqual(data['comment'], "comment")
        self.assertEqual(data['statistics'], ["stats"])
        self.assertEqual(data['types'], [{'label': 'exec', 'color': '#00ff00'}])
        self.assertEqual(data['bars'], [{
            'thread': 1, 'start': 0, 'stop': 3, 'type': 'exec',
            'on_critical_path': True, 'label': 'exec: a',
        }])
        self.assertEqual(data['lines'], [{'from_thread': 1, 'to_thread': 2, 'time': 0}])
        self.assertEqual(data['columns'], [{'start': 0, 'width': 10, 'label': 'phase', 'type': 'exec'}])

    def test_color_to_hex(self):
        self.assertEqual(color_to_hex(0), "#000000")
        self.assertEqual(color_to_hex(0xABCDEF), "#abcdef")
        self.assertEqual(ChartBarType("x", 0x336699).hex_color, "#336699")


class TestRegistry(unittest.TestCase):
    """测试 bar 类型注册"""

    def test_table_covers_all_categories(self):
        self.assertEqual(set(BAR_TYPE_TABLE), set(TaskCategory))
        validate_registry()

    def test_register_bar_types(self):
        chart = Chart("")
        register_bar_types(chart)
        self.assertEqual(len(chart.types), len(TaskCategory))
        for category in TaskCategory:
            bar_type = chart.lookup_type(category.description)
            self.assertEqual(bar_type.color, category.color)

    def test_incomplete_table_rejected(self):
        table = dict(BAR_TYPE_TABLE)
        del table[TaskCategory.WAIT]
        with self.assertRaises(RegistryError):
            validate_registry(table)

    def test_duplicate_label_rejected(self):
        table = dict(BAR_TYPE_TABLE)
        table[TaskCategory.WAIT] = BAR_TYPE_TABLE[TaskCategory.ACTION]
        with self.assertRaises(RegistryError):
            validate_registry(table)


if __name__ == '__main__':
    unittest.main()
