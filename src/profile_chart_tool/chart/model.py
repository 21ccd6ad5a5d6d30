"""
甘特图数据模型

Chart 是只追加的数据容器，由 chart creator 填充后交给导出/渲染模块。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class ChartError(Exception):
    """图表构建相关错误的基类"""


class UnknownBarTypeError(ChartError, KeyError):
    """查找未注册的 bar 类型（内部错误，正常流程中不应出现）"""


def color_to_hex(color: int) -> str:
    """将 24 位 RGB 整数转换为 #rrggbb 字符串"""
    return f"#{color & 0xffffff:06x}"


@dataclass(frozen=True)
class ChartBarType:
    """bar 类型：图例中的一项，标签即其身份"""
    label: str
    color: int

    @property
    def hex_color(self) -> str:
        return color_to_hex(self.color)


@dataclass(frozen=True)
class ChartBar:
    """一个任务对应的一条 bar"""
    thread_id: int
    start: int
    stop: int
    type: ChartBarType
    on_critical_path: bool
    label: str

    @property
    def width(self) -> int:
        return self.stop - self.start


@dataclass(frozen=True)
class ChartLine:
    """关键路径切换线程时绘制的连接线"""
    start_thread: int
    stop_thread: int
    time: int


@dataclass(frozen=True)
class ChartColumn:
    """构建阶段标记列"""
    start: int
    width: int
    label: str
    type: ChartBarType


@dataclass
class Chart:
    """甘特图模型"""
    comment: str
    statistics: List[str] = field(default_factory=list)
    _types: Dict[str, ChartBarType] = field(default_factory=dict, init=False, repr=False)
    bars: List[ChartBar] = field(default_factory=list, init=False)
    lines: List[ChartLine] = field(default_factory=list, init=False)
    columns: List[ChartColumn] = field(default_factory=list, init=False)

    @property
    def types(self) -> List[ChartBarType]:
        """按注册顺序返回所有 bar 类型"""
        return list(self._types.values())

    def add_type(self, bar_type: ChartBarType) -> ChartBarType:
        self._types[bar_type.label] = bar_type
        return bar_type

    def create_type(self, label: str, color: int) -> ChartBarType:
        """创建并注册一个 bar 类型"""
        return self.add_type(ChartBarType(label=label, color=color))

    def lookup_type(self, label: str) -> ChartBarType:
        """
        按标签查找 bar 类型

        Raises:
            UnknownBarTypeError: 标签未注册
        """
        try:
            return self._types[label]
        except KeyError:
            raise UnknownBarTypeError(f"未注册的 bar 类型: {label}") from None

    def add_bar(self, thread_id: int, start: int, stop: int, bar_type: ChartBarType,
                on_critical_path: bool, label: str) -> ChartBar:
        bar = ChartBar(
            thread_id=thread_id,
            start=start,
            stop=stop,
            type=bar_type,
            on_critical_path=on_critical_path,
            label=label,
        )
        self.bars.append(bar)
        return bar

    def add_vertical_line(self, start_thread: int, stop_thread: int, time: int) -> ChartLine:
        line = ChartLine(start_thread=start_thread, stop_thread=stop_thread, time=time)
        self.lines.append(line)
        return line

    def add_column(self, start: int, width: int, label: str, bar_type: ChartBarType) -> ChartColumn:
        column = ChartColumn(start=start, width=width, label=label, type=bar_type)
        self.columns.append(column)
        return column

    @property
    def rows(self) -> Dict[int, List[ChartBar]]:
        """按线程分组的 bar，线程顺序为首次出现顺序"""
        rows: Dict[int, List[ChartBar]] = {}
        for bar in self.bars:
            rows.setdefault(bar.thread_id, []).append(bar)
        return rows

    @property
    def max_stop(self) -> Optional[int]:
        if not self.bars:
            return None
        return max(bar.stop for bar in self.bars)

    def to_dict(self) -> Dict[str, Any]:
        """转换为交给渲染器的字典结构"""
        return {
            'comment': self.comment,
            'statistics': list(self.statistics),
            'types': [
                {'label': t.label, 'color': t.hex_color}
                for t in self.types
            ],
            'bars': [
                {
                    'thread': b.thread_id,
                    'start': b.start,
                    'stop': b.stop,
                    'type': b.type.label,
                    'on_critical_path': b.on_critical_path,
                    'label': b.label,
                }
                for b in self.bars
            ],
            'lines': [
                {'from_thread': l.start_thread, 'to_thread': l.stop_thread, 'time': l.time}
                for l in self.lines
            ],
            'columns': [
                {'start': c.start, 'width': c.width, 'label': c.label, 'type': c.type.label}
                for c in self.columns
            ],
        }
