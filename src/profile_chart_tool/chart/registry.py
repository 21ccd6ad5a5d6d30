"""
任务类别到 bar 类型的静态映射
"""

from typing import Dict, Tuple

from ..models import TaskCategory
from .model import Chart


class RegistryError(Exception):
    """静态映射表与任务类别枚举不一致"""


BAR_TYPE_TABLE: Dict[TaskCategory, Tuple[str, int]] = {
    category: (category.description, category.color) for category in TaskCategory
}


def validate_registry(table: Dict[TaskCategory, Tuple[str, int]] = BAR_TYPE_TABLE) -> None:
    """
    检查映射表覆盖所有任务类别且标签不重复

    Raises:
        RegistryError: 缺少类别或标签重复
    """
    missing = [c.name for c in TaskCategory if c not in table]
    if missing:
        raise RegistryError(f"bar 类型映射缺少类别: {', '.join(missing)}")

    labels = [label for label, _ in table.values()]
    duplicates = sorted({label for label in labels if labels.count(label) > 1})
    if duplicates:
        raise RegistryError(f"bar 类型标签重复: {', '.join(duplicates)}")


def register_bar_types(chart: Chart) -> None:
    """按枚举声明顺序为每个任务类别在图表中注册一个 bar 类型"""
    for category in TaskCategory:
        label, color = BAR_TYPE_TABLE[category]
        chart.create_type(label, color)


validate_registry()
