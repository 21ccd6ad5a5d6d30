# -*- coding: utf-8 -*-
"""
CLI验证器模块
"""

from typing import FrozenSet, List

from ..models import TaskCategory
from ..chart.exporter import SUPPORTED_FORMATS


def parse_output_formats(format_spec: str) -> List[str]:
    """
    解析输出格式

    Args:
        format_spec: 逗号分隔的输出格式字符串

    Returns:
        List[str]: 去重后的格式列表，保持输入顺序

    Raises:
        ValueError: 格式为空或不支持
    """
    if not format_spec or not format_spec.strip():
        raise ValueError("输出格式不能为空")

    formats = []
    for fmt in format_spec.split(','):
        fmt = fmt.strip().lower()
        if not fmt:
            continue
        if fmt not in SUPPORTED_FORMATS:
            raise ValueError(f"不支持的输出格式: {fmt}。支持的格式: {', '.join(SUPPORTED_FORMATS)}")
        if fmt not in formats:
            formats.append(fmt)

    if not formats:
        raise ValueError("输出格式不能为空")
    return formats


def parse_category_filter(filter_spec: str) -> FrozenSet[TaskCategory]:
    """
    解析需要从关键路径中忽略的任务类别

    Args:
        filter_spec: 逗号分隔的类别名称（枚举名或描述）

    Returns:
        FrozenSet[TaskCategory]: 类别集合，空字符串返回空集合

    Raises:
        ValueError: 类别不存在
    """
    if not filter_spec or not filter_spec.strip():
        return frozenset()

    categories = set()
    for name in filter_spec.split(','):
        if not name.strip():
            continue
        categories.add(TaskCategory.from_name(name))
    return frozenset(categories)
