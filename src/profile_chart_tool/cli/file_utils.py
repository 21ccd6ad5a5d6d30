"""
文件处理工具模块
"""

import os
from pathlib import Path

_PROFILE_SUFFIXES = ('.json', '.json.gz')


def validate_profile_path(file_path: str) -> str:
    """
    检查 profile 文件路径

    Args:
        file_path: 文件路径

    Returns:
        str: 校验通过的文件路径

    Raises:
        ValueError: 文件不存在或不是 JSON 格式
    """
    if not os.path.isfile(file_path):
        raise ValueError(f"文件不存在: {file_path}")

    if not file_path.lower().endswith(_PROFILE_SUFFIXES):
        raise ValueError(f"文件不是 JSON 格式: {file_path}")

    return file_path


def default_base_name(file_path: str) -> str:
    """根据输入文件名生成输出文件的基础名称"""
    name = Path(file_path).name
    for suffix in _PROFILE_SUFFIXES:
        if name.lower().endswith(suffix):
            name = name[:-len(suffix)]
            break
    return f"{name}_chart"
