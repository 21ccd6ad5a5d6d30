"""
构建 Profile JSON 解析器
"""

import json
import gzip
from pathlib import Path
from typing import Dict, Any, Optional, Union
import logging

from .models import NO_PARENT, ProfileInfo, Task, TaskCategory

logger = logging.getLogger(__name__)


class TraceFormatError(ValueError):
    """任务记录格式不合法"""


_REQUIRED_FIELDS = ('id', 'thread_id', 'start_time', 'duration', 'category')


def _parse_task(task_data: Dict[str, Any]) -> Task:
    """
    解析单个任务

    Args:
        task_data: 任务数据字典

    Returns:
        Task: 解析后的任务对象

    Raises:
        TraceFormatError: 缺少必需字段、时长为负或类别未知
    """
    if not isinstance(task_data, dict):
        raise TraceFormatError(f"任务记录必须是 JSON 对象: {task_data!r}")

    missing = [name for name in _REQUIRED_FIELDS if name not in task_data]
    if missing:
        raise TraceFormatError(f"任务缺少字段: {', '.join(missing)}")

    try:
        category = TaskCategory.from_name(str(task_data['category']))
    except ValueError as e:
        raise TraceFormatError(str(e)) from e

    try:
        task_id = int(task_data['id'])
        duration = int(task_data['duration'])
        parent_id = task_data.get('parent_id')
        parent_id = NO_PARENT if parent_id is None else int(parent_id)
        thread_id = int(task_data['thread_id'])
        start_time = int(task_data['start_time'])
        dependencies = tuple(int(d) for d in task_data.get('dependencies') or [])
    except (TypeError, ValueError) as e:
        raise TraceFormatError(f"任务字段类型不合法: {e}") from e

    if duration < 0:
        raise TraceFormatError(f"任务 {task_id} 的时长为负: {duration}")

    return Task(
        id=task_id,
        parent_id=parent_id,
        thread_id=thread_id,
        start_time=start_time,
        duration=duration,
        category=category,
        description=str(task_data.get('description', '')),
        dependencies=dependencies,
    )


def load_profile(data: Dict[str, Any]) -> ProfileInfo:
    """
    从已加载的 JSON 对象构建 ProfileInfo

    Raises:
        TraceFormatError: 任务记录不合法或 id 重复
    """
    if not isinstance(data, dict):
        raise TraceFormatError("profile 顶层必须是 JSON 对象")

    raw_tasks = data.get('tasks')
    if not isinstance(raw_tasks, list):
        raise TraceFormatError("profile 缺少 tasks 列表")

    tasks = []
    seen_ids = set()
    for raw_task in raw_tasks:
        task = _parse_task(raw_task)
        if task.id in seen_ids:
            raise TraceFormatError(f"任务 id 重复: {task.id}")
        seen_ids.add(task.id)
        tasks.append(task)

    return ProfileInfo(comment=str(data.get('comment', '')), tasks=tasks)


def parse_profile(file_path: Union[str, Path]) -> Optional[ProfileInfo]:
    """
    解析构建 profile JSON 文件（支持 .gz 压缩）

    Args:
        file_path: JSON 文件路径

    Returns:
        ProfileInfo: 解析结果，失败时返回 None
    """
    file_path = Path(file_path)
    if not file_path.exists():
        logger.error(f"文件不存在: {file_path}")
        return None

    try:
        print(f"正在解析文件: {file_path}")

        open_func = gzip.open if file_path.suffix == '.gz' else open
        with open_func(file_path, 'rt', encoding='utf-8') as f:
            data = json.load(f)

        info = load_profile(data)
        print(f"读取到 {len(info.all_tasks_by_id)} 个任务, {len(info.thread_ids)} 个线程")
        return info

    except Exception as e:
        logger.error(f"解析文件出错: {e}", exc_info=True)
        return None
