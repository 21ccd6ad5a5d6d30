# -*- coding: utf-8 -*-
"""
构建 Profile 数据模型定义
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

# parent_id 为该值时表示顶层任务
NO_PARENT = 0


class TaskCategory(Enum):
    """任务类别（封闭枚举），每个类别对应一个描述和颜色"""
    ACTION = ("action processing", 0x666666)
    ACTION_CHECK = ("action dependency checking", 0x447799)
    ACTION_LOCK = ("action resource lock", 0x886600)
    ACTION_RELEASE = ("action resource release", 0x886699)
    ACTION_GRAPH = ("action graph dependency", 0x3399ff)
    ACTION_SUBMIT = ("action submission", 0x66aa66)
    ACTION_EXECUTE = ("action execution", 0x99cc66)
    ACTION_OUTPUTS = ("action outputs", 0xaa9933)
    ACTION_COMPLETE = ("complete action execution", 0xcccc99)
    ACTION_FS_STAT = ("stat input file", 0x9999cc)
    CREATE_PACKAGE = ("package creation", 0x6699cc)
    VFS_STAT = ("VFS stat", 0x9999ff)
    VFS_READ = ("VFS read", 0x99cccc)
    VFS_WRITE = ("VFS write", 0xff9999)
    REMOTE_EXECUTION = ("remote action execution", 0x99ccff)
    LOCAL_EXECUTION = ("local action execution", 0xcccccc)
    SCANNER = ("include scanner", 0x669999)
    LOCAL_PARSE = ("Local parse to prepare for remote execution", 0x6699cc)
    UPLOAD_TIME = ("Remote execution upload time", 0x6699cc)
    PROCESS_TIME = ("Remote execution process wall time", 0xf999cc)
    WAIT = ("thread wait", 0x66cccc)
    THREAD_NAME = ("thread name", 0x000000)
    PHASE = ("build phase marker", 0x336699)
    INFO = ("general information", 0x000066)
    EXCEPTION = ("exception", 0xffcc66)
    CRITICAL_PATH = ("critical path", 0x666699)
    CRITICAL_PATH_COMPONENT = ("critical path component", 0x666699)
    SKYFUNCTION = ("Skyfunction", 0xcc99ff)
    UNKNOWN = ("Unknown event", 0x339966)

    def __init__(self, description: str, color: int):
        self.description = description
        self.color = color

    @classmethod
    def from_name(cls, name: str) -> 'TaskCategory':
        """
        根据 trace 中的类别字符串查找枚举成员

        支持成员名（如 "ACTION_EXECUTE"，大小写不敏感）和描述文本。

        Raises:
            ValueError: 类别不存在
        """
        key = name.strip()
        member = cls.__members__.get(key.upper())
        if member is not None:
            return member
        for member in cls:
            if member.description == key:
                return member
        raise ValueError(f"未知的任务类别: {name}")


@dataclass(frozen=True)
class Task:
    """Profile 中的单个计时任务"""
    id: int
    parent_id: int
    thread_id: int
    start_time: int
    duration: int
    category: TaskCategory
    description: str
    dependencies: Tuple[int, ...] = ()

    @property
    def is_top_level(self) -> bool:
        """没有父任务的任务为顶层任务"""
        return self.parent_id == NO_PARENT

    @property
    def stop_time(self) -> int:
        return self.start_time + self.duration


@dataclass
class ProfileInfo:
    """已完成构建的 profile 快照"""
    comment: str
    tasks: List[Task] = field(default_factory=list)

    def __post_init__(self):
        self.all_tasks_by_id: List[Task] = sorted(self.tasks, key=lambda t: t.id)
        self._tasks_by_id: Dict[int, Task] = {t.id: t for t in self.all_tasks_by_id}

    def get_task(self, task_id: int) -> Optional[Task]:
        """按 id 获取任务"""
        return self._tasks_by_id.get(task_id)

    @property
    def thread_ids(self) -> List[int]:
        """按首次出现顺序返回所有线程 id"""
        return list(dict.fromkeys(t.thread_id for t in self.all_tasks_by_id))

    @property
    def top_level_tasks(self) -> List[Task]:
        return [t for t in self.all_tasks_by_id if t.is_top_level]
