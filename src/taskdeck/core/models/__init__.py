"""taskdeck Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import (
    VALID_TRANSITIONS,
    ResourceStatus,
    TaskFilter,
    validate_transition,
)
from .resource import PageResult, ResourceSnapshot
from .task import Task, TaskStats, new_task_id

__all__ = [
    # 枚举
    "TaskFilter",
    "ResourceStatus",
    # 状态机
    "VALID_TRANSITIONS",
    "validate_transition",
    # Task
    "Task",
    "TaskStats",
    "new_task_id",
    # 异步资源
    "ResourceSnapshot",
    "PageResult",
]
