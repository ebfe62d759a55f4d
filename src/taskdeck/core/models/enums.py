"""枚举定义

包含 TaskFilter 任务筛选视图、ResourceStatus 异步资源生命周期状态，
以及 VALID_TRANSITIONS 合法流转映射。
"""

from enum import StrEnum


class TaskFilter(StrEnum):
    """任务筛选视图"""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


class ResourceStatus(StrEnum):
    """异步资源生命周期状态

    没有终态：任何状态都可以被重新触发回 LOADING。
    """

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


# 合法状态流转
VALID_TRANSITIONS: dict[ResourceStatus, set[ResourceStatus]] = {
    ResourceStatus.IDLE: {ResourceStatus.LOADING},
    ResourceStatus.LOADING: {
        # 新触发覆盖在途触发
        ResourceStatus.LOADING,
        ResourceStatus.SUCCESS,
        ResourceStatus.ERROR,
        # invalidate() 时回退到上一个已结算状态
        ResourceStatus.IDLE,
    },
    ResourceStatus.SUCCESS: {ResourceStatus.LOADING, ResourceStatus.IDLE},
    ResourceStatus.ERROR: {ResourceStatus.LOADING, ResourceStatus.IDLE},
}


def validate_transition(from_status: ResourceStatus, to_status: ResourceStatus) -> bool:
    """验证状态流转是否合法

    Args:
        from_status: 当前状态
        to_status: 目标状态

    Returns:
        True 如果流转合法，否则 False
    """
    allowed = VALID_TRANSITIONS.get(from_status, set())
    return to_status in allowed
