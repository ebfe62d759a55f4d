"""异步资源状态投影 -- ResourceSnapshot + PageResult

ResourceSnapshot 是 AsyncResource 当前状态的只读投影，
展示层只观察它，不需要为异步调用包异常处理。
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .enums import ResourceStatus


class ResourceSnapshot(BaseModel):
    """AsyncResource 只读状态投影

    SUCCESS 时 data 有意义；ERROR 时 error 有意义。
    LOADING 期间保留上一次的 data（可能已过期），error 清空。
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    status: ResourceStatus = Field(default=ResourceStatus.IDLE, description="生命周期状态")
    data: Any = Field(default=None, description="最近一次成功结果")
    error: str | None = Field(default=None, description="人类可读的错误描述")

    @property
    def loading(self) -> bool:
        return self.status == ResourceStatus.LOADING


class PageResult(BaseModel):
    """单页获取结果"""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    page: int = Field(ge=1, description="页码，从 1 开始")
    items: list[Any] = Field(default_factory=list, description="本页条目")
    replace: bool = Field(default=False, description="True 表示替换累计数据而非追加")
