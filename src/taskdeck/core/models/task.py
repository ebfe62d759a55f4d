"""Task Domain Model

任务集合整体持久化在 KeyedStore 的单个 key 下，
JSON 字段名沿用持久化布局中的 camelCase（createdAt）。
"""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from ulid import ULID


def new_task_id() -> str:
    """生成任务 ID

    ULID = 48 位毫秒时间戳 + 80 位随机数，同一毫秒内创建也不会冲突。
    """
    return str(ULID())


class Task(BaseModel):
    """Task 数据模型

    text 在创建/编辑时已 trim 且非空；created_at 创建后不可变。
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_task_id, description="唯一标识，ULID 格式")
    text: str = Field(min_length=1, description="任务文本（已 trim）")
    completed: bool = Field(default=False, description="是否已完成")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        alias="createdAt",
        description="创建时间",
    )

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        # 旧数据中的 id 可能是数值（时间戳 + 随机小数）
        if isinstance(value, int | float):
            return str(value)
        return value

    def to_storage(self) -> dict:
        """序列化为持久化布局（JSON 兼容 dict）"""
        return self.model_dump(mode="json", by_alias=True)


class TaskStats(BaseModel):
    """任务统计"""

    total: int = Field(default=0, ge=0, description="任务总数")
    active: int = Field(default=0, ge=0, description="未完成数")
    completed: int = Field(default=0, ge=0, description="已完成数")
    completion_rate: int = Field(default=0, ge=0, le=100, description="完成率（百分比整数）")
