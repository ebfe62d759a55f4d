"""领域模型单元测试 -- Task / TaskStats / ResourceSnapshot / 状态流转"""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError
from taskdeck.core.models import (
    PageResult,
    ResourceSnapshot,
    ResourceStatus,
    Task,
    TaskStats,
    new_task_id,
    validate_transition,
)


class TestTask:
    """Task 模型"""

    def test_defaults(self):
        """默认未完成、自动生成 id 与创建时间"""
        task = Task(text="写周报")
        assert task.completed is False
        assert len(task.id) == 26
        assert task.created_at.tzinfo is not None

    def test_ids_unique_within_same_tick(self):
        """同一毫秒内批量生成的 id 不重复"""
        ids = {new_task_id() for _ in range(1000)}
        assert len(ids) == 1000

    def test_empty_text_rejected(self):
        with pytest.raises(ValidationError):
            Task(text="")

    def test_storage_layout_uses_camel_case(self):
        """持久化布局沿用 createdAt 字段名"""
        created = datetime(2024, 5, 1, 8, 30, tzinfo=UTC)
        task = Task(id="t1", text="a", created_at=created)
        data = task.to_storage()
        assert data == {
            "id": "t1",
            "text": "a",
            "completed": False,
            "createdAt": "2024-05-01T08:30:00Z",
        }
        assert Task.model_validate(data) == task

    def test_numeric_legacy_id_coerced(self):
        """旧数据中的数值 id 转为字符串"""
        task = Task.model_validate(
            {"id": 1714550000000.123, "text": "x", "createdAt": "2024-05-01T08:30:00Z"}
        )
        assert task.id == "1714550000000.123"


class TestTaskStats:
    def test_rate_bounds(self):
        with pytest.raises(ValidationError):
            TaskStats(total=1, completed=1, completion_rate=101)


class TestResourceSnapshot:
    def test_idle_default(self):
        snapshot = ResourceSnapshot()
        assert snapshot.status == ResourceStatus.IDLE
        assert snapshot.data is None
        assert snapshot.error is None
        assert snapshot.loading is False

    def test_frozen(self):
        snapshot = ResourceSnapshot()
        with pytest.raises(ValidationError):
            snapshot.status = ResourceStatus.LOADING

    def test_page_result_page_min(self):
        with pytest.raises(ValidationError):
            PageResult(page=0, items=[])


class TestResourceTransitions:
    """生命周期状态没有终态"""

    @pytest.mark.parametrize(
        "from_status",
        [ResourceStatus.IDLE, ResourceStatus.SUCCESS, ResourceStatus.ERROR],
    )
    def test_any_settled_state_can_reload(self, from_status):
        assert validate_transition(from_status, ResourceStatus.LOADING) is True

    @pytest.mark.parametrize("to_status", [ResourceStatus.SUCCESS, ResourceStatus.ERROR])
    def test_loading_resolves(self, to_status):
        assert validate_transition(ResourceStatus.LOADING, to_status) is True

    @pytest.mark.parametrize("to_status", [ResourceStatus.SUCCESS, ResourceStatus.ERROR])
    def test_idle_cannot_resolve_without_loading(self, to_status):
        assert validate_transition(ResourceStatus.IDLE, to_status) is False
