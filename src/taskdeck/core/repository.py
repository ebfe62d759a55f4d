"""TaskRepository -- 任务 CRUD + 派生视图

任务集合整体存放在 KeyedStore 的一个 key 下（无分页、无服务端）。
每个变更操作先基于最新内存状态同步算出新集合并赋值，再整体持久化一次；
永远不持久化中间态集合。派生视图是纯函数，按需计算，不缓存。
"""

import math
from collections.abc import Callable

import structlog
from pydantic import ValidationError

from ..config import TASKS_STORAGE_KEY
from .models.enums import TaskFilter
from .models.task import Task, TaskStats
from .store.keyed_store import KeyedStore

log = structlog.get_logger()


def _round_half_up(value: float) -> int:
    """四舍五入（0.5 进位），Python 内置 round 为银行家舍入"""
    return int(math.floor(value + 0.5))


def compute_stats(tasks: list[Task] | tuple[Task, ...]) -> TaskStats:
    """计算任务统计，total 为 0 时完成率为 0"""
    total = len(tasks)
    completed = sum(1 for task in tasks if task.completed)
    return TaskStats(
        total=total,
        active=total - completed,
        completed=completed,
        completion_rate=_round_half_up(100 * completed / total) if total > 0 else 0,
    )


def filter_tasks(
    tasks: list[Task] | tuple[Task, ...],
    task_filter: TaskFilter | str,
) -> list[Task]:
    """按筛选视图投影任务列表，未知筛选值等同 all"""
    try:
        task_filter = TaskFilter(task_filter)
    except ValueError:
        task_filter = TaskFilter.ALL

    if task_filter == TaskFilter.ACTIVE:
        return [task for task in tasks if not task.completed]
    if task_filter == TaskFilter.COMPLETED:
        return [task for task in tasks if task.completed]
    return list(tasks)


class TaskRepository:
    """任务仓储

    独占任务集合及其持久化表示；其他组件不得直接写同一个 key。
    通过 `await TaskRepository.open(store)` 创建。
    """

    def __init__(
        self,
        store: KeyedStore,
        tasks: list[Task] | None = None,
        key: str = TASKS_STORAGE_KEY,
    ) -> None:
        self._store = store
        self._key = key
        self._tasks: list[Task] = list(tasks or [])

    @classmethod
    async def open(
        cls,
        store: KeyedStore,
        key: str = TASKS_STORAGE_KEY,
    ) -> "TaskRepository":
        """从 KeyedStore 加载任务集合

        存储内容不是任务数组或任一条目校验失败时，回退为空集合并记录日志。
        """
        raw = await store.read(key, [])
        tasks: list[Task] = []
        if not isinstance(raw, list):
            log.warning("task_collection_malformed", key=key, type=type(raw).__name__)
        else:
            try:
                tasks = [Task.model_validate(item) for item in raw]
            except ValidationError as e:
                log.warning(
                    "task_collection_invalid",
                    key=key,
                    error_count=e.error_count(),
                )
                tasks = []
        log.debug("task_collection_loaded", key=key, task_count=len(tasks))
        return cls(store, tasks, key=key)

    # ---- 只读投影 ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def get_task(self, task_id: str) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def filtered_tasks(self, task_filter: TaskFilter | str = TaskFilter.ALL) -> list[Task]:
        return filter_tasks(self._tasks, task_filter)

    def stats(self) -> TaskStats:
        return compute_stats(self._tasks)

    # ---- 变更操作 ----

    async def add_task(self, text: str) -> Task | None:
        """追加新任务

        Returns:
            新建的 Task；text trim 后为空时返回 None 且不做任何变更
        """
        text = text.strip()
        if not text:
            log.debug("task_add_ignored_blank_text")
            return None

        task = Task(text=text)
        await self._commit(lambda tasks: [*tasks, task])
        log.info("task_added", task_id=task.id)
        return task

    async def toggle_task(self, task_id: str) -> None:
        """切换完成状态；id 不存在时 no-op"""
        if self.get_task(task_id) is None:
            log.debug("task_toggle_ignored_unknown_id", task_id=task_id)
            return
        await self._commit(
            lambda tasks: [
                task.model_copy(update={"completed": not task.completed})
                if task.id == task_id
                else task
                for task in tasks
            ]
        )

    async def update_task(self, task_id: str, new_text: str) -> None:
        """修改任务文本；新文本 trim 后为空或 id 不存在时 no-op"""
        new_text = new_text.strip()
        if not new_text:
            log.debug("task_update_ignored_blank_text", task_id=task_id)
            return
        if self.get_task(task_id) is None:
            log.debug("task_update_ignored_unknown_id", task_id=task_id)
            return
        await self._commit(
            lambda tasks: [
                task.model_copy(update={"text": new_text}) if task.id == task_id else task
                for task in tasks
            ]
        )

    async def delete_task(self, task_id: str) -> None:
        """删除任务；id 不存在时 no-op"""
        if self.get_task(task_id) is None:
            log.debug("task_delete_ignored_unknown_id", task_id=task_id)
            return
        await self._commit(lambda tasks: [task for task in tasks if task.id != task_id])
        log.info("task_deleted", task_id=task_id)

    async def clear_all_tasks(self) -> None:
        await self._commit(lambda tasks: [])

    async def clear_completed_tasks(self) -> None:
        await self._commit(lambda tasks: [task for task in tasks if not task.completed])

    async def _commit(self, transform: Callable[[list[Task]], list[Task]]) -> None:
        """基于最新内存状态计算新集合，赋值后整体持久化

        赋值发生在第一个 await 之前，连续排队的变更不会丢失更新。
        """
        self._tasks = transform(self._tasks)
        await self._store.write(self._key, [task.to_storage() for task in self._tasks])
