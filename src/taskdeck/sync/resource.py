"""AsyncResource -- 单个异步获取的生命周期封装

状态：IDLE / LOADING / SUCCESS(data) / ERROR(message)，没有终态。

并发语义（last-trigger-wins）：每次 trigger 分配单调递增的序号，
结果返回时若序号已不是最新，直接丢弃，不修改任何状态，也不暴露错误。
invalidate() / dispose() 通过推进序号让在途结果失效。
操作失败只会进入 ERROR 状态，永远不向调用方抛出。
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import structlog

from ..core.models.enums import ResourceStatus, validate_transition
from ..core.models.resource import ResourceSnapshot

log = structlog.get_logger()

DEFAULT_ERROR_MESSAGE = "An error occurred"


def describe_error(error: BaseException) -> str:
    """把异常转为人类可读的错误描述"""
    message = str(error).strip()
    if message:
        return message
    return f"{DEFAULT_ERROR_MESSAGE} ({type(error).__name__})"


class AsyncResource:
    """异步获取生命周期

    Args:
        operation: 异步可调用对象，trigger 的参数原样透传
        on_success: 仅在权威（未过期）结果落地后同步调用
        name: 日志中的资源名称
    """

    def __init__(
        self,
        operation: Callable[..., Awaitable[Any]],
        *,
        on_success: Callable[[Any], None] | None = None,
        name: str | None = None,
    ) -> None:
        self._operation = operation
        self._on_success = on_success
        self._name = name or getattr(operation, "__name__", "resource")
        self._snapshot = ResourceSnapshot()
        # 进入 LOADING 前的已结算状态，invalidate 时回退
        self._settled = self._snapshot
        self._seq = 0
        self._last_args: tuple = ()
        self._last_kwargs: dict[str, Any] = {}
        self._tasks: set[asyncio.Task] = set()
        self._disposed = False

    # ---- 只读投影 ----

    @property
    def snapshot(self) -> ResourceSnapshot:
        return self._snapshot

    @property
    def status(self) -> ResourceStatus:
        return self._snapshot.status

    @property
    def data(self) -> Any:
        return self._snapshot.data

    @property
    def loading(self) -> bool:
        return self._snapshot.loading

    @property
    def error(self) -> str | None:
        return self._snapshot.error

    @property
    def seq(self) -> int:
        """最近一次发出的触发序号"""
        return self._seq

    @property
    def disposed(self) -> bool:
        return self._disposed

    # ---- 触发 ----

    async def trigger(self, *args: Any, **kwargs: Any) -> ResourceSnapshot:
        """以给定参数调用操作

        Returns:
            结果落地（或被丢弃）后的当前快照
        """
        if self._disposed:
            log.debug("resource_trigger_after_dispose", resource=self._name)
            return self._snapshot

        self._seq += 1
        seq = self._seq
        self._last_args = args
        self._last_kwargs = kwargs

        if self._snapshot.status != ResourceStatus.LOADING:
            self._settled = self._snapshot
        self._transition(
            ResourceSnapshot(status=ResourceStatus.LOADING, data=self._snapshot.data)
        )

        try:
            result = await self._operation(*args, **kwargs)
        except asyncio.CancelledError:
            if seq == self._seq:
                self._restore_settled()
            raise
        except Exception as e:
            if seq != self._seq:
                log.debug("resource_stale_error_dropped", resource=self._name, seq=seq)
                return self._snapshot
            message = describe_error(e)
            log.warning(
                "resource_fetch_failed",
                resource=self._name,
                seq=seq,
                error=message,
                error_type=type(e).__name__,
            )
            self._transition(
                ResourceSnapshot(
                    status=ResourceStatus.ERROR,
                    data=self._snapshot.data,
                    error=message,
                )
            )
            return self._snapshot

        if seq != self._seq:
            log.debug("resource_stale_result_dropped", resource=self._name, seq=seq)
            return self._snapshot

        self._transition(ResourceSnapshot(status=ResourceStatus.SUCCESS, data=result))
        if self._on_success is not None:
            self._on_success(result)
        return self._snapshot

    async def refetch(self) -> ResourceSnapshot:
        """以上一次的参数重新触发"""
        return await self.trigger(*self._last_args, **self._last_kwargs)

    def start(self, *args: Any, **kwargs: Any) -> asyncio.Task:
        """后台触发（挂载即获取），任务归本资源所有，dispose 时取消"""
        task = asyncio.get_running_loop().create_task(self.trigger(*args, **kwargs))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    # ---- 取消 ----

    def invalidate(self) -> None:
        """让所有在途触发的结果失效

        处于 LOADING 时回退到进入 LOADING 之前的已结算状态。
        """
        self._seq += 1
        if self._snapshot.status == ResourceStatus.LOADING:
            self._restore_settled()

    def reset(self) -> None:
        """使在途触发失效并回到 IDLE，清空数据与错误"""
        self._seq += 1
        self._last_args = ()
        self._last_kwargs = {}
        self._transition(ResourceSnapshot())
        self._settled = self._snapshot

    def dispose(self) -> None:
        """释放：使在途结果失效、取消自有后台任务、拒绝后续触发"""
        if self._disposed:
            return
        self.invalidate()
        self._disposed = True
        for task in list(self._tasks):
            task.cancel()
        log.debug("resource_disposed", resource=self._name)

    async def __aenter__(self) -> "AsyncResource":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    def _restore_settled(self) -> None:
        self._transition(self._settled)

    def _transition(self, snapshot: ResourceSnapshot) -> None:
        current = self._snapshot.status
        if snapshot.status != current and not validate_transition(current, snapshot.status):
            raise RuntimeError(
                f"非法状态流转: {current} -> {snapshot.status} ({self._name})"
            )
        self._snapshot = snapshot
