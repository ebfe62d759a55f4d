"""PagedResource -- 增量分页累计

基于单个 AsyncResource，其操作为 fetch_page(page, page_size)。
accumulated 是自上次 reset 以来所有成功页面按获取顺序的拼接；
has_more 为启发式结束信号：最近一页条数等于 page_size 时为 True。
"""

from collections.abc import Awaitable, Callable, Sequence
from typing import Any

import structlog

from ..core.models.resource import PageResult, ResourceSnapshot
from .resource import AsyncResource

log = structlog.get_logger()

FetchPage = Callable[[int, int], Awaitable[Sequence[Any]]]


class PagedResource:
    """分页数据源的增量累计

    Args:
        fetch_page: 异步函数 (page, page_size) -> 本页条目
        page_size: 每页条数
        initial_page: 首次 load() 获取的页码
    """

    def __init__(
        self,
        fetch_page: FetchPage,
        page_size: int = 10,
        initial_page: int = 1,
        *,
        name: str | None = None,
    ) -> None:
        if page_size < 1:
            raise ValueError(f"page_size 必须 >= 1: {page_size}")
        if initial_page < 1:
            raise ValueError(f"initial_page 必须 >= 1: {initial_page}")
        self._fetch_page = fetch_page
        self._page_size = page_size
        self._current_page = initial_page
        self._accumulated: list[Any] = []
        self._has_more = True
        # 自构造或上次 reset 以来是否已有页面成功落地
        self._loaded = False
        # 当前页的合并模式：True 替换，False 追加
        self._replace = False
        self._resource = AsyncResource(
            self._fetch,
            on_success=self._apply_page,
            name=name or getattr(fetch_page, "__name__", "paged_resource"),
        )

    # ---- 只读投影 ----

    @property
    def accumulated(self) -> tuple[Any, ...]:
        return tuple(self._accumulated)

    @property
    def current_data(self) -> list[Any] | None:
        """最近一次成功获取的单页条目"""
        result = self._resource.data
        return list(result.items) if isinstance(result, PageResult) else None

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def has_more(self) -> bool:
        return self._has_more

    @property
    def loading(self) -> bool:
        return self._resource.loading

    @property
    def error(self) -> str | None:
        return self._resource.error

    @property
    def snapshot(self) -> ResourceSnapshot:
        return self._resource.snapshot

    # ---- 操作 ----

    async def load(self) -> ResourceSnapshot:
        """获取当前页（首次挂载、reset 之后）"""
        self._replace = False
        return await self._resource.trigger(self._current_page, False)

    async def load_more(self) -> ResourceSnapshot:
        """获取下一页并追加；加载中或已无更多数据时 no-op

        尚无页面落地（刚构造或刚 reset）时先获取当前页，不跳过第 1 页。
        """
        if self._resource.loading or not self._has_more:
            log.debug(
                "load_more_ignored",
                loading=self._resource.loading,
                has_more=self._has_more,
            )
            return self._resource.snapshot
        if not self._loaded:
            return await self.load()
        self._current_page += 1
        self._replace = False
        return await self._resource.trigger(self._current_page, False)

    def reset(self) -> None:
        """回到第 1 页并清空累计数据

        在途获取的结果随之失效，不会在 reset 之后回填 accumulated。
        """
        self._resource.reset()
        self._current_page = 1
        self._accumulated = []
        self._has_more = True
        self._loaded = False
        self._replace = False

    async def go_to_page(self, page: int) -> ResourceSnapshot:
        """直接跳转到第 page 页，替换（而非追加）累计数据"""
        if page < 1:
            log.debug("go_to_page_ignored_invalid_page", page=page)
            return self._resource.snapshot
        self._current_page = page
        self._accumulated = []
        self._loaded = False
        self._replace = True
        return await self._resource.trigger(page, True)

    async def refetch(self) -> ResourceSnapshot:
        """按当前页码与合并模式重新获取（reset 之后即第 1 页）"""
        return await self._resource.trigger(self._current_page, self._replace)

    def dispose(self) -> None:
        self._resource.dispose()

    async def __aenter__(self) -> "PagedResource":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    # ---- 内部 ----

    async def _fetch(self, page: int, replace: bool) -> PageResult:
        items = await self._fetch_page(page, self._page_size)
        if not isinstance(items, list | tuple):
            raise TypeError(f"第 {page} 页返回的不是列表: {type(items).__name__}")
        return PageResult(page=page, items=list(items), replace=replace or page == 1)

    def _apply_page(self, result: PageResult) -> None:
        if result.replace:
            self._accumulated = list(result.items)
        else:
            self._accumulated = [*self._accumulated, *result.items]
        self._has_more = len(result.items) == self._page_size
        self._loaded = True
        log.debug(
            "page_applied",
            page=result.page,
            item_count=len(result.items),
            accumulated=len(self._accumulated),
            has_more=self._has_more,
        )
