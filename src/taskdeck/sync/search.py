"""SearchIndex -- 防抖的内存集合过滤

raw_query 随输入同步更新；committed_query 在最后一次 set_query 之后
静默 debounce_s 秒才提交。每次 set_query 都取消并替换挂起的定时器句柄，
不依赖垃圾回收来丢弃旧定时器。results 按需计算，不缓存。
"""

import asyncio
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

import structlog

log = structlog.get_logger()

DEFAULT_SEARCH_FIELDS: tuple[str, ...] = ("title", "body")
DEFAULT_DEBOUNCE_S: float = 0.3

Matcher = Callable[[str, Sequence[Any]], list[Any]]


def _field_value(item: Any, field: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(field)
    return getattr(item, field, None)


def search_items(
    query: str,
    items: Iterable[Any],
    fields: Sequence[str] = DEFAULT_SEARCH_FIELDS,
) -> list[Any]:
    """大小写不敏感的子串匹配，任一字段包含查询串即命中

    查询为空或全空白时原样返回全部条目（保持顺序）。
    """
    items = list(items)
    if not query.strip():
        return items

    needle = query.lower()
    matched = []
    for item in items:
        for field in fields:
            value = _field_value(item, field)
            if isinstance(value, str) and needle in value.lower():
                matched.append(item)
                break
    return matched


class SearchIndex:
    """防抖搜索

    Args:
        source: 被搜索的集合快照
        fields: 参与匹配的字段名（mapping key 或属性名）
        debounce_s: 静默期（秒）
        matcher: 自定义过滤函数 (query, items) -> 命中条目，替代默认字段匹配
        on_commit: 每次提交 committed_query 后同步回调
    """

    def __init__(
        self,
        source: Iterable[Any] = (),
        *,
        fields: Sequence[str] = DEFAULT_SEARCH_FIELDS,
        debounce_s: float = DEFAULT_DEBOUNCE_S,
        matcher: Matcher | None = None,
        on_commit: Callable[[str], None] | None = None,
    ) -> None:
        if debounce_s < 0:
            raise ValueError(f"debounce_s 不能为负数: {debounce_s}")
        self._source: list[Any] = list(source)
        self._fields = tuple(fields)
        self._debounce_s = debounce_s
        self._matcher = matcher
        self._on_commit = on_commit
        self._raw_query = ""
        self._committed_query = ""
        self._timer: asyncio.TimerHandle | None = None

    # ---- 只读投影 ----

    @property
    def raw_query(self) -> str:
        return self._raw_query

    @property
    def committed_query(self) -> str:
        return self._committed_query

    @property
    def source(self) -> tuple[Any, ...]:
        return tuple(self._source)

    @property
    def is_searching(self) -> bool:
        """提交挂起中"""
        return self._raw_query != self._committed_query

    @property
    def results(self) -> list[Any]:
        """committed_query 作用于最新集合快照的结果"""
        if self._matcher is not None:
            if not self._committed_query.strip():
                return list(self._source)
            return self._matcher(self._committed_query, list(self._source))
        return search_items(self._committed_query, self._source, self._fields)

    # ---- 操作 ----

    def set_query(self, text: str) -> None:
        """更新 raw_query 并重新开始防抖计时

        需在运行中的事件循环内调用。
        """
        self._raw_query = text
        self._cancel_timer()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self._debounce_s, self._commit)

    def set_source(self, items: Iterable[Any] | None) -> None:
        """替换被搜索的集合快照"""
        self._source = list(items or [])

    def clear_search(self) -> None:
        """同步清空两个查询，绕过防抖"""
        self._cancel_timer()
        self._raw_query = ""
        self._committed_query = ""

    def dispose(self) -> None:
        self._cancel_timer()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _commit(self) -> None:
        self._timer = None
        self._committed_query = self._raw_query
        log.debug("search_query_committed", query=self._committed_query)
        if self._on_commit is not None:
            self._on_commit(self._committed_query)
