"""taskdeck Sync -- 异步获取生命周期、分页累计与防抖搜索

公开接口导出。
"""

from .paging import PagedResource
from .resource import AsyncResource, describe_error
from .search import SearchIndex, search_items

__all__ = [
    "AsyncResource",
    "PagedResource",
    "SearchIndex",
    "describe_error",
    "search_items",
]
