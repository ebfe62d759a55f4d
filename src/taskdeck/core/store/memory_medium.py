"""KeyValueMedium 内存实现 -- 测试与无持久化环境使用"""

from ...exceptions import StorageUnavailableError


class MemoryMedium:
    """基于 dict 的键值介质

    available=False 时模拟介质不可用（配额耗尽、沙箱环境）。
    """

    def __init__(self, items: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(items or {})
        self.available = True

    def _check(self, key: str) -> None:
        if not self.available:
            raise StorageUnavailableError(key, OSError("medium unavailable"))

    async def get_item(self, key: str) -> str | None:
        self._check(key)
        return self.items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._check(key)
        self.items[key] = value

    async def remove_item(self, key: str) -> None:
        self._check(key)
        self.items.pop(key, None)

    async def close(self) -> None:
        return None
