"""Store Protocol 接口定义

定义本地键值存储介质的抽象接口，
使用 Python Protocol 实现结构化子类型（duck typing），
仓储逻辑只依赖此接口，测试可替换为内存实现。
"""

from typing import Protocol


class KeyValueMedium(Protocol):
    """持久化键值介质接口

    值一律为字符串（JSON 序列化后的形式）。
    介质故障统一抛出 StorageUnavailableError。
    """

    async def get_item(self, key: str) -> str | None:
        """读取 key 对应的字符串，不存在返回 None"""
        ...

    async def set_item(self, key: str, value: str) -> None:
        """写入并立即持久化"""
        ...

    async def remove_item(self, key: str) -> None:
        """删除 key，不存在时静默"""
        ...

    async def close(self) -> None:
        """释放底层资源"""
        ...
