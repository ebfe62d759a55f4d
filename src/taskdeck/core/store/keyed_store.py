"""KeyedStore -- 持久化 key→value 单元

读：read-through，缺失或损坏时返回调用方提供的默认值。
写：write-through，先更新内存，再同步落到介质；介质故障只记日志，
本会话内以内存状态为准。损坏的持久化值永远不会让应用崩溃。
"""

import json
from collections.abc import Callable
from typing import Any

import structlog

from ...exceptions import StorageUnavailableError
from .protocols import KeyValueMedium

log = structlog.get_logger()

Updater = Callable[[Any], Any]


class KeyedStore:
    """带内存缓存的持久化键值单元

    同一进程内某个 key 一旦被读取或写入，后续 read 直接返回内存值，
    函数式更新总是基于最新的内存值计算。
    """

    def __init__(self, medium: KeyValueMedium) -> None:
        self._medium = medium
        self._values: dict[str, Any] = {}

    @property
    def medium(self) -> KeyValueMedium:
        return self._medium

    async def read(self, key: str, default: Any = None) -> Any:
        """读取 key 的值

        Args:
            key: 逻辑 key
            default: 缺失、反序列化失败或介质不可用时的回退值

        Returns:
            反序列化后的值或 default
        """
        if key in self._values:
            return self._values[key]

        try:
            raw = await self._medium.get_item(key)
        except StorageUnavailableError as e:
            log.error("keyed_store_read_failed", key=key, error=str(e))
            return default

        if raw is None:
            return default

        try:
            value = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            log.warning(
                "keyed_store_corrupt_value",
                key=key,
                error=str(e),
                raw_preview=str(raw)[:80],
            )
            return default

        self._values[key] = value
        return value

    async def write(self, key: str, value: Any | Updater, default: Any = None) -> Any:
        """写入 key 的值

        value 可以是字面值，也可以是纯函数 previous -> next。
        key 尚不存在（或不可读）时，函数收到的 previous 为 default。
        内存值在介质写入开始前即已更新。

        Returns:
            实际写入的值
        """
        if callable(value):
            previous = await self.read(key, default)
            # read 期间可能有其他写入完成，以最新内存值为准
            previous = self._values.get(key, previous)
            value = value(previous)

        try:
            serialized = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            log.error("keyed_store_serialize_failed", key=key, error=str(e))
            return self._values.get(key)

        self._values[key] = value

        try:
            await self._medium.set_item(key, serialized)
        except StorageUnavailableError as e:
            log.error("keyed_store_write_failed", key=key, error=str(e))
        return value

    async def remove(self, key: str) -> None:
        """删除 key（内存 + 介质）"""
        self._values.pop(key, None)
        try:
            await self._medium.remove_item(key)
        except StorageUnavailableError as e:
            log.error("keyed_store_remove_failed", key=key, error=str(e))
