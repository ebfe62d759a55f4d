"""KeyedStore 单元测试

验证 read-through 默认值、损坏值降级、函数式更新、介质不可用时内存为准。
"""

import asyncio
import json

from taskdeck.core.store import KeyedStore, MemoryMedium


class TestKeyedStoreRead:
    """read() 读穿与默认值"""

    async def test_missing_key_returns_default(self, memory_store: KeyedStore):
        assert await memory_store.read("absent", []) == []

    async def test_reads_stored_json(self):
        medium = MemoryMedium({"prefs": json.dumps({"theme": "dark"})})
        store = KeyedStore(medium)
        assert await store.read("prefs", {}) == {"theme": "dark"}

    async def test_corrupt_value_returns_default(self):
        """损坏的持久化值不会崩溃，回退默认值"""
        medium = MemoryMedium({"tasks": "{not json"})
        store = KeyedStore(medium)
        assert await store.read("tasks", ["fallback"]) == ["fallback"]

    async def test_unavailable_medium_returns_default(self, memory_medium: MemoryMedium):
        memory_medium.available = False
        store = KeyedStore(memory_medium)
        assert await store.read("tasks", "default") == "default"

    async def test_memory_value_wins_after_write(self, memory_medium: MemoryMedium):
        store = KeyedStore(memory_medium)
        await store.write("count", 1)
        # 外部篡改介质不影响本会话内存值
        memory_medium.items["count"] = "99"
        assert await store.read("count", 0) == 1


class TestKeyedStoreWrite:
    """write() 写穿与函数式更新"""

    async def test_write_persists_json(self, memory_store: KeyedStore, memory_medium: MemoryMedium):
        await memory_store.write("tasks", [{"id": "a", "text": "中文"}])
        assert json.loads(memory_medium.items["tasks"]) == [{"id": "a", "text": "中文"}]

    async def test_function_update_uses_previous(self, memory_store: KeyedStore):
        await memory_store.write("count", 1)
        result = await memory_store.write("count", lambda prev: prev + 1)
        assert result == 2
        assert await memory_store.read("count", 0) == 2

    async def test_function_update_reads_through_medium(self):
        """从未加载过的 key，函数式更新先读穿介质"""
        medium = MemoryMedium({"count": "5"})
        store = KeyedStore(medium)
        await store.write("count", lambda prev: prev * 2)
        assert medium.items["count"] == "10"

    async def test_function_update_on_missing_key_receives_default(
        self, memory_store: KeyedStore, memory_medium: MemoryMedium
    ):
        result = await memory_store.write("items", lambda prev: [*prev, 1], default=[])
        assert result == [1]
        assert memory_medium.items["items"] == "[1]"

    async def test_function_update_on_unavailable_medium_receives_default(
        self, memory_store: KeyedStore, memory_medium: MemoryMedium
    ):
        memory_medium.available = False
        result = await memory_store.write("items", lambda prev: [*prev, "x"], default=[])
        assert result == ["x"]
        assert await memory_store.read("items") == ["x"]

    async def test_queued_function_updates_do_not_lose_writes(self, memory_store: KeyedStore):
        """连续排队的函数式更新基于最新内存值"""
        await memory_store.write("items", [])
        await asyncio.gather(
            *(memory_store.write("items", lambda prev, i=i: [*prev, i]) for i in range(5))
        )
        assert sorted(await memory_store.read("items", [])) == [0, 1, 2, 3, 4]

    async def test_unavailable_medium_keeps_memory_state(self, memory_medium: MemoryMedium):
        """写入失败静默，本会话以内存状态为准"""
        store = KeyedStore(memory_medium)
        memory_medium.available = False
        result = await store.write("tasks", ["a"])
        assert result == ["a"]
        assert await store.read("tasks", []) == ["a"]
        assert "tasks" not in memory_medium.items

    async def test_unserializable_value_is_not_stored(self, memory_store: KeyedStore):
        await memory_store.write("bad", {1, 2})
        assert await memory_store.read("bad", "default") == "default"

    async def test_remove(self, memory_store: KeyedStore, memory_medium: MemoryMedium):
        await memory_store.write("k", 1)
        await memory_store.remove("k")
        assert "k" not in memory_medium.items
        assert await memory_store.read("k", None) is None
