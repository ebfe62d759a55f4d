"""全局 pytest 配置 -- 内存/临时 SQLite 键值介质 fixture"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from taskdeck.core.store import KeyedStore, MemoryMedium, create_keyed_store


@pytest.fixture
def memory_medium() -> MemoryMedium:
    """提供空的内存介质"""
    return MemoryMedium()


@pytest.fixture
def memory_store(memory_medium: MemoryMedium) -> KeyedStore:
    """提供基于内存介质的 KeyedStore"""
    return KeyedStore(memory_medium)


@pytest.fixture
def tmp_db_path(tmp_path: Path) -> str:
    """提供临时 SQLite 数据库路径"""
    return str(tmp_path / "sqlite" / "test.db")


@pytest_asyncio.fixture
async def sqlite_store(tmp_db_path: str) -> AsyncGenerator[KeyedStore, None]:
    """提供已初始化的 SQLite KeyedStore"""
    store = await create_keyed_store(tmp_db_path)
    yield store
    await store.medium.close()
