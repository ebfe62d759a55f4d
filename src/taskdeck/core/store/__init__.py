"""taskdeck Core Store -- 本地键值持久化

提供工厂函数创建基于 SQLite 的 KeyedStore。
"""

from pathlib import Path

import aiosqlite
import structlog

from .keyed_store import KeyedStore
from .memory_medium import MemoryMedium
from .protocols import KeyValueMedium
from .sqlite_init import init_db, verify_wal_mode
from .sqlite_medium import SqliteMedium

log = structlog.get_logger()


async def create_keyed_store(db_path: str) -> KeyedStore:
    """创建基于 SQLite 介质的 KeyedStore

    Args:
        db_path: SQLite 数据库文件路径（":memory:" 表示不落盘）

    Returns:
        KeyedStore 实例，调用方负责 `await store.medium.close()`
    """
    if db_path != ":memory:":
        # 确保数据库目录存在
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path)
    await init_db(conn)
    if not await verify_wal_mode(conn):
        # ":memory:" 与部分网络文件系统不支持 WAL，回退到默认日志模式
        log.warning("sqlite_wal_unavailable", db_path=db_path)

    return KeyedStore(SqliteMedium(conn))


__all__ = [
    "KeyValueMedium",
    "KeyedStore",
    "MemoryMedium",
    "SqliteMedium",
    "create_keyed_store",
    "init_db",
]
