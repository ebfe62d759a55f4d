"""KeyValueMedium SQLite 实现

每次 set_item 立即提交事务，写入即落盘。
所有 sqlite 异常包装为 StorageUnavailableError。
"""

from datetime import UTC, datetime

import aiosqlite

from ...exceptions import StorageUnavailableError


class SqliteMedium:
    """KeyValueMedium 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def get_item(self, key: str) -> str | None:
        """读取 key 对应的 JSON 字符串"""
        try:
            cursor = await self._conn.execute(
                "SELECT value FROM kv_store WHERE key = ?",
                (key,),
            )
            row = await cursor.fetchone()
        except (aiosqlite.Error, ValueError) as e:
            raise StorageUnavailableError(key, e) from e
        if row is None:
            return None
        return row[0]

    async def set_item(self, key: str, value: str) -> None:
        """写入并提交（upsert）"""
        try:
            await self._conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value, datetime.now(UTC).isoformat()),
            )
            await self._conn.commit()
        except (aiosqlite.Error, ValueError) as e:
            raise StorageUnavailableError(key, e) from e

    async def remove_item(self, key: str) -> None:
        """删除 key"""
        try:
            await self._conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            await self._conn.commit()
        except (aiosqlite.Error, ValueError) as e:
            raise StorageUnavailableError(key, e) from e

    async def close(self) -> None:
        """关闭底层连接"""
        await self._conn.close()
