"""ActivityStore SQLite 实现

activities 表每行保存一个 Activity 的完整 JSON。
"""

import aiosqlite

from ..models.activity import Activity


class SqliteActivityStore:
    """ActivityStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def save_activity(self, activity: Activity) -> None:
        """写入或覆盖活动记录（不提交事务）"""
        await self._conn.execute(
            """
            INSERT INTO activities (activity_id, data, updated_at)
            VALUES (?, ?, ?)
            ON CONFLICT(activity_id) DO UPDATE
            SET data = excluded.data, updated_at = excluded.updated_at
            """,
            (
                activity.id,
                activity.model_dump_json(),
                activity.updated_at.isoformat(),
            ),
        )

    async def get_activity(self, activity_id: str) -> Activity | None:
        """根据 activity_id 查询活动"""
        cursor = await self._conn.execute(
            "SELECT data FROM activities WHERE activity_id = ?",
            (activity_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return Activity.model_validate_json(row[0])

    async def list_activities(self) -> list[Activity]:
        """查询全部活动，按 activity_id 排序"""
        cursor = await self._conn.execute(
            "SELECT data FROM activities ORDER BY activity_id"
        )
        rows = await cursor.fetchall()
        return [Activity.model_validate_json(row[0]) for row in rows]

    async def delete_activity(self, activity_id: str) -> bool:
        """删除活动，返回是否确实删除了记录"""
        cursor = await self._conn.execute(
            "DELETE FROM activities WHERE activity_id = ?",
            (activity_id,),
        )
        return cursor.rowcount > 0
