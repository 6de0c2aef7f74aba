"""ChecklistStore SQLite 实现

checklists 表每行保存一个 ChecklistInstance 的完整 JSON，
activity_id 单独成列用于按活动查询和级联删除。
"""

import aiosqlite

from ..models.checklist import ChecklistInstance


class SqliteChecklistStore:
    """ChecklistStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def save_checklist(self, checklist: ChecklistInstance) -> None:
        """写入或覆盖清单实例（不提交事务）"""
        await self._conn.execute(
            """
            INSERT INTO checklists (checklist_id, activity_id, data, updated_at)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(checklist_id) DO UPDATE
            SET activity_id = excluded.activity_id,
                data = excluded.data,
                updated_at = excluded.updated_at
            """,
            (
                checklist.id,
                checklist.activity_id,
                checklist.model_dump_json(),
                checklist.updated_at.isoformat(),
            ),
        )

    async def get_checklist(self, checklist_id: str) -> ChecklistInstance | None:
        """根据 checklist_id 查询清单"""
        cursor = await self._conn.execute(
            "SELECT data FROM checklists WHERE checklist_id = ?",
            (checklist_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return ChecklistInstance.model_validate_json(row[0])

    async def get_checklist_for_activity(self, activity_id: str) -> ChecklistInstance | None:
        """查询活动对应的清单"""
        cursor = await self._conn.execute(
            "SELECT data FROM checklists WHERE activity_id = ?",
            (activity_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return ChecklistInstance.model_validate_json(row[0])

    async def list_checklists(self) -> list[ChecklistInstance]:
        """查询全部清单，按 activity_id 排序"""
        cursor = await self._conn.execute(
            "SELECT data FROM checklists ORDER BY activity_id"
        )
        rows = await cursor.fetchall()
        return [ChecklistInstance.model_validate_json(row[0]) for row in rows]

    async def delete_checklist_for_activity(self, activity_id: str) -> bool:
        """删除活动对应的清单（连同全部清单项），返回是否确实删除了记录"""
        cursor = await self._conn.execute(
            "DELETE FROM checklists WHERE activity_id = ?",
            (activity_id,),
        )
        return cursor.rowcount > 0
