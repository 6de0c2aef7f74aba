"""TemplateStore SQLite 实现

流程模板由外部提供，此处只做原样保存和读取。
"""

import aiosqlite

from ..models.template import ProcedureTemplate


class SqliteTemplateStore:
    """TemplateStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def save_template(self, template: ProcedureTemplate) -> None:
        """写入或覆盖流程模板（不提交事务）"""
        await self._conn.execute(
            """
            INSERT INTO procedure_templates (template_id, activity_type, data)
            VALUES (?, ?, ?)
            ON CONFLICT(template_id) DO UPDATE
            SET activity_type = excluded.activity_type, data = excluded.data
            """,
            (template.id, template.activity_type, template.model_dump_json()),
        )

    async def get_template(self, template_id: str) -> ProcedureTemplate | None:
        """根据 template_id 查询模板"""
        cursor = await self._conn.execute(
            "SELECT data FROM procedure_templates WHERE template_id = ?",
            (template_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return ProcedureTemplate.model_validate_json(row[0])

    async def list_templates(self, activity_type: str | None = None) -> list[ProcedureTemplate]:
        """查询模板列表，支持按活动类型筛选"""
        if activity_type:
            cursor = await self._conn.execute(
                "SELECT data FROM procedure_templates WHERE activity_type = ? "
                "ORDER BY template_id",
                (activity_type,),
            )
        else:
            cursor = await self._conn.execute(
                "SELECT data FROM procedure_templates ORDER BY template_id"
            )
        rows = await cursor.fetchall()
        return [ProcedureTemplate.model_validate_json(row[0]) for row in rows]
