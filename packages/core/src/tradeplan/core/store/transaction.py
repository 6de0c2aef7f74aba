"""活动 + 清单原子事务封装

活动与其清单实例必须在同一 SQLite 事务内一起提交或一起回滚，
避免出现指向不存在清单的活动，或没有活动的孤儿清单。
"""

import aiosqlite

from ..models.activity import Activity
from ..models.checklist import ChecklistInstance
from .protocols import ActivityStore, ChecklistStore


async def save_activity_and_checklist(
    conn: aiosqlite.Connection,
    activity_store: ActivityStore,
    checklist_store: ChecklistStore,
    activity: Activity,
    checklist: ChecklistInstance | None = None,
) -> None:
    """在同一事务内原子保存活动和（可选的）清单

    Args:
        conn: 数据库连接（需在同一连接上操作以保证事务性）
        activity_store: ActivityStore 实例
        checklist_store: ChecklistStore 实例
        activity: 要保存的活动
        checklist: 要保存的清单，None 时只保存活动

    Raises:
        Exception: 如果事务提交失败，自动回滚
    """
    try:
        await activity_store.save_activity(activity)
        if checklist is not None:
            await checklist_store.save_checklist(checklist)
        await conn.commit()
    except Exception:
        await conn.rollback()
        raise


async def delete_activity_and_checklist(
    conn: aiosqlite.Connection,
    activity_store: ActivityStore,
    checklist_store: ChecklistStore,
    activity_id: str,
) -> bool:
    """在同一事务内删除活动及其清单

    Returns:
        活动记录是否存在并被删除
    """
    try:
        await checklist_store.delete_checklist_for_activity(activity_id)
        deleted = await activity_store.delete_activity(activity_id)
        await conn.commit()
    except Exception:
        await conn.rollback()
        raise
    return deleted
