"""tradeplan Core Store -- SQLite 持久化实现

提供工厂函数创建共享数据库连接的 Store 实例组。
"""

from pathlib import Path

import aiosqlite

from .activity_store import SqliteActivityStore
from .checklist_store import SqliteChecklistStore
from .sqlite_init import init_db
from .template_store import SqliteTemplateStore
from .transaction import delete_activity_and_checklist, save_activity_and_checklist


class StoreGroup:
    """Store 实例组 -- 共享同一个数据库连接"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self.conn = conn
        self.activity_store = SqliteActivityStore(conn)
        self.template_store = SqliteTemplateStore(conn)
        self.checklist_store = SqliteChecklistStore(conn)


async def create_store_group(db_path: str) -> StoreGroup:
    """创建 Store 实例组

    Args:
        db_path: SQLite 数据库文件路径

    Returns:
        StoreGroup 实例
    """
    # 确保数据库目录存在
    db_dir = Path(db_path).parent
    db_dir.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path)
    await init_db(conn)

    return StoreGroup(conn=conn)


__all__ = [
    "StoreGroup",
    "create_store_group",
    "SqliteActivityStore",
    "SqliteTemplateStore",
    "SqliteChecklistStore",
    "init_db",
    "save_activity_and_checklist",
    "delete_activity_and_checklist",
]
