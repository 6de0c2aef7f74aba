"""SQLite 数据库初始化

PRAGMA 配置 + 三张 JSON blob 表 DDL + 索引创建。
每行保存一个模型的完整 JSON（model_dump_json），读写原样进行，不做格式迁移。
使用 aiosqlite 异步操作。
"""

import aiosqlite

# activities 表 DDL
_ACTIVITIES_DDL = """
CREATE TABLE IF NOT EXISTS activities (
    activity_id  TEXT PRIMARY KEY,
    data         TEXT NOT NULL DEFAULT '{}',
    updated_at   TEXT NOT NULL
);
"""

# procedure_templates 表 DDL
_TEMPLATES_DDL = """
CREATE TABLE IF NOT EXISTS procedure_templates (
    template_id    TEXT PRIMARY KEY,
    activity_type  TEXT NOT NULL DEFAULT '',
    data           TEXT NOT NULL DEFAULT '{}'
);
"""

_TEMPLATES_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_templates_activity_type ON procedure_templates(activity_type);",
]

# checklists 表 DDL
_CHECKLISTS_DDL = """
CREATE TABLE IF NOT EXISTS checklists (
    checklist_id  TEXT PRIMARY KEY,
    activity_id   TEXT NOT NULL,
    data          TEXT NOT NULL DEFAULT '{}',
    updated_at    TEXT NOT NULL
);
"""

_CHECKLISTS_INDEXES = [
    # 一个活动至多一个清单实例
    "CREATE UNIQUE INDEX IF NOT EXISTS idx_checklists_activity_id ON checklists(activity_id);",
]


async def init_db(conn: aiosqlite.Connection) -> None:
    """初始化数据库：设置 PRAGMA + 创建表 + 创建索引

    Args:
        conn: aiosqlite 数据库连接
    """
    # 设置 PRAGMA
    await conn.execute("PRAGMA journal_mode = WAL;")
    await conn.execute("PRAGMA busy_timeout = 5000;")

    # 创建表
    await conn.execute(_ACTIVITIES_DDL)
    await conn.execute(_TEMPLATES_DDL)
    await conn.execute(_CHECKLISTS_DDL)

    # 创建索引
    for idx_sql in _TEMPLATES_INDEXES + _CHECKLISTS_INDEXES:
        await conn.execute(idx_sql)

    await conn.commit()


async def verify_wal_mode(conn: aiosqlite.Connection) -> bool:
    """验证 WAL 模式是否生效

    Returns:
        True 如果 WAL 模式已启用
    """
    cursor = await conn.execute("PRAGMA journal_mode;")
    row = await cursor.fetchone()
    return row is not None and row[0].lower() == "wal"
