"""CLI 入口模块 -- python -m tradeplan.core <command>

支持的命令：
  init-db                           初始化数据库
  recount-checklists [YYYY-MM-DD]   重新计算所有清单的缓存计数
  reminders [YYYY-MM-DD]            打印当天应触发的提醒
"""

import asyncio
import sys
from datetime import date

from .config import get_db_path
from .dates import parse_date
from .exceptions import InvalidDateError
from .logging_config import setup_logging

_USAGE = """用法: python -m tradeplan.core <command>
命令:
  init-db                           初始化数据库
  recount-checklists [YYYY-MM-DD]   重新计算所有清单的缓存计数
  reminders [YYYY-MM-DD]            打印当天应触发的提醒"""


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print(_USAGE)
        sys.exit(1)

    setup_logging()
    command = sys.argv[1]

    try:
        today = parse_date(sys.argv[2]) if len(sys.argv) > 2 else None
    except InvalidDateError as e:
        print(str(e))
        sys.exit(1)

    if command == "init-db":
        asyncio.run(init_database())
    elif command == "recount-checklists":
        asyncio.run(recount_checklists(today))
    elif command == "reminders":
        asyncio.run(print_reminders(today))
    else:
        print(f"未知命令: {command}")
        print("可用命令: init-db, recount-checklists, reminders")
        sys.exit(1)


async def init_database() -> None:
    """创建数据库文件和表结构，并确认 WAL 模式"""
    from .store import create_store_group
    from .store.sqlite_init import verify_wal_mode

    db_path = get_db_path()
    print(f"数据库路径: {db_path}")
    store_group = await create_store_group(db_path)
    try:
        wal_enabled = await verify_wal_mode(store_group.conn)
    finally:
        await store_group.conn.close()
    print(f"WAL 模式: {'已启用' if wal_enabled else '未启用'}")
    print("初始化完成")


async def recount_checklists(today: date | None) -> None:
    """执行清单计数重算"""
    from .service import PlannerService
    from .store import create_store_group

    db_path = get_db_path()
    print(f"数据库路径: {db_path}")
    print("开始重新计算清单计数...")

    store_group = await create_store_group(db_path)
    try:
        count = await PlannerService(store_group).recount_all(today=today)
        print(f"完成，处理 {count} 份清单")
    finally:
        await store_group.conn.close()


async def print_reminders(today: date | None) -> None:
    """推导并打印提醒"""
    from .service import PlannerService
    from .store import create_store_group

    store_group = await create_store_group(get_db_path())
    try:
        reminders = await PlannerService(store_group).refresh_reminders(today=today)
    finally:
        await store_group.conn.close()

    if not reminders:
        print("没有需要触发的提醒")
        return
    for reminder in reminders:
        print(f"[{reminder.type}] {reminder.scheduled_for.isoformat()} {reminder.message}")


if __name__ == "__main__":
    main()
