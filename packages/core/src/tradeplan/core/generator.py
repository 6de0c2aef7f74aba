"""清单生成模块

从流程模板 + 活动日期实例化清单：
每个任务的截止日期 = 活动开始日 + due_offset，
提醒日期 = 截止日期 - reminder_offsets 中的每个偏移。
"""

from datetime import date, datetime

import structlog
from ulid import ULID

from .dates import add_days, utc_now
from .exceptions import InvalidActivityDateError
from .models.activity import Activity
from .models.checklist import ChecklistInstance, ChecklistItem
from .models.template import ProcedureTask, ProcedureTemplate

log = structlog.get_logger()


def compute_task_dates(start_date: date, task: ProcedureTask) -> tuple[date, list[date]]:
    """根据活动开始日计算任务的截止日期和提醒日期

    Returns:
        (due_date, reminder_dates)，reminder_dates 保持 reminder_offsets 的顺序
    """
    due_date = add_days(start_date, task.due_offset)
    reminder_dates = [add_days(due_date, -offset) for offset in task.reminder_offsets]
    return due_date, reminder_dates


def require_start_date(activity: Activity) -> date:
    """取出活动开始日，缺失时立即失败"""
    if activity.start_date is None:
        raise InvalidActivityDateError(activity.id, activity.start_date)
    return activity.start_date


def generate_checklist(
    activity: Activity,
    template: ProcedureTemplate,
    *,
    now: datetime | None = None,
) -> ChecklistInstance:
    """从流程模板生成清单实例

    清单项按 phase 顺序、phase 内 task 顺序排列，不重新排序。
    completed_count / overdue_count 初始为 0，需要准确逾期数时由调用方再做 rollup。
    不修改 activity 和 template。

    Args:
        activity: 活动（必须有 start_date）
        template: 流程模板
        now: 时间戳，默认当前 UTC 时间

    Returns:
        新的 ChecklistInstance

    Raises:
        InvalidActivityDateError: 活动缺少 start_date
    """
    start_date = require_start_date(activity)
    ts = now or utc_now()

    items: list[ChecklistItem] = []
    for phase, task in template.iter_tasks():
        due_date, reminder_dates = compute_task_dates(start_date, task)
        items.append(
            ChecklistItem.from_task(
                item_id=str(ULID()),
                phase=phase,
                task=task,
                due_date=due_date,
                reminder_dates=reminder_dates,
            )
        )

    checklist = ChecklistInstance(
        id=str(ULID()),
        activity_id=activity.id,
        procedure_template_id=template.id,
        items=items,
        completed_count=0,
        total_count=len(items),
        overdue_count=0,
        created_at=ts,
        updated_at=ts,
    )

    log.info(
        "checklist_generated",
        checklist_id=checklist.id,
        activity_id=activity.id,
        template_id=template.id,
        item_count=checklist.total_count,
    )
    return checklist
