"""清单重算模块

活动 start_date 变化后，平移已有清单项的截止/提醒日期，
保留用户录入的状态（status、备注、负责人、审批等）。
"""

from datetime import datetime

import structlog

from .dates import utc_now
from .generator import compute_task_dates, require_start_date
from .models.activity import Activity
from .models.checklist import ChecklistInstance, ChecklistItem
from .models.template import ProcedureTemplate

log = structlog.get_logger()


def recalculate_checklist(
    checklist: ChecklistInstance,
    activity: Activity,
    template: ProcedureTemplate,
    *,
    now: datetime | None = None,
) -> ChecklistInstance:
    """按活动新的 start_date 重算清单日期

    行为规则:
        1. task_id 仍在模板中 -> 只重算 due_date 和 reminder_dates
        2. task_id 已不在模板中（模板演进）-> 清单项原样保留，不删除
        3. 模板新增的任务不会补建清单项
    清单项顺序和计数字段不变（计数在下一次 rollup 前是旧值），仅刷新 updated_at。

    Raises:
        InvalidActivityDateError: 活动缺少 start_date
    """
    start_date = require_start_date(activity)
    task_map = template.task_index()

    updated_items: list[ChecklistItem] = []
    orphaned = 0
    for item in checklist.items:
        task = task_map.get(item.task_id)
        if task is None:
            orphaned += 1
            updated_items.append(item)
            continue

        due_date, reminder_dates = compute_task_dates(start_date, task)
        updated_items.append(
            item.model_copy(
                update={
                    "due_date": due_date,
                    "reminder_dates": reminder_dates,
                }
            )
        )

    log.debug(
        "checklist_recalculated",
        checklist_id=checklist.id,
        activity_id=activity.id,
        shifted=len(updated_items) - orphaned,
        orphaned=orphaned,
    )

    return checklist.model_copy(
        update={
            "items": updated_items,
            "updated_at": now or utc_now(),
        }
    )
