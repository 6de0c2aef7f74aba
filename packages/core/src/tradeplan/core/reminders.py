"""提醒推导模块

从当前清单与活动状态整体推导提醒列表：纯函数、幂等，不累积历史。
每次活动或清单变化都应重新调用并整体替换旧列表。

提醒 ID 规则:
    逾期: overdue-<item_id>
    即将到期: upcoming-<item_id>-<yyyy-MM-dd>
"""

from collections.abc import Iterable, Sequence
from datetime import date, datetime

import structlog

from .dates import (
    days_since,
    days_until,
    format_date,
    is_past,
    pluralize_days,
    resolve_today,
    utc_now,
)
from .models.activity import Activity
from .models.checklist import ChecklistInstance, ChecklistItem
from .models.enums import ReminderType, is_done
from .models.reminder import Reminder

log = structlog.get_logger()

OVERDUE_TITLE = "Task Overdue"
DUE_SOON_TITLE = "Task Due Soon"


def overdue_reminder_id(item_id: str) -> str:
    return f"overdue-{item_id}"


def upcoming_reminder_id(item_id: str, reminder_date: date) -> str:
    return f"upcoming-{item_id}-{format_date(reminder_date)}"


def _recipients(item: ChecklistItem) -> list[str]:
    return [item.assignee_id] if item.assignee_id else []


def derive_reminders(
    checklist: ChecklistInstance,
    activity: Activity,
    *,
    today: date | None = None,
    now: datetime | None = None,
) -> list[Reminder]:
    """推导单个清单的提醒

    行为规则:
        1. completed / skipped 的清单项不产生任何提醒
        2. due_date 严格早于今天 -> 一条 task_overdue
        3. reminder_dates 中等于今天的每个日期 -> 一条 task_due
    新生成的提醒 is_read / is_dismissed 均为 False。

    Args:
        checklist: 清单实例
        activity: 清单所属活动（提供名称和 ID）
        today: 参考日期，默认读取系统时钟
        now: 提醒 created_at 时间戳

    Returns:
        按清单项顺序排列的提醒列表
    """
    reference = resolve_today(today)
    ts = now or utc_now()
    reminders: list[Reminder] = []

    for item in checklist.items:
        if is_done(item.status):
            continue

        if is_past(item.due_date, reference):
            days_overdue = days_since(item.due_date, reference)
            reminders.append(
                Reminder(
                    id=overdue_reminder_id(item.id),
                    type=ReminderType.TASK_OVERDUE,
                    activity_id=activity.id,
                    checklist_item_id=item.id,
                    title=OVERDUE_TITLE,
                    message=(
                        f'"{item.title}" for {activity.name} '
                        f"was due {pluralize_days(days_overdue)} ago"
                    ),
                    scheduled_for=reference,
                    recipient_ids=_recipients(item),
                    created_at=ts,
                )
            )

        # 日期无时间分量，只有提醒日恰好是今天时才触发
        for reminder_date in item.reminder_dates:
            if reminder_date != reference:
                continue
            days_left = days_until(item.due_date, reference)
            reminders.append(
                Reminder(
                    id=upcoming_reminder_id(item.id, reminder_date),
                    type=ReminderType.TASK_DUE,
                    activity_id=activity.id,
                    checklist_item_id=item.id,
                    title=DUE_SOON_TITLE,
                    message=(
                        f'"{item.title}" for {activity.name} '
                        f"is due in {pluralize_days(days_left)}"
                    ),
                    scheduled_for=reminder_date,
                    recipient_ids=_recipients(item),
                    created_at=ts,
                )
            )

    return reminders


def derive_all_reminders(
    checklists: Iterable[ChecklistInstance],
    activities: Iterable[Activity],
    *,
    today: date | None = None,
    now: datetime | None = None,
) -> list[Reminder]:
    """推导所有清单的提醒，所属活动不存在的清单被跳过"""
    reference = resolve_today(today)
    ts = now or utc_now()
    by_id = {activity.id: activity for activity in activities}

    reminders: list[Reminder] = []
    for checklist in checklists:
        activity = by_id.get(checklist.activity_id)
        if activity is None:
            log.warning(
                "checklist_without_activity",
                checklist_id=checklist.id,
                activity_id=checklist.activity_id,
            )
            continue
        reminders.extend(derive_reminders(checklist, activity, today=reference, now=ts))
    return reminders


def merge_reminder_state(
    fresh: Sequence[Reminder],
    previous: Iterable[Reminder],
) -> list[Reminder]:
    """把旧提醒的 is_read / is_dismissed 按 ID 带到新推导的提醒上

    新列表中不存在的旧提醒直接丢弃；新提醒的其余字段不变。
    """
    flags = {r.id: (r.is_read, r.is_dismissed) for r in previous}
    merged: list[Reminder] = []
    for reminder in fresh:
        if reminder.id in flags:
            is_read, is_dismissed = flags[reminder.id]
            reminder = reminder.model_copy(
                update={"is_read": is_read, "is_dismissed": is_dismissed}
            )
        merged.append(reminder)
    return merged


def unread_count(reminders: Iterable[Reminder]) -> int:
    """既未读也未忽略的提醒数"""
    return sum(1 for r in reminders if not r.is_read and not r.is_dismissed)
