"""查询/排序辅助模块 -- 为 UI 提供即将到期、逾期、按阶段分组等视图

所有排序都按 due_date 升序且稳定（同日期保持清单顺序）。
"""

from datetime import date

from pydantic import BaseModel, Field

from .config import DUE_SOON_WINDOW_DAYS, UPCOMING_DAYS_AHEAD
from .dates import (
    add_days,
    days_until,
    format_display_date,
    is_past,
    pluralize_days,
    resolve_today,
)
from .models.checklist import ChecklistInstance, ChecklistItem
from .models.enums import DueDateStatus, is_done
from .models.template import ProcedurePhase, ProcedureTemplate


class PhaseGroup(BaseModel):
    """按阶段分组的清单项"""

    phase: ProcedurePhase
    items: list[ChecklistItem] = Field(default_factory=list)


class DueDateLabel(BaseModel):
    """截止日期的展示分类 + 文本"""

    status: DueDateStatus
    text: str


def _by_due_date(items: list[ChecklistItem]) -> list[ChecklistItem]:
    return sorted(items, key=lambda item: item.due_date)


def upcoming_tasks(
    checklist: ChecklistInstance,
    days_ahead: int = UPCOMING_DAYS_AHEAD,
    *,
    today: date | None = None,
) -> list[ChecklistItem]:
    """未完成且 due_date 落在 [today, today + days_ahead] 的清单项（两端包含）"""
    reference = resolve_today(today)
    cutoff = add_days(reference, days_ahead)
    return _by_due_date(
        [
            item
            for item in checklist.items
            if not is_done(item.status) and reference <= item.due_date <= cutoff
        ]
    )


def overdue_tasks(
    checklist: ChecklistInstance,
    *,
    today: date | None = None,
) -> list[ChecklistItem]:
    """未完成且 due_date 早于今天的清单项"""
    reference = resolve_today(today)
    return _by_due_date(
        [
            item
            for item in checklist.items
            if not is_done(item.status) and is_past(item.due_date, reference)
        ]
    )


def tasks_by_phase(
    checklist: ChecklistInstance,
    template: ProcedureTemplate,
) -> dict[str, PhaseGroup]:
    """按 phase_id 分组，保持模板阶段顺序

    阶段内按 due_date 排序；模板中没有对应阶段的清单项不出现在结果中，
    没有清单项的阶段以空列表出现。
    """
    groups: dict[str, PhaseGroup] = {
        phase.id: PhaseGroup(phase=phase) for phase in template.phases
    }

    for item in checklist.items:
        group = groups.get(item.phase_id)
        if group is not None:
            group.items.append(item)

    for group in groups.values():
        group.items = _by_due_date(group.items)

    return groups


def format_due_date_with_status(
    due_date: date,
    *,
    today: date | None = None,
) -> DueDateLabel:
    """将截止日期相对今天分为四类并给出展示文本

    diff < 0 -> overdue  "N days overdue"
    diff = 0 -> today    "Due today"
    1..7     -> upcoming "Due in N days"
    > 7      -> future   "Mar 6, 2025"
    """
    diff = days_until(due_date, resolve_today(today))

    if diff < 0:
        return DueDateLabel(
            status=DueDateStatus.OVERDUE,
            text=f"{pluralize_days(abs(diff))} overdue",
        )
    if diff == 0:
        return DueDateLabel(status=DueDateStatus.TODAY, text="Due today")
    if diff <= DUE_SOON_WINDOW_DAYS:
        return DueDateLabel(
            status=DueDateStatus.UPCOMING,
            text=f"Due in {pluralize_days(diff)}",
        )
    return DueDateLabel(status=DueDateStatus.FUTURE, text=format_display_date(due_date))
