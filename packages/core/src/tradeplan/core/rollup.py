"""Rollup 计数模块

completed_count / overdue_count 是清单上的缓存值，
每次清单项状态变化后由调用方调用 update_counts 重算。
"""

from collections.abc import Sequence
from datetime import date, datetime

from pydantic import BaseModel, Field

from .dates import is_past, resolve_today, utc_now
from .models.checklist import ChecklistInstance, ChecklistItem
from .models.enums import PhaseStatus, is_done
from .models.template import ProcedureTemplate


class PhaseSummary(BaseModel):
    """单个阶段的完成情况"""

    phase_id: str
    name: str
    done_count: int = Field(description="completed + skipped 数")
    total_count: int
    status: PhaseStatus


def count_overdue(items: Sequence[ChecklistItem], today: date) -> int:
    """未完成且截止日期早于今天的清单项数"""
    return sum(
        1 for item in items if not is_done(item.status) and is_past(item.due_date, today)
    )


def update_counts(
    checklist: ChecklistInstance,
    *,
    today: date | None = None,
    now: datetime | None = None,
) -> ChecklistInstance:
    """重算清单缓存计数，返回新的清单实例

    completed_count: status 为 completed 或 skipped 的清单项数
    overdue_count: 其余清单项中 due_date 严格早于今天的数目（只比较日期）
    """
    reference = resolve_today(today)
    completed_count = sum(1 for item in checklist.items if is_done(item.status))

    return checklist.model_copy(
        update={
            "completed_count": completed_count,
            "total_count": len(checklist.items),
            "overdue_count": count_overdue(checklist.items, reference),
            "updated_at": now or utc_now(),
        }
    )


def get_phase_status(items: Sequence[ChecklistItem]) -> PhaseStatus:
    """由阶段内清单项状态推导阶段状态

    没有清单项的阶段视为 completed。
    """
    if not items:
        return PhaseStatus.COMPLETED

    done = sum(1 for item in items if is_done(item.status))
    if done == 0:
        return PhaseStatus.NOT_STARTED
    if done == len(items):
        return PhaseStatus.COMPLETED
    return PhaseStatus.IN_PROGRESS


def progress_percent(checklist: ChecklistInstance) -> int:
    """完成百分比（0-100，四舍五入），total_count 为 0 时返回 0"""
    if checklist.total_count == 0:
        return 0
    # JS Math.round 语义：.5 向上取整
    return int(checklist.completed_count * 100 / checklist.total_count + 0.5)


def phase_summaries(
    checklist: ChecklistInstance,
    template: ProcedureTemplate,
) -> list[PhaseSummary]:
    """按模板阶段顺序汇总每个阶段的完成情况"""
    summaries: list[PhaseSummary] = []
    for phase in template.phases:
        items = [item for item in checklist.items if item.phase_id == phase.id]
        summaries.append(
            PhaseSummary(
                phase_id=phase.id,
                name=phase.name,
                done_count=sum(1 for item in items if is_done(item.status)),
                total_count=len(items),
                status=get_phase_status(items),
            )
        )
    return summaries
