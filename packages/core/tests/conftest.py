"""packages/core 测试配置 -- 模板与活动 fixture"""

from datetime import UTC, date, datetime

import pytest
from tradeplan.core.models import (
    Activity,
    ActivityStatus,
    ProcedurePhase,
    ProcedureTask,
    ProcedureTemplate,
    TaskCategory,
)

FIXED_NOW = datetime(2025, 1, 1, 9, 0, tzinfo=UTC)


def make_task(
    task_id: str,
    due_offset: int,
    reminder_offsets: tuple[int, ...] = (),
    **kwargs,
) -> ProcedureTask:
    """构造测试用 ProcedureTask"""
    return ProcedureTask(
        id=task_id,
        title=kwargs.pop("title", f"Task {task_id}"),
        category=kwargs.pop("category", TaskCategory.ADMINISTRATIVE),
        due_offset=due_offset,
        reminder_offsets=reminder_offsets,
        **kwargs,
    )


@pytest.fixture
def trade_template() -> ProcedureTemplate:
    """两阶段贸易代表团模板：准备阶段 3 个任务，跟进阶段 1 个任务"""
    return ProcedureTemplate(
        id="tpl-trade",
        name="Outbound Trade Mission",
        activity_type="outbound_trade_mission",
        phases=(
            ProcedurePhase(
                id="ph-prep",
                name="Preparation",
                order=1,
                tasks=(
                    make_task("t-budget", -30, (7, 1), category=TaskCategory.BUDGET),
                    make_task(
                        "t-recruit",
                        -45,
                        (14, 3),
                        category=TaskCategory.PARTICIPANTS,
                        requires_approval=True,
                    ),
                    make_task("t-travel", -10, (3,), category=TaskCategory.LOGISTICS),
                ),
            ),
            ProcedurePhase(
                id="ph-follow",
                name="Follow Up",
                order=2,
                tasks=(
                    make_task(
                        "t-report",
                        14,
                        (2,),
                        category=TaskCategory.FOLLOW_UP,
                        is_required=False,
                    ),
                ),
            ),
        ),
    )


@pytest.fixture
def trade_activity() -> Activity:
    """开始日 2025-03-01 的贸易活动"""
    return Activity(
        id="act-1",
        name="Taipei Trade Mission",
        activity_type="outbound_trade_mission",
        status=ActivityStatus.PLANNING,
        start_date=date(2025, 3, 1),
        procedure_template_id="tpl-trade",
        created_at=FIXED_NOW,
        updated_at=FIXED_NOW,
    )

