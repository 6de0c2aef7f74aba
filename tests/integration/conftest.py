"""集成测试共享 fixture"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from tradeplan.core.models import (
    ProcedurePhase,
    ProcedureTask,
    ProcedureTemplate,
    TaskCategory,
)
from tradeplan.core.service import PlannerService
from tradeplan.core.store import StoreGroup, create_store_group


@pytest.fixture
def webinar_template() -> ProcedureTemplate:
    """网络研讨会模板：策划 + 宣传 + 跟进三个阶段"""
    return ProcedureTemplate(
        id="tpl-webinar",
        name="Webinar Procedure",
        activity_type="webinar",
        phases=(
            ProcedurePhase(
                id="ph-plan",
                name="Planning",
                order=1,
                tasks=(
                    ProcedureTask(
                        id="t-speakers",
                        title="Confirm speakers",
                        category=TaskCategory.PARTICIPANTS,
                        due_offset=-21,
                        reminder_offsets=(7, 2),
                    ),
                    ProcedureTask(
                        id="t-approval",
                        title="Director approval",
                        category=TaskCategory.COMPLIANCE,
                        due_offset=-14,
                        reminder_offsets=(3,),
                        requires_approval=True,
                    ),
                ),
            ),
            ProcedurePhase(
                id="ph-promo",
                name="Promotion",
                order=2,
                tasks=(
                    ProcedureTask(
                        id="t-invite",
                        title="Send invitations",
                        category=TaskCategory.COMMUNICATIONS,
                        due_offset=-7,
                        reminder_offsets=(2,),
                    ),
                ),
            ),
            ProcedurePhase(
                id="ph-follow",
                name="Follow Up",
                order=3,
                tasks=(
                    ProcedureTask(
                        id="t-survey",
                        title="Send survey",
                        category=TaskCategory.FOLLOW_UP,
                        due_offset=3,
                        reminder_offsets=(1,),
                    ),
                ),
            ),
        ),
    )


@pytest_asyncio.fixture
async def store_group(tmp_path: Path) -> AsyncGenerator[StoreGroup, None]:
    """集成测试用 StoreGroup"""
    sg = await create_store_group(str(tmp_path / "sqlite" / "tradeplan.db"))
    yield sg
    await sg.conn.close()


@pytest_asyncio.fixture
async def service(store_group: StoreGroup, webinar_template: ProcedureTemplate) -> PlannerService:
    """已导入网络研讨会模板的 PlannerService"""
    await store_group.template_store.save_template(webinar_template)
    await store_group.conn.commit()
    return PlannerService(store_group)
