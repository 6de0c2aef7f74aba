"""提醒推导单元测试

测试内容：
1. 单任务端到端场景（提醒日、截止日、逾期后）
2. 确定性 ID 与幂等
3. 完成态跳过、接收人、多条提醒
4. 已读/已忽略标记按 ID 合并
"""

from datetime import UTC, date, datetime

import pytest
from tradeplan.core.generator import generate_checklist
from tradeplan.core.models import (
    Activity,
    ChecklistItemStatus,
    ProcedurePhase,
    ProcedureTask,
    ProcedureTemplate,
    ReminderType,
    TaskCategory,
)
from tradeplan.core.reminders import (
    derive_all_reminders,
    derive_reminders,
    merge_reminder_state,
    unread_count,
)

NOW = datetime(2025, 3, 1, tzinfo=UTC)


@pytest.fixture
def activity() -> Activity:
    return Activity(id="act-e2e", name="Export Webinar", start_date=date(2025, 3, 1))


@pytest.fixture
def template() -> ProcedureTemplate:
    """一个阶段一个任务：dueOffset=5，reminderOffsets=[2]"""
    return ProcedureTemplate(
        id="tpl-e2e",
        name="E2E",
        activity_type="webinar",
        phases=(
            ProcedurePhase(
                id="p1",
                name="Prep",
                tasks=(
                    ProcedureTask(
                        id="t1",
                        title="Confirm speakers",
                        category=TaskCategory.PARTICIPANTS,
                        due_offset=5,
                        reminder_offsets=(2,),
                    ),
                ),
            ),
        ),
    )


@pytest.fixture
def checklist(activity, template):
    return generate_checklist(activity, template, now=NOW)


class TestEndToEndScenario:
    """start 2025-03-01，due 2025-03-06，提醒日 2025-03-04"""

    def test_generated_dates(self, checklist):
        item = checklist.items[0]
        assert item.due_date == date(2025, 3, 6)
        assert item.reminder_dates == [date(2025, 3, 4)]

    def test_on_reminder_date(self, checklist, activity):
        reminders = derive_reminders(checklist, activity, today=date(2025, 3, 4), now=NOW)
        assert len(reminders) == 1
        reminder = reminders[0]
        item_id = checklist.items[0].id
        assert reminder.type == ReminderType.TASK_DUE
        assert reminder.id == f"upcoming-{item_id}-2025-03-04"
        assert reminder.title == "Task Due Soon"
        assert reminder.message == '"Confirm speakers" for Export Webinar is due in 2 days'
        assert reminder.scheduled_for == date(2025, 3, 4)
        assert reminder.activity_id == "act-e2e"
        assert reminder.checklist_item_id == item_id

    def test_on_due_date_nothing_fires(self, checklist, activity):
        """截止日当天既不逾期，也不在 reminder_dates 中"""
        assert derive_reminders(checklist, activity, today=date(2025, 3, 6), now=NOW) == []

    def test_day_after_reminder_nothing_fires(self, checklist, activity):
        assert derive_reminders(checklist, activity, today=date(2025, 3, 5), now=NOW) == []

    def test_two_days_overdue(self, checklist, activity):
        reminders = derive_reminders(checklist, activity, today=date(2025, 3, 8), now=NOW)
        assert len(reminders) == 1
        reminder = reminders[0]
        assert reminder.type == ReminderType.TASK_OVERDUE
        assert reminder.id == f"overdue-{checklist.items[0].id}"
        assert reminder.title == "Task Overdue"
        assert reminder.message == '"Confirm speakers" for Export Webinar was due 2 days ago'
        assert reminder.scheduled_for == date(2025, 3, 8)

    def test_one_day_overdue_singular(self, checklist, activity):
        reminders = derive_reminders(checklist, activity, today=date(2025, 3, 7), now=NOW)
        assert reminders[0].message.endswith("was due 1 day ago")


class TestDeriveReminders:
    """derive_reminders 行为规则"""

    def test_idempotent(self, checklist, activity):
        today = date(2025, 3, 4)
        first = derive_reminders(checklist, activity, today=today, now=NOW)
        second = derive_reminders(checklist, activity, today=today, now=NOW)
        assert first == second

    @pytest.mark.parametrize(
        "status", [ChecklistItemStatus.COMPLETED, ChecklistItemStatus.SKIPPED]
    )
    def test_done_items_skipped(self, checklist, activity, status):
        done = checklist.model_copy(
            update={"items": [checklist.items[0].model_copy(update={"status": status})]}
        )
        assert derive_reminders(done, activity, today=date(2025, 3, 20), now=NOW) == []
        assert derive_reminders(done, activity, today=date(2025, 3, 4), now=NOW) == []

    def test_blocked_items_still_remind(self, checklist, activity):
        blocked = checklist.model_copy(
            update={
                "items": [
                    checklist.items[0].model_copy(
                        update={"status": ChecklistItemStatus.BLOCKED}
                    )
                ]
            }
        )
        reminders = derive_reminders(blocked, activity, today=date(2025, 3, 8), now=NOW)
        assert [r.type for r in reminders] == [ReminderType.TASK_OVERDUE]

    def test_recipient_is_assignee(self, checklist, activity):
        assigned = checklist.model_copy(
            update={
                "items": [checklist.items[0].model_copy(update={"assignee_id": "staff-7"})]
            }
        )
        reminders = derive_reminders(assigned, activity, today=date(2025, 3, 4), now=NOW)
        assert reminders[0].recipient_ids == ["staff-7"]

    def test_no_assignee_means_no_recipients(self, checklist, activity):
        reminders = derive_reminders(checklist, activity, today=date(2025, 3, 4), now=NOW)
        assert reminders[0].recipient_ids == []

    def test_multiple_items_fire_same_day(self, activity):
        """同一天多个清单项的提醒日命中，按清单顺序输出"""
        template = ProcedureTemplate(
            id="tpl",
            name="T",
            activity_type="webinar",
            phases=(
                ProcedurePhase(
                    id="p1",
                    name="P",
                    tasks=(
                        # offset 0：截止日当天提醒
                        ProcedureTask(
                            id="t1",
                            title="Book hall",
                            category=TaskCategory.BUDGET,
                            due_offset=0,
                            reminder_offsets=(0,),
                        ),
                        ProcedureTask(
                            id="t2",
                            title="Due later",
                            category=TaskCategory.BUDGET,
                            due_offset=3,
                            reminder_offsets=(3, 1),
                        ),
                    ),
                ),
            ),
        )
        checklist = generate_checklist(activity, template, now=NOW)
        reminders = derive_reminders(checklist, activity, today=date(2025, 3, 1), now=NOW)
        # t1：截止日当天 reminder，due in 0 days；t2：3 天前提醒
        assert [r.type for r in reminders] == [ReminderType.TASK_DUE, ReminderType.TASK_DUE]
        assert reminders[0].message.endswith("is due in 0 days")
        assert reminders[1].message.endswith("is due in 3 days")

    def test_flags_reset_on_fresh_derivation(self, checklist, activity):
        reminders = derive_reminders(checklist, activity, today=date(2025, 3, 8), now=NOW)
        assert all(not r.is_read and not r.is_dismissed for r in reminders)


class TestDeriveAllReminders:
    """derive_all_reminders"""

    def test_skips_checklist_without_activity(self, checklist, activity):
        orphan = checklist.model_copy(update={"id": "c-orphan", "activity_id": "gone"})
        reminders = derive_all_reminders(
            [checklist, orphan], [activity], today=date(2025, 3, 8), now=NOW
        )
        assert len(reminders) == 1
        assert reminders[0].activity_id == "act-e2e"


class TestMergeReminderState:
    """已读/已忽略标记合并"""

    def test_flags_carried_over_by_id(self, checklist, activity):
        today = date(2025, 3, 8)
        previous = derive_reminders(checklist, activity, today=today, now=NOW)
        previous = [previous[0].model_copy(update={"is_read": True, "is_dismissed": True})]

        fresh = derive_reminders(checklist, activity, today=today, now=NOW)
        merged = merge_reminder_state(fresh, previous)
        assert merged[0].is_read is True
        assert merged[0].is_dismissed is True
        assert unread_count(merged) == 0

    def test_stale_reminders_dropped(self, checklist, activity):
        previous = derive_reminders(checklist, activity, today=date(2025, 3, 4), now=NOW)
        fresh = derive_reminders(checklist, activity, today=date(2025, 3, 8), now=NOW)
        merged = merge_reminder_state(fresh, previous)
        assert [r.id for r in merged] == [f"overdue-{checklist.items[0].id}"]
        assert unread_count(merged) == 1
