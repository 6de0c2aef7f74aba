"""PlannerService -- 活动/清单/提醒业务逻辑

宿主层的编排入口：
1. 创建活动时按模板生成清单，活动与清单单事务写入
2. 活动 start_date 变化时重算清单日期并 rollup
3. 清单项补丁更新后 rollup 并持久化
4. 任何活动或清单变化后整体重新推导提醒
"""

from datetime import date

import structlog
from ulid import ULID

from .dates import resolve_today, utc_now
from .exceptions import (
    ActivityNotFoundError,
    ChecklistItemNotFoundError,
    ChecklistNotFoundError,
    TemplateNotFoundError,
)
from .generator import generate_checklist
from .models import (
    Activity,
    ActivityStatus,
    ApprovalStatus,
    ChecklistInstance,
    ChecklistItem,
    ChecklistItemStatus,
    ChecklistItemUpdate,
    ChecklistNote,
    ProcedureTemplate,
    Reminder,
)
from .recalculator import recalculate_checklist
from .reminders import derive_all_reminders, merge_reminder_state, unread_count
from .rollup import update_counts
from .store import StoreGroup
from .store.transaction import delete_activity_and_checklist, save_activity_and_checklist

log = structlog.get_logger()


class PlannerService:
    """活动计划业务服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group
        self._reminders: list[Reminder] = []

    @property
    def reminders(self) -> list[Reminder]:
        """最近一次推导出的提醒列表"""
        return list(self._reminders)

    @property
    def unread_reminder_count(self) -> int:
        return unread_count(self._reminders)

    # ---- 模板 ----

    async def get_template(self, template_id: str) -> ProcedureTemplate:
        """Raises: TemplateNotFoundError"""
        template = await self._stores.template_store.get_template(template_id)
        if template is None:
            raise TemplateNotFoundError(template_id)
        return template

    async def _select_template(self, activity: Activity) -> ProcedureTemplate | None:
        """按 procedure_template_id 选模板，找不到时回退到该活动类型的第一个启用模板"""
        if activity.procedure_template_id:
            template = await self._stores.template_store.get_template(
                activity.procedure_template_id
            )
            if template is not None:
                return template
            log.warning(
                "procedure_template_missing",
                activity_id=activity.id,
                template_id=activity.procedure_template_id,
            )

        if not activity.activity_type:
            return None
        candidates = await self._stores.template_store.list_templates(activity.activity_type)
        for template in candidates:
            if template.is_active:
                return template
        return None

    # ---- 活动 ----

    async def create_activity(
        self,
        activity: Activity,
        *,
        today: date | None = None,
    ) -> tuple[Activity, ChecklistInstance | None]:
        """创建活动，有模板且有 start_date 时同时生成清单

        Returns:
            (activity, checklist) -- 未生成清单时 checklist 为 None
        """
        checklist: ChecklistInstance | None = None
        template = await self._select_template(activity)

        if template is not None and activity.start_date is not None:
            checklist = update_counts(
                generate_checklist(activity, template),
                today=resolve_today(today),
            )
            activity = activity.model_copy(
                update={
                    "procedure_template_id": template.id,
                    "checklist_instance_id": checklist.id,
                }
            )

        await save_activity_and_checklist(
            self._stores.conn,
            self._stores.activity_store,
            self._stores.checklist_store,
            activity,
            checklist,
        )
        log.info(
            "activity_created",
            activity_id=activity.id,
            checklist_id=checklist.id if checklist else None,
        )

        await self.refresh_reminders(today=today)
        return activity, checklist

    async def update_activity(
        self,
        activity: Activity,
        *,
        today: date | None = None,
    ) -> tuple[Activity, ChecklistInstance | None]:
        """更新活动；start_date 变化时平移已有清单的日期

        传入活动未携带模板/清单关联时沿用已存储的关联，created_at 始终沿用。

        Raises:
            ActivityNotFoundError: 活动不存在
        """
        existing = await self._stores.activity_store.get_activity(activity.id)
        if existing is None:
            raise ActivityNotFoundError(activity.id)

        activity = activity.model_copy(
            update={
                "procedure_template_id": (
                    activity.procedure_template_id or existing.procedure_template_id
                ),
                "checklist_instance_id": (
                    activity.checklist_instance_id or existing.checklist_instance_id
                ),
                "created_at": existing.created_at,
                "updated_at": utc_now(),
            }
        )
        checklist = await self._stores.checklist_store.get_checklist_for_activity(activity.id)

        if checklist is None:
            # 之前缺少模板或 start_date，现在可能已经可以生成
            template = await self._select_template(activity)
            if template is not None and activity.start_date is not None:
                checklist = update_counts(
                    generate_checklist(activity, template),
                    today=resolve_today(today),
                )
                activity = activity.model_copy(
                    update={
                        "procedure_template_id": template.id,
                        "checklist_instance_id": checklist.id,
                    }
                )
        elif activity.start_date != existing.start_date:
            checklist = await self._shift_checklist(checklist, activity, today=today)

        await save_activity_and_checklist(
            self._stores.conn,
            self._stores.activity_store,
            self._stores.checklist_store,
            activity,
            checklist,
        )
        await self.refresh_reminders(today=today)
        return activity, checklist

    async def _shift_checklist(
        self,
        checklist: ChecklistInstance,
        activity: Activity,
        *,
        today: date | None = None,
    ) -> ChecklistInstance:
        """start_date 变化后重算清单；缺少日期或模板时保持原样"""
        if activity.start_date is None:
            log.warning(
                "checklist_recalculation_skipped",
                activity_id=activity.id,
                reason="missing_start_date",
            )
            return checklist

        try:
            template = await self.get_template(checklist.procedure_template_id)
        except TemplateNotFoundError:
            log.warning(
                "checklist_recalculation_skipped",
                activity_id=activity.id,
                reason="template_not_found",
                template_id=checklist.procedure_template_id,
            )
            return checklist

        return update_counts(
            recalculate_checklist(checklist, activity, template),
            today=resolve_today(today),
        )

    async def duplicate_activity(
        self,
        activity_id: str,
        *,
        today: date | None = None,
    ) -> Activity:
        """复制活动为新的草稿

        副本清空开始/结束日期，因此不会生成清单；
        设置 start_date 后经 update_activity 生成。

        Raises:
            ActivityNotFoundError: 活动不存在
        """
        source = await self._stores.activity_store.get_activity(activity_id)
        if source is None:
            raise ActivityNotFoundError(activity_id)

        now = utc_now()
        copy = source.model_copy(
            update={
                "id": str(ULID()),
                "name": f"{source.name} (Copy)",
                "status": ActivityStatus.DRAFT,
                "start_date": None,
                "end_date": None,
                "checklist_instance_id": None,
                "created_at": now,
                "updated_at": now,
            }
        )
        copy, _ = await self.create_activity(copy, today=today)
        log.info("activity_duplicated", source_id=activity_id, activity_id=copy.id)
        return copy

    async def delete_activity(self, activity_id: str, *, today: date | None = None) -> None:
        """删除活动及其清单

        Raises:
            ActivityNotFoundError: 活动不存在
        """
        deleted = await delete_activity_and_checklist(
            self._stores.conn,
            self._stores.activity_store,
            self._stores.checklist_store,
            activity_id,
        )
        if not deleted:
            raise ActivityNotFoundError(activity_id)

        log.info("activity_deleted", activity_id=activity_id)
        await self.refresh_reminders(today=today)

    # ---- 清单 ----

    async def get_checklist(self, checklist_id: str) -> ChecklistInstance:
        """Raises: ChecklistNotFoundError"""
        checklist = await self._stores.checklist_store.get_checklist(checklist_id)
        if checklist is None:
            raise ChecklistNotFoundError(checklist_id)
        return checklist

    async def get_checklist_for_activity(self, activity_id: str) -> ChecklistInstance | None:
        return await self._stores.checklist_store.get_checklist_for_activity(activity_id)

    async def update_checklist_item(
        self,
        checklist_id: str,
        item_id: str,
        update: ChecklistItemUpdate,
        *,
        actor_id: str | None = None,
        today: date | None = None,
    ) -> ChecklistInstance:
        """对清单项应用局部补丁，随后 rollup 并持久化

        状态流转规则:
            - 转为 completed 且补丁未给出 completed_at -> 记录当前时间和 actor_id
            - 从 completed 转为其他状态 -> 清除 completed_at / completed_by_id
            - approval_status 转为 approved 且未给出 approved_at -> 记录当前时间和 actor_id

        Raises:
            ChecklistNotFoundError: 清单不存在
            ChecklistItemNotFoundError: 清单项不存在
            pydantic.ValidationError: 合并后的清单项不合法，不会写库
        """
        checklist = await self.get_checklist(checklist_id)
        item = checklist.get_item(item_id)
        if item is None:
            raise ChecklistItemNotFoundError(item_id)

        changes = update.changes()
        now = utc_now()
        new_status = changes.get("status")

        if new_status is not None and new_status != item.status:
            if new_status == ChecklistItemStatus.COMPLETED:
                changes.setdefault("completed_at", now)
                changes.setdefault("completed_by_id", actor_id)
            elif item.status == ChecklistItemStatus.COMPLETED:
                changes.setdefault("completed_at", None)
                changes.setdefault("completed_by_id", None)

        if (
            changes.get("approval_status") == ApprovalStatus.APPROVED
            and item.approval_status != ApprovalStatus.APPROVED
        ):
            changes.setdefault("approved_at", now)
            changes.setdefault("approved_by_id", actor_id)

        # 重新校验合并结果，非法补丁在写库之前失败
        patched = ChecklistItem.model_validate({**item.model_dump(), **changes})
        updated = await self._replace_item(checklist, patched, today=today)
        log.info(
            "checklist_item_updated",
            checklist_id=checklist_id,
            item_id=item_id,
            fields=sorted(changes),
        )
        return updated

    async def add_item_note(
        self,
        checklist_id: str,
        item_id: str,
        content: str,
        author_id: str,
        *,
        today: date | None = None,
    ) -> ChecklistInstance:
        """给清单项追加一条备注

        Raises:
            ChecklistNotFoundError: 清单不存在
            ChecklistItemNotFoundError: 清单项不存在
        """
        checklist = await self.get_checklist(checklist_id)
        item = checklist.get_item(item_id)
        if item is None:
            raise ChecklistItemNotFoundError(item_id)

        note = ChecklistNote(
            id=str(ULID()),
            content=content,
            author_id=author_id,
            created_at=utc_now(),
        )
        return await self._replace_item(
            checklist,
            item.model_copy(update={"notes": [*item.notes, note]}),
            today=today,
        )

    async def _replace_item(
        self,
        checklist: ChecklistInstance,
        new_item: ChecklistItem,
        *,
        today: date | None = None,
    ) -> ChecklistInstance:
        items = [new_item if i.id == new_item.id else i for i in checklist.items]
        updated = update_counts(
            checklist.model_copy(update={"items": items}),
            today=resolve_today(today),
        )
        await self._stores.checklist_store.save_checklist(updated)
        await self._stores.conn.commit()
        await self.refresh_reminders(today=today)
        return updated

    async def recount_all(self, *, today: date | None = None) -> int:
        """对所有已存储清单重新 rollup，返回处理的清单数"""
        reference = resolve_today(today)
        checklists = await self._stores.checklist_store.list_checklists()
        for checklist in checklists:
            await self._stores.checklist_store.save_checklist(
                update_counts(checklist, today=reference)
            )
        await self._stores.conn.commit()
        log.info("checklists_recounted", checklist_count=len(checklists))
        return len(checklists)

    # ---- 提醒 ----

    async def refresh_reminders(self, *, today: date | None = None) -> list[Reminder]:
        """从全部活动和清单重新推导提醒，按 ID 保留已读/已忽略标记"""
        activities = await self._stores.activity_store.list_activities()
        checklists = await self._stores.checklist_store.list_checklists()
        fresh = derive_all_reminders(checklists, activities, today=resolve_today(today))
        self._reminders = merge_reminder_state(fresh, self._reminders)
        log.debug(
            "reminders_refreshed",
            reminder_count=len(self._reminders),
            unread=self.unread_reminder_count,
        )
        return self.reminders

    def mark_reminder_read(self, reminder_id: str) -> None:
        self._set_reminder_flag(reminder_id, "is_read")

    def dismiss_reminder(self, reminder_id: str) -> None:
        self._set_reminder_flag(reminder_id, "is_dismissed")

    def _set_reminder_flag(self, reminder_id: str, flag: str) -> None:
        # 未知 ID 静默忽略：提醒可能已在上一次推导中消失
        self._reminders = [
            r.model_copy(update={flag: True}) if r.id == reminder_id else r
            for r in self._reminders
        ]
