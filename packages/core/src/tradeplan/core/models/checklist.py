"""ChecklistInstance / ChecklistItem Domain Model

清单实例是流程模板针对某个活动的物化结果。
清单项是生成时刻的任务快照，task_id / phase_id 只是查找用的弱引用。
completed_count / overdue_count 是缓存，只由 rollup 重算，不单独修改。
"""

from datetime import UTC, date, datetime

from pydantic import BaseModel, Field, field_validator

from .enums import ApprovalStatus, ChecklistItemStatus, TaskCategory
from .template import ProcedurePhase, ProcedureTask


class ChecklistNote(BaseModel):
    """清单项备注"""

    id: str = Field(description="备注 ID")
    content: str = Field(description="备注内容")
    author_id: str = Field(description="作者 ID")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="创建时间",
    )


class ChecklistItem(BaseModel):
    """ChecklistItem 数据模型

    由生成器创建，之后只通过状态变更补丁修改；
    不会单独删除，仅随所属清单一起删除。
    """

    id: str = Field(description="清单项 ID，独立于 task_id")
    task_id: str = Field(description="对应的 ProcedureTask ID（弱引用）")
    phase_id: str = Field(description="对应的 ProcedurePhase ID（弱引用）")
    title: str = Field(description="任务标题快照")
    description: str = Field(default="", description="任务描述快照")
    category: TaskCategory = Field(description="任务分类快照")
    is_required: bool = Field(default=True)
    requires_approval: bool = Field(default=False)
    status: ChecklistItemStatus = Field(
        default=ChecklistItemStatus.NOT_STARTED,
        description="清单项状态",
    )
    due_date: date = Field(description="截止日期")
    reminder_dates: list[date] = Field(default_factory=list, description="提醒日期")
    assignee_id: str | None = Field(default=None, description="负责人 ID")
    completed_at: datetime | None = Field(default=None, description="完成时间")
    completed_by_id: str | None = Field(default=None, description="完成人 ID")
    approval_status: ApprovalStatus | None = Field(default=None, description="审批状态")
    approved_by_id: str | None = Field(default=None, description="审批人 ID")
    approved_at: datetime | None = Field(default=None, description="审批时间")
    notes: list[ChecklistNote] = Field(default_factory=list, description="备注列表")
    attachments: list[str] = Field(default_factory=list, description="附件引用")

    @classmethod
    def from_task(
        cls,
        item_id: str,
        phase: ProcedurePhase,
        task: ProcedureTask,
        due_date: date,
        reminder_dates: list[date],
    ) -> "ChecklistItem":
        """从流程任务构造全新的清单项，所有字段显式赋值"""
        return cls(
            id=item_id,
            task_id=task.id,
            phase_id=phase.id,
            title=task.title,
            description=task.description,
            category=task.category,
            is_required=task.is_required,
            requires_approval=task.requires_approval,
            status=ChecklistItemStatus.NOT_STARTED,
            due_date=due_date,
            reminder_dates=reminder_dates,
            assignee_id=None,
            completed_at=None,
            completed_by_id=None,
            approval_status=None,
            approved_by_id=None,
            approved_at=None,
            notes=[],
            attachments=[],
        )


class ChecklistInstance(BaseModel):
    """ChecklistInstance 数据模型

    total_count 恒等于 len(items)；
    completed_count / overdue_count 反映最近一次 rollup 时的状态。
    """

    id: str = Field(description="清单 ID")
    activity_id: str = Field(description="所属活动 ID")
    procedure_template_id: str = Field(description="来源模板 ID")
    items: list[ChecklistItem] = Field(default_factory=list, description="有序清单项")
    completed_count: int = Field(default=0, description="已完成数（缓存）")
    total_count: int = Field(default=0, description="清单项总数")
    overdue_count: int = Field(default=0, description="逾期数（缓存）")
    created_at: datetime = Field(description="创建时间")
    updated_at: datetime = Field(description="更新时间")

    def get_item(self, item_id: str) -> ChecklistItem | None:
        """按 ID 查找清单项"""
        for item in self.items:
            if item.id == item_id:
                return item
        return None


class ChecklistItemUpdate(BaseModel):
    """清单项局部更新补丁

    只应用显式设置过的字段（exclude_unset），
    未出现的字段保持原值。显式 None 表示清空可空字段；
    status / attachments 在清单项上不可为空，显式 None 直接拒绝。
    """

    status: ChecklistItemStatus | None = None
    assignee_id: str | None = None
    completed_at: datetime | None = None
    completed_by_id: str | None = None
    approval_status: ApprovalStatus | None = None
    approved_by_id: str | None = None
    approved_at: datetime | None = None
    attachments: list[str] | None = None

    @field_validator("status", "attachments")
    @classmethod
    def _reject_explicit_none(cls, value: object) -> object:
        # 未传入时走默认值，不触发校验
        if value is None:
            raise ValueError("不可为空的字段不能显式设为 None")
        return value

    def changes(self) -> dict:
        """返回显式设置过的字段"""
        return self.model_dump(exclude_unset=True)
