"""Reminder Domain Model

提醒是临时数据：每次活动或清单变化都从当前状态整体重新推导，
不作为独立状态持久化。ID 是确定性的，便于下游按 ID 去重。
"""

from datetime import UTC, date, datetime

from pydantic import BaseModel, Field

from .enums import ReminderType


class Reminder(BaseModel):
    """Reminder 数据模型"""

    id: str = Field(description="确定性 ID，如 overdue-<item_id>")
    type: ReminderType = Field(description="提醒类型")
    activity_id: str = Field(description="关联活动 ID")
    checklist_item_id: str | None = Field(default=None, description="关联清单项 ID")
    title: str = Field(description="提醒标题")
    message: str = Field(description="提醒正文")
    scheduled_for: date = Field(description="计划提醒日期")
    is_read: bool = Field(default=False)
    is_dismissed: bool = Field(default=False)
    recipient_ids: list[str] = Field(default_factory=list, description="接收人 ID")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="生成时间",
    )
