"""枚举定义

包含活动状态/分类、清单项状态、任务分类、阶段状态、提醒类型等枚举，
以及 DONE_STATUSES 完成态集合和内置活动类型到分类的映射。
"""

from enum import StrEnum


class ActivityCategory(StrEnum):
    """活动大类"""

    TRADE = "trade"
    EDUCATIONAL = "educational"
    CONSULTATION = "consultation"
    OTHER = "other"


class ActivityStatus(StrEnum):
    """活动状态"""

    DRAFT = "draft"
    PLANNING = "planning"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    POSTPONED = "postponed"


class TaskCategory(StrEnum):
    """流程任务分类"""

    ADMINISTRATIVE = "administrative"
    LOGISTICS = "logistics"
    COMMUNICATIONS = "communications"
    BUDGET = "budget"
    PARTICIPANTS = "participants"
    MATERIALS = "materials"
    COMPLIANCE = "compliance"
    FOLLOW_UP = "follow_up"


class ChecklistItemStatus(StrEnum):
    """清单项状态"""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    BLOCKED = "blocked"
    SKIPPED = "skipped"


class ApprovalStatus(StrEnum):
    """审批状态（仅 requires_approval 的清单项使用）"""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PhaseStatus(StrEnum):
    """阶段完成状态（由阶段内清单项状态推导）"""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class ReminderType(StrEnum):
    """提醒类型"""

    TASK_DUE = "task_due"
    TASK_OVERDUE = "task_overdue"
    # 预留：当前推导逻辑不产生以下两类
    ACTIVITY_UPCOMING = "activity_upcoming"
    CUSTOM = "custom"


class DueDateStatus(StrEnum):
    """截止日期相对今天的展示分类"""

    OVERDUE = "overdue"
    TODAY = "today"
    UPCOMING = "upcoming"
    FUTURE = "future"


# 视为"已完成"的清单项状态：不计逾期、不产生提醒
DONE_STATUSES: frozenset[ChecklistItemStatus] = frozenset(
    {ChecklistItemStatus.COMPLETED, ChecklistItemStatus.SKIPPED}
)

# 内置活动类型 -> 活动大类，自定义类型不在此表内
BUILT_IN_ACTIVITY_TYPES: dict[str, ActivityCategory] = {
    "outbound_trade_mission": ActivityCategory.TRADE,
    "inbound_trade_mission": ActivityCategory.TRADE,
    "trade_show": ActivityCategory.TRADE,
    "webinar": ActivityCategory.EDUCATIONAL,
    "seminar": ActivityCategory.EDUCATIONAL,
    "seminar_series": ActivityCategory.EDUCATIONAL,
    "consultation": ActivityCategory.CONSULTATION,
}


def is_done(status: ChecklistItemStatus) -> bool:
    """清单项是否处于完成态（completed 或 skipped）"""
    return status in DONE_STATUSES


def get_activity_category(activity_type: str) -> ActivityCategory:
    """获取活动类型所属大类，未知/自定义类型归为 other"""
    return BUILT_IN_ACTIVITY_TYPES.get(activity_type, ActivityCategory.OTHER)
