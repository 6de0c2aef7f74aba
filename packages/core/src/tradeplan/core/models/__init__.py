"""tradeplan Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .activity import Activity
from .checklist import (
    ChecklistInstance,
    ChecklistItem,
    ChecklistItemUpdate,
    ChecklistNote,
)
from .enums import (
    BUILT_IN_ACTIVITY_TYPES,
    DONE_STATUSES,
    ActivityCategory,
    ActivityStatus,
    ApprovalStatus,
    ChecklistItemStatus,
    DueDateStatus,
    PhaseStatus,
    ReminderType,
    TaskCategory,
    get_activity_category,
    is_done,
)
from .reminder import Reminder
from .template import ProcedurePhase, ProcedureTask, ProcedureTemplate

__all__ = [
    # 枚举
    "ActivityCategory",
    "ActivityStatus",
    "TaskCategory",
    "ChecklistItemStatus",
    "ApprovalStatus",
    "PhaseStatus",
    "ReminderType",
    "DueDateStatus",
    # 完成态
    "DONE_STATUSES",
    "is_done",
    "BUILT_IN_ACTIVITY_TYPES",
    "get_activity_category",
    # Template
    "ProcedureTemplate",
    "ProcedurePhase",
    "ProcedureTask",
    # Activity
    "Activity",
    # Checklist
    "ChecklistInstance",
    "ChecklistItem",
    "ChecklistItemUpdate",
    "ChecklistNote",
    # Reminder
    "Reminder",
]
