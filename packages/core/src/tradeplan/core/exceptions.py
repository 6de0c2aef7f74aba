"""Planner 异常体系

所有失败均为本地前置条件违反，同步抛给调用方，不做重试。
"""


class PlannerError(Exception):
    """tradeplan 基础异常"""

    def __init__(self, message: str, recoverable: bool = False) -> None:
        """
        Args:
            message: 错误描述
            recoverable: 调用方修正输入后是否可重试
        """
        super().__init__(message)
        self.recoverable = recoverable


class InvalidDateError(PlannerError, ValueError):
    """日期为空或无法解析为 yyyy-MM-dd"""

    def __init__(self, value: object, message: str | None = None) -> None:
        super().__init__(
            message or f"无效日期: {value!r}（期望 yyyy-MM-dd）",
            recoverable=True,
        )
        self.value = value


class InvalidActivityDateError(InvalidDateError):
    """活动缺少 start_date，无法计算清单日期"""

    def __init__(self, activity_id: str, value: object = None) -> None:
        super().__init__(
            value,
            f"活动 {activity_id} 缺少有效的 start_date，无法生成清单",
        )
        self.activity_id = activity_id


class NotFoundError(PlannerError):
    """按 ID 查询的实体不存在"""

    entity: str = "entity"

    def __init__(self, entity_id: str) -> None:
        super().__init__(f"{self.entity} 不存在: {entity_id}")
        self.entity_id = entity_id


class ActivityNotFoundError(NotFoundError):
    entity = "activity"


class TemplateNotFoundError(NotFoundError):
    entity = "procedure template"


class ChecklistNotFoundError(NotFoundError):
    entity = "checklist"


class ChecklistItemNotFoundError(NotFoundError):
    entity = "checklist item"
