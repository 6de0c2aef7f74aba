"""Store Protocol 接口定义

定义 ActivityStore、TemplateStore、ChecklistStore 的抽象接口，
使用 Python Protocol 实现结构化子类型（duck typing）。
宿主层可以用任意键值存储替换 SQLite 实现。
"""

from typing import Protocol

from ..models.activity import Activity
from ..models.checklist import ChecklistInstance
from ..models.template import ProcedureTemplate


class ActivityStore(Protocol):
    """Activity 存储接口"""

    async def save_activity(self, activity: Activity) -> None:
        """写入或覆盖活动"""
        ...

    async def get_activity(self, activity_id: str) -> Activity | None:
        """根据 activity_id 查询活动"""
        ...

    async def list_activities(self) -> list[Activity]:
        """查询全部活动"""
        ...

    async def delete_activity(self, activity_id: str) -> bool:
        """删除活动"""
        ...


class TemplateStore(Protocol):
    """ProcedureTemplate 存储接口（只读数据，外部导入）"""

    async def save_template(self, template: ProcedureTemplate) -> None:
        """写入或覆盖模板"""
        ...

    async def get_template(self, template_id: str) -> ProcedureTemplate | None:
        """根据 template_id 查询模板"""
        ...

    async def list_templates(self, activity_type: str | None = None) -> list[ProcedureTemplate]:
        """查询模板列表，支持按活动类型筛选"""
        ...


class ChecklistStore(Protocol):
    """ChecklistInstance 存储接口

    清单项不单独删除，只随整份清单删除。
    """

    async def save_checklist(self, checklist: ChecklistInstance) -> None:
        """写入或覆盖清单"""
        ...

    async def get_checklist(self, checklist_id: str) -> ChecklistInstance | None:
        """根据 checklist_id 查询清单"""
        ...

    async def get_checklist_for_activity(self, activity_id: str) -> ChecklistInstance | None:
        """查询活动对应的清单"""
        ...

    async def list_checklists(self) -> list[ChecklistInstance]:
        """查询全部清单"""
        ...

    async def delete_checklist_for_activity(self, activity_id: str) -> bool:
        """删除活动对应的清单"""
        ...
