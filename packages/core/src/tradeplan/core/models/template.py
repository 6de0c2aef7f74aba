"""ProcedureTemplate Domain Model

流程模板由外部提供且不可变：phases -> tasks 两层树，
每个 task 的日期以相对活动 start_date 的天数偏移表示。
模板内 phase ID 唯一、task ID 唯一。
"""

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .enums import TaskCategory


class ProcedureTask(BaseModel):
    """流程任务"""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="任务 ID，模板内唯一")
    title: str = Field(description="任务标题")
    description: str = Field(default="", description="任务描述")
    order: int = Field(default=0, description="阶段内排序")
    category: TaskCategory = Field(description="任务分类")
    due_offset: int = Field(description="截止日期相对活动开始日的天数，可为负")
    reminder_offsets: tuple[int, ...] = Field(
        default=(),
        description="截止日期前多少天提醒，均为非负整数",
    )
    is_required: bool = Field(default=True, description="是否必做")
    requires_approval: bool = Field(default=False, description="是否需要审批")
    approver_role: str | None = Field(default=None, description="审批角色")
    depends_on_task_ids: tuple[str, ...] = Field(default=(), description="前置任务 ID")
    estimated_hours: float | None = Field(default=None, description="预估工时")
    instructions: str | None = Field(default=None, description="操作说明")

    @field_validator("reminder_offsets")
    @classmethod
    def _check_reminder_offsets(cls, value: tuple[int, ...]) -> tuple[int, ...]:
        if any(offset < 0 for offset in value):
            raise ValueError(f"reminder_offsets 必须为非负整数: {list(value)}")
        return value


class ProcedurePhase(BaseModel):
    """流程阶段"""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="阶段 ID，模板内唯一")
    name: str = Field(description="阶段名称")
    description: str = Field(default="", description="阶段描述")
    order: int = Field(default=0, description="模板内排序")
    start_offset: int = Field(default=0, description="阶段开始相对活动开始日的天数")
    end_offset: int = Field(default=0, description="阶段结束相对活动开始日的天数")
    tasks: tuple[ProcedureTask, ...] = Field(default=(), description="有序任务列表")


class ProcedureTemplate(BaseModel):
    """ProcedureTemplate 数据模型

    外部按活动类型选定后传入，清单生成/重算都只读它。
    phases 与 tasks 的顺序即清单项顺序，不会重新排序。
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="模板 ID")
    name: str = Field(description="模板名称")
    description: str = Field(default="", description="模板描述")
    activity_type: str = Field(description="适用的活动类型")
    version: str = Field(default="1.0", description="模板版本")
    is_active: bool = Field(default=True, description="是否启用")
    phases: tuple[ProcedurePhase, ...] = Field(default=(), description="有序阶段列表")

    @model_validator(mode="after")
    def _check_unique_ids(self) -> "ProcedureTemplate":
        phase_ids: set[str] = set()
        task_ids: set[str] = set()
        for phase in self.phases:
            if phase.id in phase_ids:
                raise ValueError(f"模板 {self.id} 中 phase ID 重复: {phase.id}")
            phase_ids.add(phase.id)
            for task in phase.tasks:
                if task.id in task_ids:
                    raise ValueError(f"模板 {self.id} 中 task ID 重复: {task.id}")
                task_ids.add(task.id)
        return self

    def iter_tasks(self) -> Iterator[tuple[ProcedurePhase, ProcedureTask]]:
        """按模板顺序遍历 (phase, task)"""
        for phase in self.phases:
            for task in phase.tasks:
                yield phase, task

    def task_index(self) -> dict[str, ProcedureTask]:
        """task_id -> ProcedureTask 查找表"""
        return {task.id: task for _, task in self.iter_tasks()}

    def get_phase(self, phase_id: str) -> ProcedurePhase | None:
        """按 ID 查找阶段"""
        for phase in self.phases:
            if phase.id == phase_id:
                return phase
        return None

    @property
    def task_count(self) -> int:
        return sum(len(phase.tasks) for phase in self.phases)
