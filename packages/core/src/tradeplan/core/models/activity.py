"""Activity Domain Model

清单引擎只读取 id、name、start_date、status；
其余字段供宿主层关联模板与清单实例。
"""

from datetime import UTC, date, datetime

from pydantic import BaseModel, Field, field_validator

from .enums import ActivityCategory, ActivityStatus, get_activity_category


class Activity(BaseModel):
    """Activity 数据模型"""

    id: str = Field(description="活动 ID")
    name: str = Field(description="活动名称")
    activity_type: str = Field(default="", description="活动类型（内置或自定义类型 ID）")
    description: str = Field(default="", description="活动描述")
    status: ActivityStatus = Field(default=ActivityStatus.DRAFT, description="活动状态")
    start_date: date | None = Field(default=None, description="开始日期，驱动清单日期")
    end_date: date | None = Field(default=None, description="结束日期")
    lead_staff_id: str | None = Field(default=None, description="负责人 ID")
    procedure_template_id: str | None = Field(default=None, description="流程模板 ID")
    checklist_instance_id: str | None = Field(default=None, description="清单实例 ID")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="创建时间",
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="更新时间",
    )

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _empty_date_to_none(cls, value: object) -> object:
        # 宿主层表单未填写日期时传入空字符串
        if value == "":
            return None
        return value

    @property
    def category(self) -> ActivityCategory:
        return get_activity_category(self.activity_type)
