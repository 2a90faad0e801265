"""
项目数据模型
"""

from decimal import Decimal
from pydantic import AliasChoices, BaseModel, Field, field_validator
from typing import Optional, Literal
from datetime import datetime

ProjectStatus = Literal["Not Started", "Active", "Delayed", "Completed"]

STATUS_NOT_STARTED = "Not Started"
STATUS_ACTIVE = "Active"

UNNAMED_PROJECT = "Unnamed Project"


class ProjectCreate(BaseModel):
    """创建项目的请求体（对应“新建项目”表单）"""
    name: str = Field(..., min_length=1, max_length=200, description="项目名称")
    total_budget: Optional[Decimal] = Field(None, ge=0, description="项目总预算")
    status: ProjectStatus = Field(STATUS_NOT_STARTED, description="项目状态")

    @field_validator("total_budget", mode="before")
    @classmethod
    def blank_budget_is_none(cls, value):
        # 表单中未填写的数字输入框提交为空字符串
        if isinstance(value, str) and not value.strip():
            return None
        return value


class Project(BaseModel):
    """项目响应模型"""
    id: str = Field(..., validation_alias=AliasChoices("id", "_id"))
    name: Optional[str] = None
    description: Optional[str] = None
    total_budget: Optional[Decimal] = None
    status: ProjectStatus = STATUS_NOT_STARTED
    created_at: Optional[datetime] = None

    model_config = {"populate_by_name": True}

    @field_validator("status", mode="before")
    @classmethod
    def missing_status_is_not_started(cls, value):
        return STATUS_NOT_STARTED if value is None else value

    @property
    def display_name(self) -> str:
        return self.name or UNNAMED_PROJECT
