"""
付款申请（Draw Request）数据模型
存储在 payments 表中
"""

from decimal import Decimal
from pydantic import AliasChoices, BaseModel, Field, field_serializer, field_validator
from typing import Optional, Literal
from datetime import datetime

DrawStatus = Literal["Pending", "Approved", "Rejected"]

STATUS_PENDING = "Pending"
STATUS_APPROVED = "Approved"
STATUS_REJECTED = "Rejected"

UNKNOWN_PROJECT = "Unknown Project"


class DrawRequestCreate(BaseModel):
    """提交付款申请的请求体（对应“提交付款申请”表单）"""
    project_id: str = Field(..., min_length=1, description="所属项目 ID")
    description: Optional[str] = Field(None, description="申请说明")
    amount: Optional[Decimal] = Field(None, ge=0, description="申请金额")

    @field_validator("description", "amount", mode="before")
    @classmethod
    def blank_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class DrawRequest(BaseModel):
    """付款申请响应模型"""
    id: str = Field(..., validation_alias=AliasChoices("id", "_id"))
    project_id: str
    description: Optional[str] = None
    amount: Optional[Decimal] = None
    status: DrawStatus = STATUS_PENDING
    created_at: Optional[datetime] = None
    project_name: Optional[str] = Field(None, description="所属项目名称（联表读取）")

    model_config = {"populate_by_name": True}

    @field_validator("status", mode="before")
    @classmethod
    def missing_status_is_pending(cls, value):
        return STATUS_PENDING if value is None else value

    @field_serializer("project_name", when_used="json")
    def project_name_or_unknown(self, value: Optional[str]) -> str:
        # 联表未取到项目（已删除或无权限）时按“未知项目”展示
        return value or UNKNOWN_PROJECT
