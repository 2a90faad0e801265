"""
仪表盘数据模型
"""

from decimal import Decimal
from pydantic import BaseModel, Field

from drawledger.models.project import Project
from drawledger.models.draw_request import DrawRequest


class Metrics(BaseModel):
    """组合级指标"""
    total_budget: Decimal = Decimal("0")
    active_project_count: int = 0
    pending_approval_count: int = 0
    per_project_spend: dict[str, Decimal] = Field(
        default_factory=dict, description="项目 ID → 付款申请金额合计"
    )


class BudgetChartRow(BaseModel):
    """预算 / 支出对比图的一行数据"""
    name: str
    budget: Decimal
    spent: Decimal


class Dashboard(BaseModel):
    """仪表盘完整数据"""
    projects: list[Project] = Field(default_factory=list)
    draw_requests: list[DrawRequest] = Field(default_factory=list)
    metrics: Metrics = Field(default_factory=Metrics)
    chart: list[BudgetChartRow] = Field(default_factory=list)
