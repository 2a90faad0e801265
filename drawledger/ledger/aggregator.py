"""
账本汇总（Ledger Aggregator）
根据项目列表和付款申请列表计算仪表盘指标，纯计算、无 I/O
"""

from decimal import Decimal

from drawledger.models.project import Project, STATUS_ACTIVE
from drawledger.models.draw_request import DrawRequest, STATUS_PENDING
from drawledger.models.dashboard import Metrics, BudgetChartRow

ZERO = Decimal("0")


def compute_metrics(
    projects: list[Project], draws: list[DrawRequest]
) -> Metrics:
    """
    计算组合级指标

    Args:
        projects: 项目列表（调用方已按 id 去重）
        draws: 付款申请列表

    Returns:
        Metrics，其中 per_project_spend 覆盖每个输入项目（无申请时为 0）。
        不论审批状态，所有申请金额都计入支出；引用了未知项目的申请
        以其自身的 project_id 为键计入，保证支出总额守恒。
    """
    total_budget = ZERO
    active_count = 0
    spend: dict[str, Decimal] = {}

    for project in projects:
        total_budget += project.total_budget or ZERO
        if project.status == STATUS_ACTIVE:
            active_count += 1
        spend.setdefault(project.id, ZERO)

    pending_count = 0
    for draw in draws:
        if draw.status == STATUS_PENDING:
            pending_count += 1
        spend[draw.project_id] = spend.get(draw.project_id, ZERO) + (draw.amount or ZERO)

    return Metrics(
        total_budget=total_budget,
        active_project_count=active_count,
        pending_approval_count=pending_count,
        per_project_spend=spend,
    )


def build_chart_rows(
    projects: list[Project], metrics: Metrics
) -> list[BudgetChartRow]:
    """生成预算 / 支出对比图的数据序列（按项目输入顺序）"""
    return [
        BudgetChartRow(
            name=project.display_name,
            budget=project.total_budget or ZERO,
            spent=metrics.per_project_spend.get(project.id, ZERO),
        )
        for project in projects
    ]
