"""
仪表盘数据读取
项目读取失败直接上抛；付款申请读取失败降级为空列表
"""

import logging

from drawledger.ledger.aggregator import compute_metrics, build_chart_rows
from drawledger.models.dashboard import Dashboard
from drawledger.models.draw_request import DrawRequest
from drawledger.models.project import Project
from drawledger.store.base import Store, StoreError

logger = logging.getLogger(__name__)


async def fetch_projects(store: Store) -> list[Project]:
    """获取全部项目，失败时抛出 StoreError"""
    return await store.projects.fetch_all()


async def fetch_draw_requests(store: Store) -> list[DrawRequest]:
    """获取全部付款申请，失败不影响页面其余部分"""
    try:
        return await store.draw_requests.fetch_all()
    except StoreError as e:
        logger.error("读取付款申请失败: %s", e)
        return []


async def load_dashboard(store: Store) -> Dashboard:
    """读取项目和付款申请并计算指标"""
    projects = await fetch_projects(store)
    draws = await fetch_draw_requests(store)
    metrics = compute_metrics(projects, draws)
    return Dashboard(
        projects=projects,
        draw_requests=draws,
        metrics=metrics,
        chart=build_chart_rows(projects, metrics),
    )
