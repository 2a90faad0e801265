"""
仪表盘 API
"""

from fastapi import APIRouter
from drawledger.database import get_store
from drawledger.services.dashboard import load_dashboard

router = APIRouter(prefix="/api/v1/dashboard", tags=["仪表盘"])


@router.get("")
async def get_dashboard():
    """项目、付款申请、汇总指标和预算图数据"""
    return await load_dashboard(get_store())


@router.get("/metrics")
async def get_metrics():
    """仅返回汇总指标"""
    dashboard = await load_dashboard(get_store())
    return dashboard.metrics
