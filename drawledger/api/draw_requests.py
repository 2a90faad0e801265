"""
付款申请 API
"""

import logging
from fastapi import APIRouter, HTTPException
from drawledger.database import get_store
from drawledger.ledger.transitions import InvalidTransitionError, check_transition
from drawledger.models.draw_request import (
    DrawRequestCreate,
    STATUS_APPROVED,
    STATUS_REJECTED,
)
from drawledger.services.dashboard import fetch_draw_requests

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/draw-requests", tags=["付款申请"])


@router.post("", status_code=201)
async def submit_draw_request(draw: DrawRequestCreate):
    """提交付款申请（状态固定为 Pending）"""
    store = get_store()

    # 验证项目存在
    project = await store.projects.get(draw.project_id)
    if not project:
        raise HTTPException(status_code=404, detail="项目不存在")

    created = await store.draw_requests.insert(draw)
    logger.info("付款申请已提交: %s → 项目 %s", created.id, draw.project_id)
    return created


@router.get("")
async def list_draw_requests():
    """获取所有付款申请（按创建时间倒序，读取失败时返回空列表）"""
    return await fetch_draw_requests(get_store())


async def _decide(draw_id: str, target: str):
    """审批 / 驳回的公共流程"""
    store = get_store()
    draw = await store.draw_requests.get(draw_id)
    if not draw:
        raise HTTPException(status_code=404, detail="付款申请不存在")

    try:
        check_transition(draw.status, target)
    except InvalidTransitionError as e:
        logger.warning("拒绝状态变更 [%s]: %s", draw_id, e)
        raise HTTPException(status_code=409, detail=str(e))

    updated = await store.draw_requests.update_status(draw_id, draw.status, target)
    if not updated:
        # 读取之后被其他请求抢先处理
        raise HTTPException(status_code=409, detail="付款申请已被处理，请刷新后重试")

    logger.info("付款申请 %s: %s → %s", draw_id, draw.status, target)
    return updated


@router.post("/{draw_id}/approve")
async def approve_draw_request(draw_id: str):
    """批准付款申请"""
    return await _decide(draw_id, STATUS_APPROVED)


@router.post("/{draw_id}/reject")
async def reject_draw_request(draw_id: str):
    """驳回付款申请"""
    return await _decide(draw_id, STATUS_REJECTED)
