"""
项目管理 API
"""

import logging
from fastapi import APIRouter, HTTPException
from drawledger.database import get_store
from drawledger.models.project import ProjectCreate
from drawledger.services.dashboard import fetch_projects

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/projects", tags=["项目管理"])


@router.post("", status_code=201)
async def create_project(project: ProjectCreate):
    """创建新项目"""
    store = get_store()
    created = await store.projects.insert(project)
    logger.info("项目已创建: %s (%s)", created.id, created.display_name)
    return created


@router.get("")
async def list_projects():
    """获取所有项目（按创建时间倒序）"""
    return await fetch_projects(get_store())


@router.get("/{project_id}")
async def get_project(project_id: str):
    """获取单个项目"""
    store = get_store()
    project = await store.projects.get(project_id)
    if not project:
        raise HTTPException(status_code=404, detail="项目不存在")
    return project
