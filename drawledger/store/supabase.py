"""
Supabase 存储实现
通过 PostgREST 接口读写 projects / payments 两张表
"""

import logging
from decimal import Decimal
from typing import Optional

import httpx

from drawledger.models.project import Project, ProjectCreate
from drawledger.models.draw_request import DrawRequest, DrawRequestCreate, STATUS_PENDING
from drawledger.store.base import (
    DrawRequestRepository,
    ProjectRepository,
    Store,
    StoreError,
    decode_row,
    PROJECTS_TABLE,
    DRAW_REQUESTS_TABLE,
)

logger = logging.getLogger(__name__)

RETURN_REPRESENTATION = {"Prefer": "return=representation"}
# PostgREST 对非法输入（如格式错误的 uuid）返回的 SQLSTATE
INVALID_TEXT_REPRESENTATION = "22P02"
NEWEST_FIRST = "created_at.desc"
# 付款申请联表读取所属项目名称
DRAW_SELECT = f"*,{PROJECTS_TABLE}(name)"


def _error_details(response: httpx.Response) -> tuple[str, Optional[str]]:
    """从 PostgREST 错误响应中提取可读信息和错误码"""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return body["message"], body.get("code")
    return response.text or f"HTTP {response.status_code}", None


async def _request(
    client: httpx.AsyncClient,
    method: str,
    table: str,
    params: dict = None,
    json: list | dict = None,
    headers: dict = None,
) -> list[dict]:
    """
    发起 REST 请求并返回行列表

    数值列按 Decimal 解析，避免金额出现浮点误差。
    网络异常和非 2xx 响应统一转换为 StoreError。
    """
    logger.info("REST 请求: %s /%s %s", method, table, params or "")
    try:
        response = await client.request(
            method, f"/{table}", params=params, json=json, headers=headers
        )
    except httpx.HTTPError as e:
        raise StoreError(f"无法连接存储服务: {e}") from e

    if response.is_error:
        message, code = _error_details(response)
        logger.warning("REST 请求失败 [%s]: %s", response.status_code, message)
        raise StoreError(message, code)

    if not response.content:
        return []
    return response.json(parse_float=Decimal)


async def _select_by_id(client: httpx.AsyncClient, table: str, select: str, row_id: str) -> list[dict]:
    """按 id 查询单行；id 格式不合法时视为不存在"""
    try:
        return await _request(
            client, "GET", table, params={"select": select, "id": f"eq.{row_id}"}
        )
    except StoreError as e:
        if e.code == INVALID_TEXT_REPRESENTATION:
            return []
        raise


def _draw_from_row(row: dict) -> DrawRequest:
    """把联表结果中的 projects.name 展平为 project_name"""
    row = dict(row)
    joined = row.pop(PROJECTS_TABLE, None) or {}
    row["project_name"] = joined.get("name")
    return decode_row(DrawRequest, row)


class SupabaseProjectRepository(ProjectRepository):

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def fetch_all(self) -> list[Project]:
        rows = await _request(
            self.client, "GET", PROJECTS_TABLE,
            params={"select": "*", "order": NEWEST_FIRST},
        )
        return [decode_row(Project, row) for row in rows]

    async def get(self, project_id: str) -> Optional[Project]:
        rows = await _select_by_id(self.client, PROJECTS_TABLE, "*", project_id)
        return decode_row(Project, rows[0]) if rows else None

    async def insert(self, data: ProjectCreate) -> Project:
        rows = await _request(
            self.client, "POST", PROJECTS_TABLE,
            json=[data.model_dump(mode="json")],
            headers=RETURN_REPRESENTATION,
        )
        if not rows:
            raise StoreError("创建项目后未返回记录")
        return decode_row(Project, rows[0])


class SupabaseDrawRequestRepository(DrawRequestRepository):

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def fetch_all(self) -> list[DrawRequest]:
        rows = await _request(
            self.client, "GET", DRAW_REQUESTS_TABLE,
            params={"select": DRAW_SELECT, "order": NEWEST_FIRST},
        )
        return [_draw_from_row(row) for row in rows]

    async def get(self, draw_id: str) -> Optional[DrawRequest]:
        rows = await _select_by_id(self.client, DRAW_REQUESTS_TABLE, DRAW_SELECT, draw_id)
        return _draw_from_row(rows[0]) if rows else None

    async def insert(self, data: DrawRequestCreate) -> DrawRequest:
        payload = data.model_dump(mode="json")
        payload["status"] = STATUS_PENDING
        rows = await _request(
            self.client, "POST", DRAW_REQUESTS_TABLE,
            params={"select": DRAW_SELECT},
            json=[payload],
            headers=RETURN_REPRESENTATION,
        )
        if not rows:
            raise StoreError("提交付款申请后未返回记录")
        return _draw_from_row(rows[0])

    async def update_status(
        self, draw_id: str, expected: str, new: str
    ) -> Optional[DrawRequest]:
        # 过滤条件带上当前状态，并发审批时只有一个请求能命中
        rows = await _request(
            self.client, "PATCH", DRAW_REQUESTS_TABLE,
            params={
                "select": DRAW_SELECT,
                "id": f"eq.{draw_id}",
                "status": f"eq.{expected}",
            },
            json={"status": new},
            headers=RETURN_REPRESENTATION,
        )
        return _draw_from_row(rows[0]) if rows else None


def open_supabase_store(client: httpx.AsyncClient) -> Store:
    return Store(
        projects=SupabaseProjectRepository(client),
        draw_requests=SupabaseDrawRequestRepository(client),
        backend="supabase",
    )
