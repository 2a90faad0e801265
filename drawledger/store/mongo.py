"""
MongoDB 存储实现
使用 Motor 异步驱动，集合名与 Supabase 表名一致
"""

import logging
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from bson.decimal128 import Decimal128
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

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


@contextmanager
def _store_errors(action: str):
    """把驱动异常转换为 StoreError"""
    try:
        yield
    except PyMongoError as e:
        logger.warning("MongoDB %s失败: %s", action, e)
        raise StoreError(f"{action}失败: {e}") from e


def _to_decimal128(value: Optional[Decimal]) -> Optional[Decimal128]:
    return Decimal128(str(value)) if value is not None else None


def _from_doc(doc: dict) -> dict:
    """Decimal128 → Decimal"""
    return {
        key: value.to_decimal() if isinstance(value, Decimal128) else value
        for key, value in doc.items()
    }


async def ensure_indexes(db):
    """创建索引"""
    await db[PROJECTS_TABLE].create_index("created_at")
    await db[DRAW_REQUESTS_TABLE].create_index("project_id")
    await db[DRAW_REQUESTS_TABLE].create_index("created_at")


class MongoProjectRepository(ProjectRepository):

    def __init__(self, db):
        self.collection = db[PROJECTS_TABLE]

    async def fetch_all(self) -> list[Project]:
        projects = []
        with _store_errors("读取项目"):
            cursor = self.collection.find({}).sort("created_at", -1)
            async for doc in cursor:
                projects.append(decode_row(Project, _from_doc(doc)))
        return projects

    async def get(self, project_id: str) -> Optional[Project]:
        with _store_errors("读取项目"):
            doc = await self.collection.find_one({"_id": project_id})
        return decode_row(Project, _from_doc(doc)) if doc else None

    async def insert(self, data: ProjectCreate) -> Project:
        doc = {
            "_id": str(uuid.uuid4()),
            "name": data.name,
            "description": None,
            "total_budget": _to_decimal128(data.total_budget),
            "status": data.status,
            "created_at": datetime.now(timezone.utc),
        }
        with _store_errors("创建项目"):
            await self.collection.insert_one(doc)
        return decode_row(Project, _from_doc(doc))


class MongoDrawRequestRepository(DrawRequestRepository):

    def __init__(self, db):
        self.collection = db[DRAW_REQUESTS_TABLE]
        self.projects = db[PROJECTS_TABLE]

    async def _project_names(self, project_ids: set[str]) -> dict[str, Optional[str]]:
        """批量查询项目名称（Mongo 没有联表，单独查一次）"""
        if not project_ids:
            return {}
        names = {}
        cursor = self.projects.find({"_id": {"$in": list(project_ids)}}, {"name": 1})
        async for doc in cursor:
            names[doc["_id"]] = doc.get("name")
        return names

    async def _with_names(self, docs: list[dict]) -> list[DrawRequest]:
        names = await self._project_names({doc["project_id"] for doc in docs})
        return [
            decode_row(
                DrawRequest,
                {**_from_doc(doc), "project_name": names.get(doc["project_id"])},
            )
            for doc in docs
        ]

    async def fetch_all(self) -> list[DrawRequest]:
        with _store_errors("读取付款申请"):
            docs = []
            cursor = self.collection.find({}).sort("created_at", -1)
            async for doc in cursor:
                docs.append(doc)
            return await self._with_names(docs)

    async def get(self, draw_id: str) -> Optional[DrawRequest]:
        with _store_errors("读取付款申请"):
            doc = await self.collection.find_one({"_id": draw_id})
            if not doc:
                return None
            return (await self._with_names([doc]))[0]

    async def insert(self, data: DrawRequestCreate) -> DrawRequest:
        doc = {
            "_id": str(uuid.uuid4()),
            "project_id": data.project_id,
            "description": data.description,
            "amount": _to_decimal128(data.amount),
            "status": STATUS_PENDING,
            "created_at": datetime.now(timezone.utc),
        }
        with _store_errors("提交付款申请"):
            await self.collection.insert_one(doc)
            return (await self._with_names([doc]))[0]

    async def update_status(
        self, draw_id: str, expected: str, new: str
    ) -> Optional[DrawRequest]:
        with _store_errors("更新付款申请状态"):
            doc = await self.collection.find_one_and_update(
                {"_id": draw_id, "status": expected},
                {"$set": {"status": new}},
                return_document=ReturnDocument.AFTER,
            )
            if not doc:
                return None
            return (await self._with_names([doc]))[0]


def open_mongo_store(db) -> Store:
    return Store(
        projects=MongoProjectRepository(db),
        draw_requests=MongoDrawRequestRepository(db),
        backend="mongo",
    )
