"""
DrawLedger 存储连接管理
按 STORE_BACKEND 选择 Supabase（httpx）或 MongoDB（Motor）
"""

import logging
from motor.motor_asyncio import AsyncIOMotorClient

from drawledger import config
from drawledger.store.base import Store
from drawledger.store.mongo import ensure_indexes, open_mongo_store
from drawledger.store.supabase import open_supabase_store
from drawledger.utils.http_client import init_client, close_client

logger = logging.getLogger(__name__)

# 全局实例
mongo_client: AsyncIOMotorClient = None
store: Store = None


async def connect_store():
    """连接配置的存储后端"""
    global mongo_client, store
    backend = config.require_backend(config.STORE_BACKEND)

    if backend == "supabase":
        url, key = config.require_supabase_settings(
            config.SUPABASE_URL, config.SUPABASE_ANON_KEY
        )
        client = await init_client(url, key)
        store = open_supabase_store(client)
        logger.info("已连接 Supabase: %s", url)
        return

    mongo_client = AsyncIOMotorClient(config.MONGODB_URI)
    db = mongo_client[config.DATABASE_NAME]
    await ensure_indexes(db)
    store = open_mongo_store(db)
    logger.info("已连接 MongoDB: %s / %s", config.MONGODB_URI, config.DATABASE_NAME)


async def close_store():
    """关闭存储连接"""
    global mongo_client, store
    await close_client()
    if mongo_client:
        mongo_client.close()
        mongo_client = None
        logger.info("MongoDB 连接已关闭")
    store = None


def get_store() -> Store:
    """获取存储实例"""
    return store
