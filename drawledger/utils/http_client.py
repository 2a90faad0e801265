"""
HTTP 请求客户端封装
基于 httpx 异步客户端访问 Supabase REST 接口，复用连接池以提升性能
"""

import logging
import httpx
from drawledger.config import REQUEST_TIMEOUT

logger = logging.getLogger(__name__)

REST_PATH = "/rest/v1"

# 全局共享的 AsyncClient 实例（通过 lifespan 管理生命周期）
_client: httpx.AsyncClient | None = None


def create_client(
    base_url: str,
    api_key: str,
    transport: httpx.AsyncBaseTransport = None,
    timeout: int = REQUEST_TIMEOUT,
) -> httpx.AsyncClient:
    """
    创建指向 Supabase REST 接口的客户端

    Args:
        base_url: 项目地址，如 https://xyz.supabase.co
        api_key: anon key，同时用作 apikey 头和 Bearer Token
        transport: 自定义传输层（测试时注入 MockTransport）
        timeout: 超时秒数
    """
    return httpx.AsyncClient(
        base_url=base_url.rstrip("/") + REST_PATH,
        headers={
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
        },
        timeout=timeout,
        transport=transport,
        limits=httpx.Limits(
            max_connections=100,
            max_keepalive_connections=20,
        ),
    )


async def init_client(base_url: str, api_key: str) -> httpx.AsyncClient:
    """初始化全局 HTTP 客户端（在 FastAPI lifespan 中调用）"""
    global _client
    _client = create_client(base_url, api_key)
    logger.info("HTTP 客户端已初始化: %s%s", base_url, REST_PATH)
    return _client


async def close_client():
    """关闭全局 HTTP 客户端（在 FastAPI lifespan 中调用）"""
    global _client
    if _client:
        await _client.aclose()
        _client = None
        logger.info("HTTP 客户端已关闭")
