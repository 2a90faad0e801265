"""
DrawLedger 配置模块
从 .env 文件或环境变量中读取配置
"""

import os
from dotenv import load_dotenv

load_dotenv()


class ConfigError(RuntimeError):
    """配置缺失或不合法"""


# 存储后端：supabase（托管 PostgREST）/ mongo（自建 MongoDB）
STORE_BACKEND = os.getenv("STORE_BACKEND", "supabase").lower()

# Supabase 配置
SUPABASE_URL = os.getenv("SUPABASE_URL", "")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "")

# MongoDB 配置
MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017/admin")
DATABASE_NAME = os.getenv("DATABASE_NAME", "drawledger")

# 服务器配置
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

REQUEST_TIMEOUT = 30  # 秒

SUPPORTED_BACKENDS = ("supabase", "mongo")


def require_supabase_settings(url: str, key: str) -> tuple[str, str]:
    """校验 Supabase 连接参数，缺失时直接报错，避免带着空地址启动"""
    if not url or not key:
        raise ConfigError(
            "Missing Supabase environment variables. "
            "Check SUPABASE_URL and SUPABASE_ANON_KEY in .env"
        )
    return url.rstrip("/"), key


def require_backend(name: str) -> str:
    """校验存储后端名称"""
    if name not in SUPPORTED_BACKENDS:
        raise ConfigError(
            f"未知的存储后端: {name}（可选: {', '.join(SUPPORTED_BACKENDS)}）"
        )
    return name
