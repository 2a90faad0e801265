"""
DrawLedger — 工程项目预算与付款申请台账
FastAPI 应用入口
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from drawledger import config
from drawledger.database import connect_store, close_store
from drawledger.store.base import StoreError
from drawledger.api.projects import router as projects_router
from drawledger.api.draw_requests import router as draw_requests_router
from drawledger.api.dashboard import router as dashboard_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    await connect_store()
    yield
    await close_store()


app = FastAPI(
    title="DrawLedger",
    description="工程项目预算与付款申请台账",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS 中间件（浏览器端仪表盘直接调用）
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 注册路由
app.include_router(projects_router)
app.include_router(draw_requests_router)
app.include_router(dashboard_router)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    """存储后端失败：返回可读错误，前端提示后可重试"""
    logger.error("存储操作失败 %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.get("/api/health")
async def health_check():
    return {"status": "ok", "service": "DrawLedger"}


def run():
    """命令行启动入口"""
    import uvicorn

    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("drawledger.main:app", host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
