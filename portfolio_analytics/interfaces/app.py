"""
FastAPI 應用程式
"""

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portfolio_analytics.interfaces.exceptions import register_exception_handlers
from portfolio_analytics.interfaces.routers import analytics, system
from portfolio_analytics.interfaces.routers.system import VERSION

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",  # Vite dev server
    "http://localhost:3000",
]


def _cors_origins() -> list[str]:
    """CORS_ORIGINS 以逗號分隔；未設定時使用本機前端"""
    raw = os.getenv("CORS_ORIGINS", "")
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or DEFAULT_CORS_ORIGINS


def create_app() -> FastAPI:
    """建立 FastAPI 應用程式"""
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="portfolio-analytics API",
        description="投資組合績效分析 API",
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS 設定（允許前端存取）
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 註冊路由
    app.include_router(system.router, prefix="/api/v1/system", tags=["system"])
    app.include_router(analytics.router, prefix="/api/v1/analytics", tags=["analytics"])

    # 註冊例外處理
    register_exception_handlers(app)

    return app


app = create_app()
