"""
API 測試共用 Fixtures
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from portfolio_analytics.interfaces.exceptions import register_exception_handlers
from portfolio_analytics.interfaces.routers import analytics, system


@pytest.fixture
def client():
    """建立測試用 HTTP Client"""
    app = FastAPI()
    app.include_router(system.router, prefix="/api/v1/system", tags=["system"])
    app.include_router(analytics.router, prefix="/api/v1/analytics", tags=["analytics"])
    register_exception_handlers(app)

    with TestClient(app) as c:
        yield c
