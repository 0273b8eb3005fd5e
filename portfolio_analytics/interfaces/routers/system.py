"""
系統監控 API
"""

from datetime import datetime

from fastapi import APIRouter

from portfolio_analytics.interfaces.schemas.system import HealthResponse

router = APIRouter()

VERSION = "0.1.0"


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """健康檢查"""
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(),
        version=VERSION,
    )
