"""
系統相關 Schema
"""

from datetime import datetime

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """健康檢查回應"""

    status: str
    timestamp: datetime
    version: str
