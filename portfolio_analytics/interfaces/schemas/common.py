"""
共用 Schema
"""

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """錯誤詳情"""

    code: str
    message: str


class ErrorResponse(BaseModel):
    """錯誤回應"""

    error: ErrorDetail
