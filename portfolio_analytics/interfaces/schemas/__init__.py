"""
Pydantic Schemas
"""

from portfolio_analytics.interfaces.schemas.common import ErrorDetail, ErrorResponse

__all__ = ["ErrorDetail", "ErrorResponse"]
