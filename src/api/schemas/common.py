"""
Common API schemas.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel


class ErrorBody(BaseModel):
    """Error payload."""

    code: str
    message: str
    details: Optional[Dict[str, List[str]]] = None
    timestamp: datetime
    request_id: Optional[str] = None


class ErrorResponse(BaseModel):
    """Error envelope returned by every failing endpoint."""

    error: ErrorBody


class TimestampMixin(BaseModel):
    """Mixin for timestamp fields."""

    created_at: datetime
    updated_at: datetime
