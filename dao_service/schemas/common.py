#!/usr/bin/env python3
from pydantic import BaseModel
from typing import Optional, Any


class ErrorDetail(BaseModel):
    """Error detail structure."""
    code: str
    message: str
    details: Optional[Any] = None


class ErrorResponse(BaseModel):
    """Standard error response format."""
    error: ErrorDetail
