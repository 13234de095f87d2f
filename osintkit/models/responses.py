from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class ClassifyResponse(BaseModel):
    target: str
    input_type: Optional[str] = None
    valid: bool


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: datetime
    real_apis_enabled: bool
    caching_enabled: bool
    sources: dict[str, bool] = {}
