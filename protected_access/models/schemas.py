"""
Pydantic schemas for API request/response models.
"""
from datetime import datetime
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field


class AccessCategory(BaseModel):
    """Access category schema."""
    key: str
    class_name: str
    description: str
    resource_kind: str
    amount_of_methods: int = Field(..., ge=0, description="Method ids are 1..amount_of_methods")
    handled_resources: List[str]


class AccessResult(BaseModel):
    """Outcome of a single access invocation."""
    category: str
    method_id: int
    completed: bool = Field(..., description="False when the access call raised")
    success: bool = Field(..., description="True when the returned message is success-prefixed")
    message: str
    error_type: Optional[str] = None


class PreparedResources(BaseModel):
    """Fixture preparation result schema."""
    category: str
    prepared: List[str]
    removed: List[str]


class CategoryRun(BaseModel):
    """Results of invoking every method id of a category."""
    category: str
    results: List[AccessResult]
    succeeded: int
    failed: int


class SystemHealth(BaseModel):
    """System health check schema."""
    status: str
    timestamp: datetime
    version: str
    uptime_seconds: int
    category_count: int
    loopback_available: bool


class SystemInfo(BaseModel):
    """System information schema."""
    version: str
    platform: str
    categories: List[str]
    limits: Dict[str, Any]
    directories: Dict[str, str]


class ErrorResponse(BaseModel):
    """Error response schema."""
    error: str
    message: str
    details: Optional[Dict[str, Any]] = None
