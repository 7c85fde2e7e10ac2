# dentalcare/modules/services/schemas.py
"""Service catalog Pydantic schemas."""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field
from uuid import UUID

from dentalcare.models.models import MAX_AMOUNT, MAX_DURATION


# ============================================================================
# REQUEST SCHEMAS
# ============================================================================

class ServiceCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    duration: int = Field(..., gt=0, le=MAX_DURATION, description="Length in minutes")
    price: float = Field(..., ge=0, le=MAX_AMOUNT)
    is_active: bool = True


class ServiceUpdateRequest(BaseModel):
    """Partial update; only the fields sent are changed."""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    duration: Optional[int] = Field(None, gt=0, le=MAX_DURATION)
    price: Optional[float] = Field(None, ge=0, le=MAX_AMOUNT)
    is_active: Optional[bool] = None


# ============================================================================
# RESPONSE SCHEMAS
# ============================================================================

class ServiceResponse(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    duration: int
    price: float
    is_active: bool
    created_by: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime


class ServiceDeleteResponse(BaseModel):
    success: bool = True
    message: str
