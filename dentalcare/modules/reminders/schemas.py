# dentalcare/modules/reminders/schemas.py
"""Reminders module Pydantic schemas."""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field
from uuid import UUID


class ReminderCreateRequest(BaseModel):
    user_id: UUID
    appointment_id: UUID
    title: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)
    date: datetime


class ReminderResponse(BaseModel):
    id: UUID
    user_id: UUID
    appointment_id: UUID
    appointment_date: Optional[datetime] = None
    title: str
    message: str
    date: datetime
    is_read: bool
    created_at: datetime

    class Config:
        from_attributes = True


class ReminderDeleteResponse(BaseModel):
    success: bool = True
    message: str
