# dentalcare/modules/appointments/schemas.py
"""Appointments module Pydantic schemas."""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field
from uuid import UUID

from dentalcare.models.models import AppointmentStatus


# ============================================================================
# REQUEST SCHEMAS
# ============================================================================

class AppointmentCreateRequest(BaseModel):
    """Request to book an appointment.

    ``user_id`` is ignored for patients, who always book for themselves; staff
    must name the patient.
    """
    user_id: Optional[UUID] = None
    doctor_id: UUID
    service_id: UUID
    date: datetime
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    notes: Optional[str] = Field(None, max_length=2000)


class AppointmentUpdateRequest(BaseModel):
    """Partial update; only the fields sent are changed."""
    doctor_id: Optional[UUID] = None
    service_id: Optional[UUID] = None
    date: Optional[datetime] = None
    status: Optional[AppointmentStatus] = None
    notes: Optional[str] = Field(None, max_length=2000)


# ============================================================================
# RESPONSE SCHEMAS
# ============================================================================

class UserSummary(BaseModel):
    id: UUID
    name: str
    email: str


class ServiceSummary(BaseModel):
    id: UUID
    name: str
    duration: int
    price: float


class AppointmentResponse(BaseModel):
    """Appointment with the patient, doctor and service it points at."""
    id: UUID
    user_id: UUID
    doctor_id: UUID
    service_id: Optional[UUID] = None
    user: Optional[UserSummary] = None
    doctor: Optional[UserSummary] = None
    service: Optional[ServiceSummary] = None
    date: datetime
    status: AppointmentStatus
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class AppointmentCancelResponse(BaseModel):
    success: bool = True
    message: str
