# dentalcare/modules/payments/schemas.py
"""Payments module Pydantic schemas."""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field
from uuid import UUID

from dentalcare.models.models import MAX_AMOUNT, PaymentStatus
from dentalcare.modules.appointments.schemas import UserSummary


class PaymentCreateRequest(BaseModel):
    """Record a payment against an appointment.

    Patients always pay as themselves. Staff may name the payer; when they do
    not, the appointment's patient is used.
    """
    user_id: Optional[UUID] = None
    appointment_id: UUID
    amount: float = Field(..., ge=0, le=MAX_AMOUNT)
    status: PaymentStatus = PaymentStatus.PENDING
    payment_method: Optional[str] = Field(None, max_length=100)


class PaymentStatusUpdateRequest(BaseModel):
    status: PaymentStatus


class PaymentResponse(BaseModel):
    id: UUID
    user_id: Optional[UUID] = None
    appointment_id: Optional[UUID] = None
    user: Optional[UserSummary] = None
    amount: float
    status: PaymentStatus
    payment_method: Optional[str] = None
    created_at: datetime
