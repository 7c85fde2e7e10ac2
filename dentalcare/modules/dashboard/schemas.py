# dentalcare/modules/dashboard/schemas.py
"""Dashboard module Pydantic schemas."""

from typing import List, Optional
from datetime import date, datetime
from pydantic import BaseModel
from uuid import UUID

from dentalcare.models.models import AppointmentStatus
from dentalcare.modules.appointments.schemas import ServiceSummary
from dentalcare.modules.payments.schemas import PaymentResponse


class DashboardOverview(BaseModel):
    total_patients: int
    total_appointments: int
    total_payments: int
    total_revenue: float
    recent_payments: List[PaymentResponse] = []


class PatientContact(BaseModel):
    id: UUID
    name: str
    email: str
    phone: Optional[str] = None


class DoctorName(BaseModel):
    id: UUID
    name: str


class TodayAppointment(BaseModel):
    id: UUID
    date: datetime
    status: AppointmentStatus
    notes: Optional[str] = None
    patient: Optional[PatientContact] = None
    doctor: Optional[DoctorName] = None
    service: Optional[ServiceSummary] = None


class TodayAppointmentsResponse(BaseModel):
    day: date
    appointments: List[TodayAppointment] = []


class PatientWithCounts(BaseModel):
    id: UUID
    name: str
    email: str
    phone: Optional[str] = None
    created_at: datetime
    appointment_count: int
    payment_count: int
