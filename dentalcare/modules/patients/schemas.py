# dentalcare/modules/patients/schemas.py
"""Patient information Pydantic schemas."""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field
from uuid import UUID

from dentalcare.models.models import BloodType, Gender


class EmergencyContact(BaseModel):
    name: Optional[str] = Field(None, max_length=200)
    phone: Optional[str] = Field(None, max_length=20)
    relationship: Optional[str] = Field(None, max_length=100)


class PatientInfoFields(BaseModel):
    age: Optional[int] = Field(None, ge=0, le=150)
    gender: Optional[Gender] = None
    address: Optional[str] = None
    blood_type: Optional[BloodType] = None
    medical_history: Optional[str] = None
    allergies: Optional[str] = None
    medications: Optional[str] = None
    emergency_contact: Optional[EmergencyContact] = None


class PatientInfoCreateRequest(PatientInfoFields):
    """``patient_id`` defaults to the caller."""
    patient_id: Optional[UUID] = None


class PatientInfoUpdateRequest(PatientInfoFields):
    """Partial update. ``last_visit`` can only be stamped, never supplied."""
    update_last_visit: bool = False


class PatientInfoResponse(BaseModel):
    id: UUID
    patient_id: UUID
    age: Optional[int] = None
    gender: Optional[Gender] = None
    address: Optional[str] = None
    blood_type: Optional[BloodType] = None
    medical_history: Optional[str] = None
    allergies: Optional[str] = None
    medications: Optional[str] = None
    emergency_contact: EmergencyContact
    last_visit: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
