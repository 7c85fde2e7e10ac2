# dentalcare/models/models.py

import uuid
import enum

from sqlalchemy import (
    Boolean, CheckConstraint, Column, DateTime, ForeignKey, Index, Integer,
    Numeric, String, Text, Uuid, Enum as SAEnum, func,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Largest values the Numeric(10, 2) money columns and Integer duration column hold
MAX_AMOUNT = 99_999_999.99
MAX_DURATION = 2**31 - 1


# ============================================================================
# ENUMS
# ============================================================================

class UserRole(enum.Enum):
    PATIENT = "patient"
    DOCTOR = "doctor"
    ASSISTANT = "assistant"


STAFF_ROLES = frozenset({UserRole.DOCTOR, UserRole.ASSISTANT})


class AppointmentStatus(enum.Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class Gender(enum.Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class BloodType(enum.Enum):
    A_POSITIVE = "A+"
    A_NEGATIVE = "A-"
    B_POSITIVE = "B+"
    B_NEGATIVE = "B-"
    AB_POSITIVE = "AB+"
    AB_NEGATIVE = "AB-"
    O_POSITIVE = "O+"
    O_NEGATIVE = "O-"


# ============================================================================
# USER MODELS
# ============================================================================

class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    name = Column(String(200), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(SAEnum(UserRole), nullable=False, default=UserRole.PATIENT)
    phone = Column(String(20), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role.value})>"


class PatientInfo(Base):
    """Demographic and medical details, one record per patient."""
    __tablename__ = "patient_info"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    patient_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    age = Column(Integer, nullable=True)
    gender = Column(SAEnum(Gender), nullable=True)
    address = Column(Text, nullable=True)
    blood_type = Column(SAEnum(BloodType), nullable=True)
    medical_history = Column(Text, nullable=True)
    allergies = Column(Text, nullable=True)
    medications = Column(Text, nullable=True)
    emergency_contact_name = Column(String(200), nullable=True)
    emergency_contact_phone = Column(String(20), nullable=True)
    emergency_contact_relationship = Column(String(100), nullable=True)
    last_visit = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<PatientInfo(id={self.id}, patient_id={self.patient_id})>"


# ============================================================================
# CLINIC MODELS
# ============================================================================

class Service(Base):
    __tablename__ = "services"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    name = Column(String(200), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    duration = Column(Integer, nullable=False)  # minutes
    price = Column(Numeric(10, 2), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_by = Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_services_price_non_negative"),
        CheckConstraint("duration > 0", name="ck_services_duration_positive"),
    )

    def __repr__(self):
        return f"<Service(id={self.id}, name={self.name}, active={self.is_active})>"


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    doctor_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    service_id = Column(Uuid, ForeignKey("services.id", ondelete="SET NULL"), nullable=True)
    # Clinic-local wall clock, no offset
    date = Column(DateTime, nullable=False)
    status = Column(SAEnum(AppointmentStatus), default=AppointmentStatus.SCHEDULED, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("idx_appointments_date_doctor", "date", "doctor_id"),
        Index("idx_appointments_user", "user_id"),
    )

    def __repr__(self):
        return f"<Appointment(id={self.id}, date={self.date}, status={self.status.value})>"


# ============================================================================
# BILLING MODELS
# ============================================================================

class Payment(Base):
    __tablename__ = "payments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    # Payments outlive the user and appointment they reference
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    appointment_id = Column(Uuid, ForeignKey("appointments.id", ondelete="SET NULL"), nullable=True)
    amount = Column(Numeric(10, 2), nullable=False)
    status = Column(SAEnum(PaymentStatus), default=PaymentStatus.PENDING, nullable=False)
    payment_method = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_payments_amount_non_negative"),
        Index("idx_payments_user_created", "user_id", "created_at"),
        Index("idx_payments_appointment", "appointment_id"),
    )

    def __repr__(self):
        return f"<Payment(id={self.id}, amount={self.amount}, status={self.status.value})>"


# ============================================================================
# REMINDER MODELS
# ============================================================================

class Reminder(Base):
    __tablename__ = "reminders"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    appointment_id = Column(Uuid, ForeignKey("appointments.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index("idx_reminders_user", "user_id"),
        Index("idx_reminders_unread", "user_id", "is_read"),
    )

    def __repr__(self):
        return f"<Reminder(id={self.id}, title={self.title})>"
