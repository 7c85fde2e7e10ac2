# dentalcare/modules/dashboard/dashboard_service.py
"""Read-only reporting for clinic staff."""

from datetime import date
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from dentalcare.auth.policy import Actor, ensure_staff
from dentalcare.common.database.repository import Repository
from dentalcare.common.utils.global_messages import GlobalMessages
from dentalcare.models.models import (
    Appointment, Payment, PaymentStatus, Service, User, UserRole
)
from dentalcare.modules.appointments.schemas import ServiceSummary
from dentalcare.modules.appointments.working_hours import clinic_day_window, clinic_today
from dentalcare.modules.payments.payments_service import build_payment_responses

from .schemas import (
    DashboardOverview, DoctorName, PatientContact, PatientWithCounts,
    TodayAppointment, TodayAppointmentsResponse
)

RECENT_PAYMENTS_LIMIT = 5


async def get_overview(session: AsyncSession, actor: Actor) -> DashboardOverview:
    """Headline counts, revenue from completed payments, and the latest payments."""
    ensure_staff(actor, GlobalMessages.STAFF_ONLY)

    users = Repository(session, User)
    payments = Repository(session, Payment)

    total_patients = await users.count(role=UserRole.PATIENT)
    total_appointments = await Repository(session, Appointment).count()
    total_payments = await payments.count()
    revenue = await payments.aggregate_sum("amount", status=PaymentStatus.COMPLETED)
    recent = await payments.find_many(order_by=Payment.created_at.desc(), limit=RECENT_PAYMENTS_LIMIT)

    return DashboardOverview(
        total_patients=total_patients,
        total_appointments=total_appointments,
        total_payments=total_payments,
        total_revenue=float(revenue),
        recent_payments=await build_payment_responses(session, recent)
    )


async def get_today_appointments(
    session: AsyncSession,
    actor: Actor,
    day: Optional[date] = None
) -> TodayAppointmentsResponse:
    """Appointments on ``day`` (default: today on the clinic clock), earliest first."""
    ensure_staff(actor, GlobalMessages.STAFF_ONLY)
    day = day or clinic_today()
    start, end = clinic_day_window(day)

    appointments = await Repository(session, Appointment).find_many(
        Appointment.date >= start,
        Appointment.date < end,
        order_by=Appointment.date.asc()
    )

    results = []
    for apt in appointments:
        patient = await session.get(User, apt.user_id)
        doctor = await session.get(User, apt.doctor_id)
        service = await session.get(Service, apt.service_id) if apt.service_id else None
        results.append(TodayAppointment(
            id=apt.id,
            date=apt.date,
            status=apt.status,
            notes=apt.notes,
            patient=PatientContact(
                id=patient.id, name=patient.name, email=patient.email, phone=patient.phone
            ) if patient else None,
            doctor=DoctorName(id=doctor.id, name=doctor.name) if doctor else None,
            service=ServiceSummary(
                id=service.id, name=service.name, duration=service.duration, price=float(service.price)
            ) if service else None
        ))

    return TodayAppointmentsResponse(day=day, appointments=results)


async def get_patients(session: AsyncSession, actor: Actor) -> List[PatientWithCounts]:
    """Patients, newest first, with how many appointments and payments each has."""
    ensure_staff(actor, GlobalMessages.STAFF_ONLY)

    patients = await Repository(session, User).find_many(
        order_by=User.created_at.desc(), role=UserRole.PATIENT
    )
    appointments = Repository(session, Appointment)
    payments = Repository(session, Payment)

    results = []
    for patient in patients:
        results.append(PatientWithCounts(
            id=patient.id,
            name=patient.name,
            email=patient.email,
            phone=patient.phone,
            created_at=patient.created_at,
            appointment_count=await appointments.count(user_id=patient.id),
            payment_count=await payments.count(user_id=patient.id)
        ))
    return results
