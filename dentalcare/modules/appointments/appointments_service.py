# dentalcare/modules/appointments/appointments_service.py
"""Appointments service for business logic."""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from dentalcare.auth.policy import Action, Actor, ensure_access
from dentalcare.common.database.repository import Repository
from dentalcare.common.errors import Forbidden, InvalidReference, ValidationFailed
from dentalcare.common.utils.global_messages import GlobalMessages
from dentalcare.models.models import (
    Appointment, AppointmentStatus, Service, User, UserRole
)
from dentalcare.modules.services.services_service import get_active_service
from .schemas import (
    AppointmentCreateRequest, AppointmentUpdateRequest, AppointmentResponse,
    ServiceSummary, UserSummary
)
from .working_hours import ensure_bookable

logger = logging.getLogger(__name__)

# Update fields whose column cannot hold NULL; a null in the patch means "leave as is"
_REQUIRED_FIELDS = ("doctor_id", "service_id", "date", "status")


def _user_summary(user: Optional[User]) -> Optional[UserSummary]:
    if user is None:
        return None
    return UserSummary(id=user.id, name=user.name, email=user.email)


async def _build_appointment_response(
    session: AsyncSession,
    appointment: Appointment
) -> AppointmentResponse:
    """Build appointment response with patient, doctor and service info."""
    patient = await session.get(User, appointment.user_id)
    doctor = await session.get(User, appointment.doctor_id)

    service_summary = None
    if appointment.service_id:
        service = await session.get(Service, appointment.service_id)
        if service:
            service_summary = ServiceSummary(
                id=service.id,
                name=service.name,
                duration=service.duration,
                price=float(service.price)
            )

    return AppointmentResponse(
        id=appointment.id,
        user_id=appointment.user_id,
        doctor_id=appointment.doctor_id,
        service_id=appointment.service_id,
        user=_user_summary(patient),
        doctor=_user_summary(doctor),
        service=service_summary,
        date=appointment.date,
        status=appointment.status,
        notes=appointment.notes,
        created_at=appointment.created_at,
        updated_at=appointment.updated_at
    )


async def _require_patient(session: AsyncSession, user_id: UUID) -> User:
    patient = await Repository(session, User).find_by_id(user_id)
    if not patient or patient.role is not UserRole.PATIENT:
        raise InvalidReference(GlobalMessages.APPOINTMENT_PATIENT_INVALID)
    return patient


async def _require_doctor(session: AsyncSession, doctor_id: UUID) -> User:
    doctor = await Repository(session, User).find_by_id(doctor_id)
    if not doctor or doctor.role is not UserRole.DOCTOR:
        raise InvalidReference(GlobalMessages.APPOINTMENT_DOCTOR_INVALID)
    return doctor


async def _load_appointment(session: AsyncSession, appointment_id: UUID) -> Appointment:
    return await Repository(session, Appointment).get_by_id(
        appointment_id, GlobalMessages.APPOINTMENT_NOT_FOUND
    )


async def _build_many(session: AsyncSession, appointments: List[Appointment]) -> List[AppointmentResponse]:
    responses = []
    for apt in appointments:
        responses.append(await _build_appointment_response(session, apt))
    return responses


async def create_appointment(
    session: AsyncSession,
    actor: Actor,
    request: AppointmentCreateRequest
) -> AppointmentResponse:
    """Book an appointment.

    Patients always book for themselves whatever ``user_id`` they send. The
    checks run in order: patient, doctor, service, working hours, initial status.
    """
    if actor.is_staff:
        if request.user_id is None:
            raise ValidationFailed(GlobalMessages.APPOINTMENT_PATIENT_REQUIRED)
        user_id = request.user_id
    else:
        user_id = actor.id
    ensure_access(actor, Action.CREATE, user_id)

    await _require_patient(session, user_id)
    await _require_doctor(session, request.doctor_id)
    await get_active_service(session, request.service_id)
    date = ensure_bookable(request.date)

    if request.status is not AppointmentStatus.SCHEDULED and not actor.is_staff:
        raise Forbidden(GlobalMessages.APPOINTMENT_STATUS_STAFF_ONLY)

    appointment = await Repository(session, Appointment).insert(
        user_id=user_id,
        doctor_id=request.doctor_id,
        service_id=request.service_id,
        date=date,
        status=request.status,
        notes=request.notes
    )
    logger.info(
        "Appointment %s booked for %s with doctor %s at %s",
        appointment.id, user_id, request.doctor_id, date
    )
    return await _build_appointment_response(session, appointment)


async def get_appointment(
    session: AsyncSession,
    actor: Actor,
    appointment_id: UUID
) -> AppointmentResponse:
    appointment = await _load_appointment(session, appointment_id)
    ensure_access(actor, Action.READ, appointment.user_id)
    return await _build_appointment_response(session, appointment)


async def list_appointments_for_actor(session: AsyncSession, actor: Actor) -> List[AppointmentResponse]:
    """Staff see every appointment, patients only their own."""
    appointments = Repository(session, Appointment)
    if actor.is_staff:
        found = await appointments.find_many(order_by=Appointment.date.desc())
    else:
        found = await appointments.find_many(order_by=Appointment.date.desc(), user_id=actor.id)
    return await _build_many(session, found)


async def list_appointments_for_user(
    session: AsyncSession,
    actor: Actor,
    user_id: UUID
) -> List[AppointmentResponse]:
    ensure_access(actor, Action.READ, user_id)
    found = await Repository(session, Appointment).find_many(
        order_by=Appointment.date.desc(), user_id=user_id
    )
    return await _build_many(session, found)


async def update_appointment(
    session: AsyncSession,
    actor: Actor,
    appointment_id: UUID,
    request: AppointmentUpdateRequest
) -> AppointmentResponse:
    """Apply the fields present in ``request``.

    Changed references and a new date are validated the same way as on booking.
    Only staff may move an appointment to another status.
    """
    appointment = await _load_appointment(session, appointment_id)
    ensure_access(actor, Action.UPDATE, appointment.user_id)

    patch = request.model_dump(exclude_unset=True)
    for field in _REQUIRED_FIELDS:
        if field in patch and patch[field] is None:
            del patch[field]

    if "status" in patch and patch["status"] is not appointment.status:
        ensure_access(actor, Action.CHANGE_STATUS, None, GlobalMessages.APPOINTMENT_STATUS_STAFF_ONLY)

    if "service_id" in patch and patch["service_id"] != appointment.service_id:
        await get_active_service(session, patch["service_id"])

    if "doctor_id" in patch:
        await _require_doctor(session, patch["doctor_id"])

    if "date" in patch:
        patch["date"] = ensure_bookable(patch["date"])

    appointment = await Repository(session, Appointment).update(appointment, patch)
    logger.info("Appointment %s updated by %s: %s", appointment.id, actor.id, sorted(patch))
    return await _build_appointment_response(session, appointment)


async def cancel_appointment(session: AsyncSession, actor: Actor, appointment_id: UUID) -> None:
    """Remove an appointment. Only the patient who owns it may do this."""
    appointment = await _load_appointment(session, appointment_id)
    ensure_access(actor, Action.CANCEL, appointment.user_id, GlobalMessages.APPOINTMENT_CANCEL_OWNER_ONLY)
    await Repository(session, Appointment).delete(appointment)
    logger.info("Appointment %s cancelled by %s", appointment_id, actor.id)
