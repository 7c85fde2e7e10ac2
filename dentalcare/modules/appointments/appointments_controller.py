# dentalcare/modules/appointments/appointments_controller.py
"""Appointments controller with API routes."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dentalcare.auth.dependencies import get_current_actor
from dentalcare.auth.policy import Actor, resolve_owner
from dentalcare.common.database.database import get_db_session
from dentalcare.common.utils.global_messages import GlobalMessages

from . import appointments_service as service
from .schemas import (
    AppointmentCreateRequest, AppointmentUpdateRequest, AppointmentResponse,
    AppointmentCancelResponse
)

router = APIRouter(prefix="/appointments", tags=["Appointments"])


# ============================================================================
# LISTINGS (must come before /{appointment_id} routes)
# ============================================================================

@router.get("", response_model=List[AppointmentResponse])
async def get_appointments(
    db: AsyncSession = Depends(get_db_session),
    actor: Actor = Depends(get_current_actor)
):
    """Staff get every appointment, patients their own."""
    return await service.list_appointments_for_actor(db, actor)


@router.get("/user/{user_id}", response_model=List[AppointmentResponse])
async def get_user_appointments(
    user_id: str,
    db: AsyncSession = Depends(get_db_session),
    actor: Actor = Depends(get_current_actor)
):
    """Appointments of one patient; ``me`` means the caller."""
    return await service.list_appointments_for_user(db, actor, resolve_owner(actor, user_id))


# ============================================================================
# MAIN APPOINTMENTS ENDPOINTS
# ============================================================================

@router.post("", response_model=AppointmentResponse, status_code=201)
async def create_appointment(
    request: AppointmentCreateRequest,
    db: AsyncSession = Depends(get_db_session),
    actor: Actor = Depends(get_current_actor)
):
    """Book a new appointment."""
    return await service.create_appointment(db, actor, request)


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
    appointment_id: UUID,
    db: AsyncSession = Depends(get_db_session),
    actor: Actor = Depends(get_current_actor)
):
    return await service.get_appointment(db, actor, appointment_id)


@router.put("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: UUID,
    request: AppointmentUpdateRequest,
    db: AsyncSession = Depends(get_db_session),
    actor: Actor = Depends(get_current_actor)
):
    """Update appointment details, reschedule, or (staff) change status."""
    return await service.update_appointment(db, actor, appointment_id, request)


@router.delete("/{appointment_id}", response_model=AppointmentCancelResponse)
async def cancel_appointment(
    appointment_id: UUID,
    db: AsyncSession = Depends(get_db_session),
    actor: Actor = Depends(get_current_actor)
):
    """Cancel an appointment (owning patient only)."""
    await service.cancel_appointment(db, actor, appointment_id)
    return AppointmentCancelResponse(message=GlobalMessages.APPOINTMENT_CANCELLED)
