# dentalcare/modules/reminders/reminders_controller.py
"""Reminders controller with API routes."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dentalcare.auth.dependencies import get_current_actor
from dentalcare.auth.policy import Actor, resolve_owner
from dentalcare.common.database.database import get_db_session
from dentalcare.common.utils.global_messages import GlobalMessages

from . import reminders_service as service
from .schemas import ReminderCreateRequest, ReminderResponse, ReminderDeleteResponse

router = APIRouter(prefix="/reminders", tags=["Reminders"])


@router.get("", response_model=List[ReminderResponse])
async def get_reminders(
    db: AsyncSession = Depends(get_db_session),
    actor: Actor = Depends(get_current_actor)
):
    """Every reminder (staff only)."""
    return await service.list_all_reminders(db, actor)


@router.get("/user/{user_id}", response_model=List[ReminderResponse])
async def get_user_reminders(
    user_id: str,
    db: AsyncSession = Depends(get_db_session),
    actor: Actor = Depends(get_current_actor)
):
    return await service.list_reminders_for_user(db, actor, resolve_owner(actor, user_id))


@router.post("", response_model=ReminderResponse, status_code=201)
async def create_reminder(
    request: ReminderCreateRequest,
    db: AsyncSession = Depends(get_db_session),
    actor: Actor = Depends(get_current_actor)
):
    """Send a reminder to a patient (staff only)."""
    return await service.create_reminder(db, actor, request)


@router.put("/{reminder_id}/read", response_model=ReminderResponse)
async def mark_reminder_read(
    reminder_id: UUID,
    db: AsyncSession = Depends(get_db_session),
    actor: Actor = Depends(get_current_actor)
):
    return await service.mark_reminder_read(db, actor, reminder_id)


@router.delete("/{reminder_id}", response_model=ReminderDeleteResponse)
async def delete_reminder(
    reminder_id: UUID,
    db: AsyncSession = Depends(get_db_session),
    actor: Actor = Depends(get_current_actor)
):
    await service.delete_reminder(db, actor, reminder_id)
    return ReminderDeleteResponse(message=GlobalMessages.REMINDER_DELETED)
