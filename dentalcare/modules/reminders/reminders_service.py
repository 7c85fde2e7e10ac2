# dentalcare/modules/reminders/reminders_service.py
"""Reminders service for business logic."""

import logging
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from dentalcare.auth.policy import Action, Actor, ensure_access, ensure_addressee, ensure_staff
from dentalcare.common.database.repository import Repository
from dentalcare.common.errors import InvalidReference
from dentalcare.common.utils.global_messages import GlobalMessages
from dentalcare.models.models import Appointment, Reminder, User
from .schemas import ReminderCreateRequest, ReminderResponse

logger = logging.getLogger(__name__)


async def _build_reminder_response(session: AsyncSession, reminder: Reminder) -> ReminderResponse:
    appointment = await session.get(Appointment, reminder.appointment_id)
    return ReminderResponse(
        id=reminder.id,
        user_id=reminder.user_id,
        appointment_id=reminder.appointment_id,
        appointment_date=appointment.date if appointment else None,
        title=reminder.title,
        message=reminder.message,
        date=reminder.date,
        is_read=reminder.is_read,
        created_at=reminder.created_at
    )


async def _build_many(session: AsyncSession, reminders: List[Reminder]) -> List[ReminderResponse]:
    return [await _build_reminder_response(session, r) for r in reminders]


async def create_reminder(
    session: AsyncSession,
    actor: Actor,
    request: ReminderCreateRequest
) -> ReminderResponse:
    ensure_staff(actor, GlobalMessages.STAFF_ONLY)

    if not await Repository(session, User).find_by_id(request.user_id):
        raise InvalidReference(GlobalMessages.REMINDER_USER_INVALID)
    if not await Repository(session, Appointment).find_by_id(request.appointment_id):
        raise InvalidReference(GlobalMessages.REMINDER_APPOINTMENT_INVALID)

    reminder = await Repository(session, Reminder).insert(
        user_id=request.user_id,
        appointment_id=request.appointment_id,
        title=request.title,
        message=request.message,
        date=request.date,
        is_read=False
    )
    logger.info("Reminder %s sent to %s by %s", reminder.id, reminder.user_id, actor.id)
    return await _build_reminder_response(session, reminder)


async def mark_reminder_read(session: AsyncSession, actor: Actor, reminder_id: UUID) -> ReminderResponse:
    """Only the recipient may mark a reminder read; staff cannot do it for them."""
    reminders = Repository(session, Reminder)
    reminder = await reminders.get_by_id(reminder_id, GlobalMessages.REMINDER_NOT_FOUND)
    ensure_addressee(actor, reminder.user_id, GlobalMessages.REMINDER_NOT_ADDRESSEE)
    reminder = await reminders.update(reminder, {"is_read": True})
    return await _build_reminder_response(session, reminder)


async def delete_reminder(session: AsyncSession, actor: Actor, reminder_id: UUID) -> None:
    reminders = Repository(session, Reminder)
    reminder = await reminders.get_by_id(reminder_id, GlobalMessages.REMINDER_NOT_FOUND)
    ensure_access(actor, Action.DELETE, reminder.user_id)
    await reminders.delete(reminder)
    logger.info("Reminder %s deleted by %s", reminder_id, actor.id)


async def list_reminders_for_user(session: AsyncSession, actor: Actor, user_id: UUID) -> List[ReminderResponse]:
    """Reminders of one user, soonest first."""
    ensure_access(actor, Action.READ, user_id)
    reminders = await Repository(session, Reminder).find_many(order_by=Reminder.date.asc(), user_id=user_id)
    return await _build_many(session, reminders)


async def list_all_reminders(session: AsyncSession, actor: Actor) -> List[ReminderResponse]:
    ensure_staff(actor, GlobalMessages.STAFF_ONLY)
    reminders = await Repository(session, Reminder).find_many(order_by=Reminder.date.asc())
    return await _build_many(session, reminders)
