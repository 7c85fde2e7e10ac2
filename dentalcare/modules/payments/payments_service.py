# dentalcare/modules/payments/payments_service.py
"""Payment bookkeeping. Payments are never deleted."""

import logging
from decimal import Decimal
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from dentalcare.auth.policy import Action, Actor, ensure_access, ensure_staff
from dentalcare.common.database.repository import Repository
from dentalcare.common.errors import Forbidden, InvalidReference
from dentalcare.common.utils.global_messages import GlobalMessages
from dentalcare.models.models import Appointment, Payment, PaymentStatus, User
from dentalcare.modules.appointments.schemas import UserSummary
from .schemas import PaymentCreateRequest, PaymentStatusUpdateRequest, PaymentResponse

logger = logging.getLogger(__name__)


async def _build_payment_response(session: AsyncSession, payment: Payment) -> PaymentResponse:
    user_summary = None
    if payment.user_id:
        user = await session.get(User, payment.user_id)
        if user:
            user_summary = UserSummary(id=user.id, name=user.name, email=user.email)

    return PaymentResponse(
        id=payment.id,
        user_id=payment.user_id,
        appointment_id=payment.appointment_id,
        user=user_summary,
        amount=float(payment.amount),
        status=payment.status,
        payment_method=payment.payment_method,
        created_at=payment.created_at
    )


async def build_payment_responses(session: AsyncSession, payments: List[Payment]) -> List[PaymentResponse]:
    responses = []
    for payment in payments:
        responses.append(await _build_payment_response(session, payment))
    return responses


async def create_payment(
    session: AsyncSession,
    actor: Actor,
    request: PaymentCreateRequest
) -> PaymentResponse:
    appointment = await Repository(session, Appointment).find_by_id(request.appointment_id)
    if not appointment:
        raise InvalidReference(GlobalMessages.PAYMENT_APPOINTMENT_INVALID)

    if actor.is_staff:
        user_id = request.user_id or appointment.user_id
    else:
        user_id = actor.id
        if request.status is not PaymentStatus.PENDING:
            raise Forbidden(GlobalMessages.PAYMENT_STATUS_STAFF_ONLY)
    ensure_access(actor, Action.CREATE, user_id)

    payment = await Repository(session, Payment).insert(
        user_id=user_id,
        appointment_id=appointment.id,
        amount=Decimal(str(request.amount)),
        status=request.status,
        payment_method=request.payment_method
    )
    logger.info("Payment %s of %s recorded for %s (%s)", payment.id, payment.amount, user_id, payment.status.value)
    return await _build_payment_response(session, payment)


async def update_payment_status(
    session: AsyncSession,
    actor: Actor,
    payment_id: UUID,
    request: PaymentStatusUpdateRequest
) -> PaymentResponse:
    """Move a payment to any status (staff only)."""
    ensure_staff(actor, GlobalMessages.PAYMENT_STATUS_STAFF_ONLY)
    payments = Repository(session, Payment)
    payment = await payments.get_by_id(payment_id, GlobalMessages.PAYMENT_NOT_FOUND)
    previous = payment.status
    payment = await payments.update(payment, {"status": request.status})
    logger.info("Payment %s moved from %s to %s by %s", payment.id, previous.value, payment.status.value, actor.id)
    return await _build_payment_response(session, payment)


async def get_payment(session: AsyncSession, actor: Actor, payment_id: UUID) -> PaymentResponse:
    payment = await Repository(session, Payment).get_by_id(payment_id, GlobalMessages.PAYMENT_NOT_FOUND)
    ensure_access(actor, Action.READ, payment.user_id)
    return await _build_payment_response(session, payment)


async def list_payments_for_user(session: AsyncSession, actor: Actor, user_id: UUID) -> List[PaymentResponse]:
    ensure_access(actor, Action.READ, user_id)
    payments = await Repository(session, Payment).find_many(
        order_by=Payment.created_at.desc(), user_id=user_id
    )
    return await build_payment_responses(session, payments)


async def list_all_payments(session: AsyncSession, actor: Actor) -> List[PaymentResponse]:
    ensure_staff(actor, GlobalMessages.STAFF_ONLY)
    payments = await Repository(session, Payment).find_many(order_by=Payment.created_at.desc())
    return await build_payment_responses(session, payments)
