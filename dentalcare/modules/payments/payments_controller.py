# dentalcare/modules/payments/payments_controller.py
"""Payments controller with API routes."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dentalcare.auth.dependencies import get_current_actor
from dentalcare.auth.policy import Actor, resolve_owner
from dentalcare.common.database.database import get_db_session

from . import payments_service as service
from .schemas import PaymentCreateRequest, PaymentStatusUpdateRequest, PaymentResponse

router = APIRouter(prefix="/payments", tags=["Payments"])


@router.get("", response_model=List[PaymentResponse])
async def get_payments(
    db: AsyncSession = Depends(get_db_session),
    actor: Actor = Depends(get_current_actor)
):
    """Every payment, newest first (staff only)."""
    return await service.list_all_payments(db, actor)


@router.get("/user/{user_id}", response_model=List[PaymentResponse])
async def get_user_payments(
    user_id: str,
    db: AsyncSession = Depends(get_db_session),
    actor: Actor = Depends(get_current_actor)
):
    return await service.list_payments_for_user(db, actor, resolve_owner(actor, user_id))


@router.get("/{payment_id}", response_model=PaymentResponse)
async def get_payment(
    payment_id: UUID,
    db: AsyncSession = Depends(get_db_session),
    actor: Actor = Depends(get_current_actor)
):
    return await service.get_payment(db, actor, payment_id)


@router.post("", response_model=PaymentResponse, status_code=201)
async def create_payment(
    request: PaymentCreateRequest,
    db: AsyncSession = Depends(get_db_session),
    actor: Actor = Depends(get_current_actor)
):
    return await service.create_payment(db, actor, request)


@router.put("/{payment_id}/status", response_model=PaymentResponse)
async def update_payment_status(
    payment_id: UUID,
    request: PaymentStatusUpdateRequest,
    db: AsyncSession = Depends(get_db_session),
    actor: Actor = Depends(get_current_actor)
):
    """Record the outcome of a payment (staff only)."""
    return await service.update_payment_status(db, actor, payment_id, request)
