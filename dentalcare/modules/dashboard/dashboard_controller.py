# dentalcare/modules/dashboard/dashboard_controller.py
"""Dashboard controller with API endpoints."""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from dentalcare.auth.dependencies import get_current_actor
from dentalcare.auth.policy import Actor
from dentalcare.common.database.database import get_db_session

from . import dashboard_service as service
from .schemas import DashboardOverview, PatientWithCounts, TodayAppointmentsResponse


router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/overview", response_model=DashboardOverview)
async def get_overview(
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db_session)
):
    """
    Clinic totals for staff:
    - Patients, appointments and payments on record
    - Revenue from completed payments
    - The five most recent payments
    """
    return await service.get_overview(db, actor)


@router.get("/appointments/today", response_model=TodayAppointmentsResponse)
async def get_today_appointments(
    day: Optional[date] = Query(None, description="Defaults to today in the clinic's time zone"),
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db_session)
):
    return await service.get_today_appointments(db, actor, day)


@router.get("/patients", response_model=List[PatientWithCounts])
async def get_patients(
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db_session)
):
    """All patients with their appointment and payment counts."""
    return await service.get_patients(db, actor)
