# dentalcare/modules/services/services_controller.py
"""Service catalog controller with API routes."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dentalcare.auth.dependencies import get_current_actor
from dentalcare.auth.policy import Actor
from dentalcare.common.database.database import get_db_session
from dentalcare.common.utils.global_messages import GlobalMessages

from . import services_service as service
from .schemas import (
    ServiceCreateRequest, ServiceUpdateRequest, ServiceResponse, ServiceDeleteResponse
)

router = APIRouter(prefix="/services", tags=["Services"])


# ============================================================================
# PUBLIC CATALOG
# ============================================================================

@router.get("", response_model=List[ServiceResponse])
async def list_services(db: AsyncSession = Depends(get_db_session)):
    """List every service, active or not."""
    return await service.list_services(db)


@router.get("/active", response_model=List[ServiceResponse])
async def list_active_services(db: AsyncSession = Depends(get_db_session)):
    """List services that can currently be booked."""
    return await service.list_active_services(db)


@router.get("/{service_id}", response_model=ServiceResponse)
async def get_service(service_id: UUID, db: AsyncSession = Depends(get_db_session)):
    return await service.get_service(db, service_id)


# ============================================================================
# STAFF MANAGEMENT
# ============================================================================

@router.post("", response_model=ServiceResponse, status_code=201)
async def create_service(
    request: ServiceCreateRequest,
    db: AsyncSession = Depends(get_db_session),
    actor: Actor = Depends(get_current_actor)
):
    """Add a service to the catalog (staff only)."""
    return await service.create_service(db, actor, request)


@router.put("/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: UUID,
    request: ServiceUpdateRequest,
    db: AsyncSession = Depends(get_db_session),
    actor: Actor = Depends(get_current_actor)
):
    """Update or rename a service (staff only)."""
    return await service.update_service(db, actor, service_id, request)


@router.delete("/{service_id}", response_model=ServiceDeleteResponse)
async def delete_service(
    service_id: UUID,
    db: AsyncSession = Depends(get_db_session),
    actor: Actor = Depends(get_current_actor)
):
    await service.delete_service(db, actor, service_id)
    return ServiceDeleteResponse(message=GlobalMessages.SERVICE_DELETED)
