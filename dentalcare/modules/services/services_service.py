# dentalcare/modules/services/services_service.py
"""Service catalog business logic."""

import logging
from decimal import Decimal
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from dentalcare.auth.policy import Actor, ensure_staff
from dentalcare.common.database.repository import Repository
from dentalcare.common.errors import Conflict, InvalidReference
from dentalcare.common.utils.global_messages import GlobalMessages
from dentalcare.models.models import Service
from .schemas import ServiceCreateRequest, ServiceUpdateRequest, ServiceResponse

logger = logging.getLogger(__name__)


def _build_service_response(service: Service) -> ServiceResponse:
    return ServiceResponse(
        id=service.id,
        name=service.name,
        description=service.description,
        duration=service.duration,
        price=float(service.price),
        is_active=service.is_active,
        created_by=service.created_by,
        created_at=service.created_at,
        updated_at=service.updated_at
    )


async def get_active_service(session: AsyncSession, service_id: UUID) -> Service:
    """Load a service that can currently be booked, else ``InvalidReference``."""
    service = await Repository(session, Service).find_by_id(service_id)
    if not service or not service.is_active:
        raise InvalidReference(GlobalMessages.SERVICE_UNAVAILABLE)
    return service


async def list_services(session: AsyncSession) -> List[ServiceResponse]:
    services = await Repository(session, Service).find_many(order_by=Service.name)
    return [_build_service_response(s) for s in services]


async def list_active_services(session: AsyncSession) -> List[ServiceResponse]:
    services = await Repository(session, Service).find_many(order_by=Service.name, is_active=True)
    return [_build_service_response(s) for s in services]


async def get_service(session: AsyncSession, service_id: UUID) -> ServiceResponse:
    service = await Repository(session, Service).get_by_id(service_id, GlobalMessages.SERVICE_NOT_FOUND)
    return _build_service_response(service)


async def create_service(
    session: AsyncSession,
    actor: Actor,
    request: ServiceCreateRequest
) -> ServiceResponse:
    ensure_staff(actor, GlobalMessages.STAFF_ONLY)
    services = Repository(session, Service)

    if await services.find_one(name=request.name):
        raise Conflict(GlobalMessages.SERVICE_NAME_TAKEN)

    service = await services.insert(
        conflict_message=GlobalMessages.SERVICE_NAME_TAKEN,
        name=request.name,
        description=request.description,
        duration=request.duration,
        price=Decimal(str(request.price)),
        is_active=request.is_active,
        created_by=actor.id
    )
    logger.info("Service %s (%s) created by %s", service.id, service.name, actor.id)
    return _build_service_response(service)


async def update_service(
    session: AsyncSession,
    actor: Actor,
    service_id: UUID,
    request: ServiceUpdateRequest
) -> ServiceResponse:
    ensure_staff(actor, GlobalMessages.STAFF_ONLY)
    services = Repository(session, Service)
    service = await services.get_by_id(service_id, GlobalMessages.SERVICE_NOT_FOUND)

    patch = {k: v for k, v in request.model_dump(exclude_unset=True).items() if v is not None or k == "description"}

    new_name = patch.get("name")
    if new_name is not None and new_name != service.name:
        if await services.find_one(Service.id != service.id, name=new_name):
            raise Conflict(GlobalMessages.SERVICE_NAME_TAKEN)

    if "price" in patch:
        patch["price"] = Decimal(str(patch["price"]))

    service = await services.update(service, patch, GlobalMessages.SERVICE_NAME_TAKEN)
    logger.info("Service %s updated by %s: %s", service.id, actor.id, sorted(patch))
    return _build_service_response(service)


async def delete_service(session: AsyncSession, actor: Actor, service_id: UUID) -> None:
    """Remove a service; appointments that booked it keep an empty service reference."""
    ensure_staff(actor, GlobalMessages.STAFF_ONLY)
    services = Repository(session, Service)
    service = await services.get_by_id(service_id, GlobalMessages.SERVICE_NOT_FOUND)
    await services.delete(service)
    logger.info("Service %s deleted by %s", service_id, actor.id)
