# dentalcare/modules/patients/patients_controller.py
"""Patient information routes, nested under /users."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dentalcare.auth.dependencies import get_current_actor
from dentalcare.auth.policy import Actor, resolve_owner
from dentalcare.common.database.database import get_db_session

from . import patients_service as service
from .schemas import PatientInfoCreateRequest, PatientInfoUpdateRequest, PatientInfoResponse

router = APIRouter(prefix="/users/patient-info", tags=["Patient Info"])


@router.get("/{patient_id}", response_model=PatientInfoResponse)
async def get_patient_info(
    patient_id: str,
    db: AsyncSession = Depends(get_db_session),
    actor: Actor = Depends(get_current_actor)
):
    """Medical details of a patient; ``me`` means the caller."""
    return await service.get_patient_info(db, actor, resolve_owner(actor, patient_id))


@router.post("", response_model=PatientInfoResponse, status_code=201)
async def create_patient_info(
    request: PatientInfoCreateRequest,
    db: AsyncSession = Depends(get_db_session),
    actor: Actor = Depends(get_current_actor)
):
    return await service.create_patient_info(db, actor, request)


@router.put("/{patient_id}", response_model=PatientInfoResponse)
async def update_patient_info(
    patient_id: str,
    request: PatientInfoUpdateRequest,
    db: AsyncSession = Depends(get_db_session),
    actor: Actor = Depends(get_current_actor)
):
    """
    Update patient details, creating them if none exist yet.

    Send `update_last_visit: true` to stamp the visit time.
    """
    return await service.update_patient_info(db, actor, resolve_owner(actor, patient_id), request)
