# dentalcare/modules/patients/patients_service.py
"""Patient information: at most one record per patient."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from dentalcare.auth.policy import Action, Actor, ensure_access
from dentalcare.common.database.repository import Repository
from dentalcare.common.errors import Conflict, InvalidReference, NotFound
from dentalcare.common.utils.global_messages import GlobalMessages
from dentalcare.models.models import PatientInfo, User
from .schemas import (
    EmergencyContact, PatientInfoCreateRequest, PatientInfoUpdateRequest, PatientInfoResponse
)

logger = logging.getLogger(__name__)

_CONTACT_COLUMNS = {
    "name": "emergency_contact_name",
    "phone": "emergency_contact_phone",
    "relationship": "emergency_contact_relationship",
}


def _build_patient_info_response(info: PatientInfo) -> PatientInfoResponse:
    return PatientInfoResponse(
        id=info.id,
        patient_id=info.patient_id,
        age=info.age,
        gender=info.gender,
        address=info.address,
        blood_type=info.blood_type,
        medical_history=info.medical_history,
        allergies=info.allergies,
        medications=info.medications,
        emergency_contact=EmergencyContact(
            name=info.emergency_contact_name,
            phone=info.emergency_contact_phone,
            relationship=info.emergency_contact_relationship
        ),
        last_visit=info.last_visit,
        created_at=info.created_at,
        updated_at=info.updated_at
    )


def _to_columns(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten the nested emergency contact onto its columns."""
    values = dict(fields)
    contact = values.pop("emergency_contact", None) or {}
    for key, column in _CONTACT_COLUMNS.items():
        if key in contact:
            values[column] = contact[key]
    return values


async def _require_user(session: AsyncSession, user_id: UUID) -> None:
    if not await Repository(session, User).find_by_id(user_id):
        raise InvalidReference(GlobalMessages.USER_NOT_FOUND)


async def get_patient_info(session: AsyncSession, actor: Actor, patient_id: UUID) -> PatientInfoResponse:
    ensure_access(actor, Action.READ, patient_id)
    info = await Repository(session, PatientInfo).find_one(patient_id=patient_id)
    if not info:
        raise NotFound(GlobalMessages.PATIENT_INFO_NOT_FOUND)
    return _build_patient_info_response(info)


async def create_patient_info(
    session: AsyncSession,
    actor: Actor,
    request: PatientInfoCreateRequest
) -> PatientInfoResponse:
    patient_id = request.patient_id or actor.id
    ensure_access(actor, Action.CREATE, patient_id)
    await _require_user(session, patient_id)

    records = Repository(session, PatientInfo)
    if await records.find_one(patient_id=patient_id):
        raise Conflict(GlobalMessages.PATIENT_INFO_EXISTS)

    values = _to_columns(request.model_dump(exclude_unset=True, exclude={"patient_id"}))
    info = await records.insert(
        conflict_message=GlobalMessages.PATIENT_INFO_EXISTS,
        patient_id=patient_id,
        **values
    )
    logger.info("Patient info %s created for %s by %s", info.id, patient_id, actor.id)
    return _build_patient_info_response(info)


async def update_patient_info(
    session: AsyncSession,
    actor: Actor,
    patient_id: UUID,
    request: PatientInfoUpdateRequest
) -> PatientInfoResponse:
    """Change the fields present in ``request``, creating the record if missing."""
    ensure_access(actor, Action.UPDATE, patient_id)

    values = _to_columns(request.model_dump(exclude_unset=True, exclude={"update_last_visit"}))
    if request.update_last_visit:
        values["last_visit"] = datetime.now(timezone.utc)

    records = Repository(session, PatientInfo)
    info = await records.find_one(patient_id=patient_id)
    if info is None:
        await _require_user(session, patient_id)
        info = await records.insert(
            conflict_message=GlobalMessages.PATIENT_INFO_EXISTS,
            patient_id=patient_id,
            **values
        )
        logger.info("Patient info %s created on update for %s by %s", info.id, patient_id, actor.id)
    else:
        info = await records.update(info, values)
        logger.info("Patient info %s updated by %s: %s", info.id, actor.id, sorted(values))
    return _build_patient_info_response(info)
