import uuid
from datetime import datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from dentalcare.common.errors import Forbidden, InvalidReference, NotFound
from dentalcare.models.models import Payment, PaymentStatus
from dentalcare.modules.payments import payments_service
from dentalcare.modules.payments.schemas import PaymentCreateRequest, PaymentStatusUpdateRequest


async def test_patient_pays_as_themselves(session, patient_actor, other_patient, appointment):
    result = await payments_service.create_payment(
        session, patient_actor,
        PaymentCreateRequest(user_id=other_patient.id, appointment_id=appointment.id, amount=60, payment_method="card")
    )
    assert result.user_id == patient_actor.id
    assert result.status is PaymentStatus.PENDING
    assert result.amount == 60.0
    assert result.user.name == "Lena Fischer"


async def test_staff_payment_defaults_to_appointment_patient(session, assistant_actor, appointment):
    result = await payments_service.create_payment(
        session, assistant_actor,
        PaymentCreateRequest(appointment_id=appointment.id, amount=45.5, status=PaymentStatus.COMPLETED)
    )
    assert result.user_id == appointment.user_id
    assert result.status is PaymentStatus.COMPLETED


async def test_payment_needs_existing_appointment(session, patient_actor):
    with pytest.raises(InvalidReference):
        await payments_service.create_payment(
            session, patient_actor, PaymentCreateRequest(appointment_id=uuid.uuid4(), amount=10)
        )


async def test_patient_cannot_record_completed_payment(session, patient_actor, appointment):
    with pytest.raises(Forbidden):
        await payments_service.create_payment(
            session, patient_actor,
            PaymentCreateRequest(appointment_id=appointment.id, amount=10, status=PaymentStatus.COMPLETED)
        )


def test_negative_amount_is_rejected():
    with pytest.raises(ValidationError):
        PaymentCreateRequest(appointment_id=uuid.uuid4(), amount=-1)


def test_amount_beyond_column_precision_is_rejected():
    with pytest.raises(ValidationError):
        PaymentCreateRequest(appointment_id=uuid.uuid4(), amount=1e9)


async def test_staff_moves_payment_between_any_statuses(session, doctor_actor, patient_actor, appointment):
    payment = await payments_service.create_payment(
        session, patient_actor, PaymentCreateRequest(appointment_id=appointment.id, amount=10)
    )
    for status in (PaymentStatus.COMPLETED, PaymentStatus.FAILED, PaymentStatus.PENDING):
        result = await payments_service.update_payment_status(
            session, doctor_actor, payment.id, PaymentStatusUpdateRequest(status=status)
        )
        assert result.status is status


async def test_patient_cannot_change_payment_status(session, patient_actor, appointment):
    payment = await payments_service.create_payment(
        session, patient_actor, PaymentCreateRequest(appointment_id=appointment.id, amount=10)
    )
    with pytest.raises(Forbidden):
        await payments_service.update_payment_status(
            session, patient_actor, payment.id, PaymentStatusUpdateRequest(status=PaymentStatus.COMPLETED)
        )


async def test_update_status_of_missing_payment(session, doctor_actor):
    with pytest.raises(NotFound):
        await payments_service.update_payment_status(
            session, doctor_actor, uuid.uuid4(), PaymentStatusUpdateRequest(status=PaymentStatus.FAILED)
        )


async def test_get_payment_owner_or_staff(session, patient_actor, other_patient_actor, assistant_actor, appointment):
    payment = await payments_service.create_payment(
        session, patient_actor, PaymentCreateRequest(appointment_id=appointment.id, amount=10)
    )
    assert (await payments_service.get_payment(session, patient_actor, payment.id)).id == payment.id
    assert (await payments_service.get_payment(session, assistant_actor, payment.id)).id == payment.id
    with pytest.raises(Forbidden):
        await payments_service.get_payment(session, other_patient_actor, payment.id)


async def test_user_listing_is_newest_first(session, patient, patient_actor, appointment):
    for day, amount in ((1, "10.00"), (3, "30.00"), (2, "20.00")):
        session.add(Payment(
            user_id=patient.id, appointment_id=appointment.id, amount=Decimal(amount),
            created_at=datetime(2025, 1, day, 12, 0)
        ))
    await session.commit()

    result = await payments_service.list_payments_for_user(session, patient_actor, patient.id)
    assert [p.amount for p in result] == [30.0, 20.0, 10.0]


async def test_user_listing_of_someone_else_is_forbidden(session, other_patient_actor, patient):
    with pytest.raises(Forbidden):
        await payments_service.list_payments_for_user(session, other_patient_actor, patient.id)


async def test_list_all_is_staff_only(session, patient_actor, doctor_actor, appointment):
    await payments_service.create_payment(
        session, patient_actor, PaymentCreateRequest(appointment_id=appointment.id, amount=10)
    )
    assert len(await payments_service.list_all_payments(session, doctor_actor)) == 1
    with pytest.raises(Forbidden):
        await payments_service.list_all_payments(session, patient_actor)
