from datetime import date, datetime
from decimal import Decimal

import pytest

from dentalcare.common.errors import Forbidden
from dentalcare.models.models import Payment, PaymentStatus
from dentalcare.modules.dashboard import dashboard_service
from tests.helpers import MONDAY, SATURDAY


async def add_payment(session, appointment, amount, status, day=1):
    session.add(Payment(
        user_id=appointment.user_id,
        appointment_id=appointment.id,
        amount=Decimal(amount),
        status=status,
        created_at=datetime(2025, 1, day, 12, 0),
    ))
    await session.commit()


async def test_overview_revenue_is_zero_without_completed_payments(session, doctor_actor, appointment):
    await add_payment(session, appointment, "80.00", PaymentStatus.PENDING)

    overview = await dashboard_service.get_overview(session, doctor_actor)

    assert overview.total_revenue == 0
    assert overview.total_payments == 1
    assert overview.total_appointments == 1
    assert overview.total_patients == 1


async def test_overview_revenue_sums_completed_payments(session, assistant_actor, appointment):
    await add_payment(session, appointment, "100.50", PaymentStatus.COMPLETED)
    await add_payment(session, appointment, "49.50", PaymentStatus.COMPLETED)
    await add_payment(session, appointment, "999.00", PaymentStatus.FAILED)

    overview = await dashboard_service.get_overview(session, assistant_actor)
    assert overview.total_revenue == 150.0


async def test_overview_on_empty_clinic(session, doctor_actor):
    overview = await dashboard_service.get_overview(session, doctor_actor)
    assert overview.total_revenue == 0
    assert overview.recent_payments == []


async def test_overview_keeps_five_most_recent_payments(session, doctor_actor, appointment):
    for day in range(1, 8):
        await add_payment(session, appointment, f"{day}.00", PaymentStatus.PENDING, day=day)

    overview = await dashboard_service.get_overview(session, doctor_actor)
    assert [p.amount for p in overview.recent_payments] == [7.0, 6.0, 5.0, 4.0, 3.0]


async def test_today_window_includes_only_that_day(session, doctor_actor, patient, make_appointment):
    late = await make_appointment(date=SATURDAY.replace(hour=16))
    early = await make_appointment(date=SATURDAY.replace(hour=9))
    await make_appointment(date=MONDAY)
    await make_appointment(date=datetime(2025, 1, 5, 0, 0))

    result = await dashboard_service.get_today_appointments(session, doctor_actor, date(2025, 1, 4))

    assert [a.id for a in result.appointments] == [early.id, late.id]
    first = result.appointments[0]
    assert first.patient.email == patient.email
    assert first.doctor.name == "Dr. Sara Karimi"
    assert first.service.name == "Cleaning"


async def test_patients_listing_counts(session, doctor_actor, patient, other_patient, make_appointment):
    first = await make_appointment()
    await make_appointment()
    await add_payment(session, first, "10.00", PaymentStatus.PENDING)

    result = {p.id: p for p in await dashboard_service.get_patients(session, doctor_actor)}

    assert result[patient.id].appointment_count == 2
    assert result[patient.id].payment_count == 1
    assert result[other_patient.id].appointment_count == 0
    assert doctor_actor.id not in result


@pytest.mark.parametrize("call", [
    dashboard_service.get_overview,
    dashboard_service.get_today_appointments,
    dashboard_service.get_patients,
])
async def test_dashboard_is_staff_only(session, patient_actor, call):
    with pytest.raises(Forbidden):
        await call(session, patient_actor)
