import uuid

import pytest
from pydantic import ValidationError

from dentalcare.common.errors import Conflict, Forbidden, NotFound
from dentalcare.modules.services import services_service
from dentalcare.modules.services.schemas import ServiceCreateRequest, ServiceUpdateRequest


def new_service(name="Cleaning", **overrides):
    values = {"name": name, "duration": 30, "price": 60.0}
    values.update(overrides)
    return ServiceCreateRequest(**values)


async def test_staff_create_service(session, doctor_actor):
    result = await services_service.create_service(session, doctor_actor, new_service(description="Polish"))
    assert result.name == "Cleaning"
    assert result.is_active is True
    assert result.price == 60.0
    assert result.created_by == doctor_actor.id


async def test_patient_cannot_create_service(session, patient_actor):
    with pytest.raises(Forbidden):
        await services_service.create_service(session, patient_actor, new_service())


async def test_duplicate_name_conflicts(session, doctor_actor, assistant_actor):
    await services_service.create_service(session, doctor_actor, new_service())
    with pytest.raises(Conflict):
        await services_service.create_service(session, assistant_actor, new_service())


async def test_names_are_case_sensitive(session, doctor_actor):
    await services_service.create_service(session, doctor_actor, new_service("Cleaning"))
    result = await services_service.create_service(session, doctor_actor, new_service("cleaning"))
    assert result.name == "cleaning"


async def test_rename_onto_existing_name_conflicts(session, doctor_actor):
    await services_service.create_service(session, doctor_actor, new_service("Cleaning"))
    filling = await services_service.create_service(session, doctor_actor, new_service("Filling"))
    with pytest.raises(Conflict):
        await services_service.update_service(
            session, doctor_actor, filling.id, ServiceUpdateRequest(name="Cleaning")
        )


async def test_keeping_own_name_is_not_a_conflict(session, doctor_actor):
    created = await services_service.create_service(session, doctor_actor, new_service())
    result = await services_service.update_service(
        session, doctor_actor, created.id, ServiceUpdateRequest(name="Cleaning", price=75.5)
    )
    assert result.price == 75.5
    assert result.duration == 30


async def test_patient_cannot_update_service(session, patient_actor, service):
    with pytest.raises(Forbidden):
        await services_service.update_service(
            session, patient_actor, service.id, ServiceUpdateRequest(price=1.0)
        )


async def test_active_listing_hides_inactive(session, make_service):
    await make_service(name="Cleaning")
    await make_service(name="Whitening", is_active=False)

    everything = await services_service.list_services(session)
    active = await services_service.list_active_services(session)

    assert {s.name for s in everything} == {"Cleaning", "Whitening"}
    assert [s.name for s in active] == ["Cleaning"]


async def test_get_service(session, service):
    result = await services_service.get_service(session, service.id)
    assert result.id == service.id


async def test_get_missing_service(session):
    with pytest.raises(NotFound):
        await services_service.get_service(session, uuid.uuid4())


async def test_delete_service(session, assistant_actor, service):
    await services_service.delete_service(session, assistant_actor, service.id)
    with pytest.raises(NotFound):
        await services_service.get_service(session, service.id)


async def test_patient_cannot_delete_service(session, patient_actor, service):
    with pytest.raises(Forbidden):
        await services_service.delete_service(session, patient_actor, service.id)


@pytest.mark.parametrize("field, value", [
    ("duration", 0), ("duration", 2**31), ("price", -1), ("price", 1e9), ("name", ""),
])
def test_request_rejects_bad_values(field, value):
    with pytest.raises(ValidationError):
        new_service(**{field: value})


@pytest.mark.parametrize("field, value", [("duration", 2**31), ("price", 100_000_000)])
def test_update_rejects_values_the_columns_cannot_hold(field, value):
    with pytest.raises(ValidationError):
        ServiceUpdateRequest(**{field: value})


def test_largest_storable_price_is_accepted():
    assert new_service(price=99_999_999.99).price == 99_999_999.99
