from dentalcare.models.models import UserRole
from tests.helpers import SATURDAY, TEST_PASSWORD, THURSDAY, auth_headers


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_register_login_and_me(client):
    response = await client.post("/auth/register", json={
        "name": "Nora Lind",
        "email": "nora.lind@dentalcare.io",
        "password": TEST_PASSWORD,
    })
    assert response.status_code == 201
    body = response.json()
    assert body["user"]["role"] == "patient"
    assert body["token_type"] == "bearer"

    response = await client.post("/auth/login", json={"email": "nora.lind@dentalcare.io", "password": TEST_PASSWORD})
    assert response.status_code == 200
    token = response.json()["access_token"]

    response = await client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["email"] == "nora.lind@dentalcare.io"


async def test_register_duplicate_email_conflicts(client, patient):
    response = await client.post("/auth/register", json={
        "name": "Copy", "email": patient.email, "password": TEST_PASSWORD,
    })
    assert response.status_code == 409
    assert response.json()["kind"] == "conflict"


async def test_register_short_password_is_validation_failure(client):
    response = await client.post("/auth/register", json={
        "name": "Short", "email": "short@dentalcare.io", "password": "123",
    })
    assert response.status_code == 422
    assert response.json()["kind"] == "validation_failed"


async def test_login_with_wrong_password(client, patient):
    response = await client.post("/auth/login", json={"email": patient.email, "password": "wrong-password"})
    assert response.status_code == 401


async def test_protected_route_rejects_bad_token(client):
    response = await client.get("/appointments", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


async def test_logout(client, patient):
    response = await client.post("/auth/logout", headers=auth_headers(patient))
    assert response.status_code == 200


async def test_book_and_list_own_appointments_via_me(client, patient, doctor, service):
    response = await client.post("/appointments", headers=auth_headers(patient), json={
        "doctor_id": str(doctor.id),
        "service_id": str(service.id),
        "date": SATURDAY.isoformat(),
        "notes": "Sensitive molar",
    })
    assert response.status_code == 201
    created = response.json()
    assert created["user_id"] == str(patient.id)
    assert created["service"]["name"] == "Cleaning"

    response = await client.get("/appointments/user/me", headers=auth_headers(patient))
    assert response.status_code == 200
    assert [a["id"] for a in response.json()] == [created["id"]]


async def test_booking_on_closed_day_renders_invalid_schedule(client, patient, doctor, service):
    response = await client.post("/appointments", headers=auth_headers(patient), json={
        "doctor_id": str(doctor.id),
        "service_id": str(service.id),
        "date": THURSDAY.isoformat(),
    })
    assert response.status_code == 400
    assert response.json() == {
        "kind": "invalid_schedule",
        "detail": "Appointments can only be booked from Saturday to Wednesday",
    }


async def test_staff_cancel_renders_forbidden(client, doctor, appointment):
    response = await client.delete(f"/appointments/{appointment.id}", headers=auth_headers(doctor))
    assert response.status_code == 403
    assert response.json()["kind"] == "forbidden"


async def test_owner_cancel(client, patient, appointment):
    response = await client.delete(f"/appointments/{appointment.id}", headers=auth_headers(patient))
    assert response.status_code == 200

    response = await client.get(f"/appointments/{appointment.id}", headers=auth_headers(patient))
    assert response.status_code == 404
    assert response.json()["kind"] == "not_found"


async def test_public_service_catalog(client, make_service):
    await make_service(name="Cleaning")
    await make_service(name="Whitening", is_active=False)

    response = await client.get("/services/active")
    assert response.status_code == 200
    assert [s["name"] for s in response.json()] == ["Cleaning"]


async def test_staff_creates_service_and_duplicate_conflicts(client, assistant):
    payload = {"name": "Filling", "duration": 45, "price": 120}
    response = await client.post("/services", headers=auth_headers(assistant), json=payload)
    assert response.status_code == 201

    response = await client.post("/services", headers=auth_headers(assistant), json=payload)
    assert response.status_code == 409


async def test_patient_info_me_collapse(client, patient):
    response = await client.put("/users/patient-info/me", headers=auth_headers(patient), json={
        "blood_type": "AB-",
        "update_last_visit": True,
    })
    assert response.status_code == 200
    body = response.json()
    assert body["patient_id"] == str(patient.id)
    assert body["blood_type"] == "AB-"
    assert body["last_visit"] is not None

    response = await client.get("/users/patient-info/me", headers=auth_headers(patient))
    assert response.status_code == 200


async def test_payment_status_change_is_staff_only(client, patient, doctor, appointment):
    response = await client.post("/payments", headers=auth_headers(patient), json={
        "appointment_id": str(appointment.id), "amount": 60, "payment_method": "card",
    })
    assert response.status_code == 201
    payment_id = response.json()["id"]

    response = await client.put(f"/payments/{payment_id}/status", headers=auth_headers(patient),
                                json={"status": "completed"})
    assert response.status_code == 403

    response = await client.put(f"/payments/{payment_id}/status", headers=auth_headers(doctor),
                                json={"status": "completed"})
    assert response.status_code == 200
    assert response.json()["status"] == "completed"

    response = await client.get("/dashboard/overview", headers=auth_headers(doctor))
    assert response.json()["total_revenue"] == 60.0


async def test_reminder_read_by_addressee(client, patient, assistant, appointment):
    response = await client.post("/reminders", headers=auth_headers(assistant), json={
        "user_id": str(patient.id),
        "appointment_id": str(appointment.id),
        "title": "Tomorrow",
        "message": "See you at 10:00.",
        "date": "2025-01-03T09:00:00",
    })
    assert response.status_code == 201
    reminder_id = response.json()["id"]

    response = await client.put(f"/reminders/{reminder_id}/read", headers=auth_headers(assistant))
    assert response.status_code == 403

    response = await client.put(f"/reminders/{reminder_id}/read", headers=auth_headers(patient))
    assert response.status_code == 200
    assert response.json()["is_read"] is True


async def test_users_listing_is_staff_only(client, patient, doctor):
    response = await client.get("/users", headers=auth_headers(patient))
    assert response.status_code == 403

    response = await client.get("/users", headers=auth_headers(doctor))
    assert response.status_code == 200
    assert {u["role"] for u in response.json()} == {UserRole.PATIENT.value, UserRole.DOCTOR.value}


async def test_invalid_owner_path_is_validation_failure(client, doctor):
    response = await client.get("/appointments/user/someone", headers=auth_headers(doctor))
    assert response.status_code == 422
    assert response.json()["kind"] == "validation_failed"
