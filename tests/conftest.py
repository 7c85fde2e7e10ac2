import os

# Settings are read at import time
os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["CLINIC_TIMEZONE"] = "UTC"

import itertools
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from dentalcare.auth.auth_service import hash_password
from dentalcare.auth.policy import Actor
from dentalcare.common.database.database import get_db_session
from dentalcare.main import app
from dentalcare.models.models import Appointment, Base, Service, User, UserRole
from tests.helpers import SATURDAY, TEST_PASSWORD

PASSWORD_HASH = hash_password(TEST_PASSWORD)

_email_counter = itertools.count(1)


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_user(session):
    async def _make(role=UserRole.PATIENT, name=None, email=None, phone=None):
        n = next(_email_counter)
        user = User(
            name=name or f"{role.value.title()} {n}",
            email=email or f"{role.value}{n}@dentalcare.io",
            password_hash=PASSWORD_HASH,
            role=role,
            phone=phone,
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user
    return _make


@pytest.fixture
async def patient(make_user):
    return await make_user(UserRole.PATIENT, name="Lena Fischer")


@pytest.fixture
async def other_patient(make_user):
    return await make_user(UserRole.PATIENT, name="Marco Bianchi")


@pytest.fixture
async def doctor(make_user):
    return await make_user(UserRole.DOCTOR, name="Dr. Sara Karimi")


@pytest.fixture
async def assistant(make_user):
    return await make_user(UserRole.ASSISTANT, name="Omid Rahimi")


@pytest.fixture
def patient_actor(patient):
    return Actor.from_user(patient)


@pytest.fixture
def other_patient_actor(other_patient):
    return Actor.from_user(other_patient)


@pytest.fixture
def doctor_actor(doctor):
    return Actor.from_user(doctor)


@pytest.fixture
def assistant_actor(assistant):
    return Actor.from_user(assistant)


@pytest.fixture
def actors(patient_actor, other_patient_actor, doctor_actor, assistant_actor):
    """Every actor fixture by name, for tests parametrized over callers."""
    return {
        "patient": patient_actor,
        "other_patient": other_patient_actor,
        "doctor": doctor_actor,
        "assistant": assistant_actor,
    }


@pytest.fixture
def make_service(session, doctor):
    async def _make(name="Cleaning", is_active=True, price="60.00", duration=30):
        service = Service(
            name=name,
            duration=duration,
            price=Decimal(price),
            is_active=is_active,
            created_by=doctor.id,
        )
        session.add(service)
        await session.commit()
        await session.refresh(service)
        return service
    return _make


@pytest.fixture
async def service(make_service):
    return await make_service()


@pytest.fixture
def make_appointment(session, patient, doctor, service):
    """Insert an appointment row directly, skipping booking rules."""
    async def _make(user=None, date=SATURDAY, **values):
        appointment = Appointment(
            user_id=(user or patient).id,
            doctor_id=doctor.id,
            service_id=service.id,
            date=date,
            **values,
        )
        session.add(appointment)
        await session.commit()
        await session.refresh(appointment)
        return appointment
    return _make


@pytest.fixture
async def appointment(make_appointment):
    return await make_appointment()


@pytest.fixture
async def client(session_factory):
    async def _get_test_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = _get_test_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
