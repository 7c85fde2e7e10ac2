# scripts/seed_test_data.py
"""
Seed script for local DentalCare testing.
Creates a doctor, an assistant and two patients, the service catalog, and a
little appointment, payment and reminder history between them.

Run: python -m scripts.seed_test_data
"""

import asyncio
from datetime import datetime, time, timedelta, timezone
from decimal import Decimal

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from dentalcare.common.database.database import async_session
from dentalcare.auth.auth_service import hash_password
from dentalcare.models.models import (
    User, PatientInfo, Service, Appointment, Payment, Reminder,
    UserRole, AppointmentStatus, PaymentStatus, Gender, BloodType
)
from dentalcare.modules.appointments.working_hours import WORKING_DAYS, clinic_today


# =============================================================================
# CONSTANTS - Test Credentials
# =============================================================================

TEST_PASSWORD = "Test1234!"  # Same password for all test users

SERVICES = [
    ("Cleaning", "Scaling and polishing", 30, Decimal("60.00")),
    ("Check-up", "Routine examination with x-rays", 20, Decimal("45.00")),
    ("Filling", "Composite filling, one surface", 45, Decimal("120.00")),
    ("Root Canal", "Endodontic treatment, single canal", 90, Decimal("450.00")),
    ("Whitening", "In-office whitening session", 60, Decimal("300.00")),
]


def next_working_day(days_ahead: int = 1) -> datetime:
    """First clinic day at least ``days_ahead`` days from today, at midnight."""
    day = clinic_today() + timedelta(days=days_ahead)
    while day.weekday() not in WORKING_DAYS:
        day += timedelta(days=1)
    return datetime.combine(day, time.min)


async def clear_existing_data(db: AsyncSession):
    """Clear all test data (if needed for re-seeding)."""
    print("🧹 Clearing existing data...")

    # Delete in reverse order of dependencies
    for model in (Reminder, Payment, Appointment, PatientInfo, Service, User):
        await db.execute(delete(model))
    await db.commit()

    print("✅ Data cleared")


async def seed_all_data(db: AsyncSession):
    """Main seeding function."""
    hashed = hash_password(TEST_PASSWORD)

    print("\n🌱 Starting DentalCare Test Data Seed")
    print("=" * 50)

    doctor, assistant, patients = await create_users(db, hashed)
    services = await create_services(db, doctor)
    await create_patient_info(db, patients)
    appointments = await create_appointments(db, patients, doctor, services)
    await create_payments(db, appointments)
    await create_reminders(db, appointments)

    await db.commit()

    print("\n" + "=" * 50)
    print("✅ Seed complete! Test credentials:")
    print(f"   Doctor:    {doctor.email} / {TEST_PASSWORD}")
    print(f"   Assistant: {assistant.email} / {TEST_PASSWORD}")
    for patient in patients:
        print(f"   Patient:   {patient.email} / {TEST_PASSWORD}")
    print("=" * 50 + "\n")


# =============================================================================
# USERS
# =============================================================================

async def create_users(db: AsyncSession, hashed: str):
    print("👩‍⚕️ Creating staff and patients...")

    doctor = User(name="Dr. Sara Karimi", email="sara.karimi@dentalcare.io", password_hash=hashed,
                  role=UserRole.DOCTOR, phone="+15550100")
    assistant = User(name="Omid Rahimi", email="omid.rahimi@dentalcare.io", password_hash=hashed,
                     role=UserRole.ASSISTANT, phone="+15550101")
    patients = [
        User(name="Lena Fischer", email="lena.fischer@dentalcare.io", password_hash=hashed,
             role=UserRole.PATIENT, phone="+15550110"),
        User(name="Marco Bianchi", email="marco.bianchi@dentalcare.io", password_hash=hashed,
             role=UserRole.PATIENT, phone="+15550111"),
    ]
    db.add_all([doctor, assistant, *patients])
    await db.flush()
    return doctor, assistant, patients


# =============================================================================
# SERVICES
# =============================================================================

async def create_services(db: AsyncSession, creator: User):
    print("🦷 Creating service catalog...")

    services = [
        Service(name=name, description=description, duration=duration, price=price, created_by=creator.id)
        for name, description, duration, price in SERVICES
    ]
    db.add_all(services)
    await db.flush()
    return services


async def create_patient_info(db: AsyncSession, patients):
    print("📋 Creating patient records...")

    db.add(PatientInfo(
        patient_id=patients[0].id,
        age=34,
        gender=Gender.FEMALE,
        blood_type=BloodType.O_POSITIVE,
        allergies="Penicillin",
        emergency_contact_name="Jonas Fischer",
        emergency_contact_phone="+15550120",
        emergency_contact_relationship="Spouse",
        last_visit=datetime.now(timezone.utc) - timedelta(days=30)
    ))
    await db.flush()


# =============================================================================
# APPOINTMENTS, PAYMENTS & REMINDERS
# =============================================================================

async def create_appointments(db: AsyncSession, patients, doctor: User, services):
    print("📅 Creating appointments...")

    upcoming = next_working_day()
    appointments = [
        Appointment(user_id=patients[0].id, doctor_id=doctor.id, service_id=services[0].id,
                    date=upcoming.replace(hour=10), status=AppointmentStatus.SCHEDULED,
                    notes="Six-month cleaning"),
        Appointment(user_id=patients[1].id, doctor_id=doctor.id, service_id=services[2].id,
                    date=upcoming.replace(hour=14, minute=30), status=AppointmentStatus.SCHEDULED),
        Appointment(user_id=patients[0].id, doctor_id=doctor.id, service_id=services[1].id,
                    date=next_working_day(-30).replace(hour=9), status=AppointmentStatus.COMPLETED,
                    notes="No cavities found"),
    ]
    db.add_all(appointments)
    await db.flush()
    return appointments


async def create_payments(db: AsyncSession, appointments):
    print("💳 Creating payments...")

    completed = appointments[2]
    db.add(Payment(user_id=completed.user_id, appointment_id=completed.id, amount=Decimal("45.00"),
                   status=PaymentStatus.COMPLETED, payment_method="card"))
    db.add(Payment(user_id=appointments[1].user_id, appointment_id=appointments[1].id,
                   amount=Decimal("120.00"), status=PaymentStatus.PENDING, payment_method="cash"))
    await db.flush()


async def create_reminders(db: AsyncSession, appointments):
    print("🔔 Creating reminders...")

    for apt in appointments[:2]:
        db.add(Reminder(
            user_id=apt.user_id,
            appointment_id=apt.id,
            title="Upcoming Appointment",
            message=f"Reminder: you are booked for {apt.date:%A %d %B at %H:%M}.",
            date=apt.date - timedelta(days=1)
        ))
    await db.flush()


# =============================================================================
# MAIN
# =============================================================================

async def main():
    """Run the seed script."""
    async with async_session() as db:
        try:
            await clear_existing_data(db)
            await seed_all_data(db)
        except Exception as e:
            await db.rollback()
            print(f"\n❌ Error during seeding: {e}")
            raise


if __name__ == "__main__":
    asyncio.run(main())
