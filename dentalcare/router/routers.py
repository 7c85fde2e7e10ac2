# dentalcare/router/routers.py

from fastapi import FastAPI
from dentalcare.auth.auth_controller import router as auth_router
from dentalcare.modules.patients.patients_controller import router as patients_router
from dentalcare.modules.user.user_controller import router as user_router
from dentalcare.modules.appointments.appointments_controller import router as appointments_router
from dentalcare.modules.services.services_controller import router as services_router
from dentalcare.modules.payments.payments_controller import router as payments_router
from dentalcare.modules.reminders.reminders_controller import router as reminders_router
from dentalcare.modules.dashboard.dashboard_controller import router as dashboard_router

def include_routers(app: FastAPI) -> None:
    """Include all API routers in the FastAPI application."""
    app.include_router(auth_router)
    # /users/patient-info must be matched before /users/{user_id}
    app.include_router(patients_router)
    app.include_router(user_router)
    app.include_router(appointments_router)
    app.include_router(services_router)
    app.include_router(payments_router)
    app.include_router(reminders_router)
    app.include_router(dashboard_router)
