# dentalcare/main.py

import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dentalcare import __version__
from dentalcare.common.config import settings
from dentalcare.common.database.database import connect_to_db, close_db_connection
from dentalcare.common.errors import ClinicError
from dentalcare.router.routers import include_routers

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Lifespan context manager for startup and shutdown events
@asynccontextmanager
async def lifespan(app: FastAPI):
    await connect_to_db()
    yield
    await close_db_connection()

# Initialize FastAPI app with lifespan manager
app = FastAPI(
    title="DentalCare API",
    description="Appointment booking and records for a dental clinic",
    version=__version__,
    lifespan=lifespan
)

# Middleware for CORS using allowed origins from settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    logger.info(
        "%s %s - %s - %.3fs",
        request.method, request.url.path, response.status_code, process_time
    )
    return response


@app.exception_handler(ClinicError)
async def clinic_error_handler(request: Request, exc: ClinicError):
    if exc.retryable:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"kind": exc.kind, "detail": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={"kind": "validation_failed", "detail": jsonable_encoder(exc.errors())},
    )


# Include routers from a separate file
include_routers(app)


@app.get("/")
async def root():
    return {
        "name": "DentalCare API",
        "version": __version__,
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy", "environment": settings.APP_ENV}
