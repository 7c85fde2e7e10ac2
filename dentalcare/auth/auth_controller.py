# dentalcare/auth/auth_controller.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from dentalcare.auth import auth_service, schemas
from dentalcare.auth.dependencies import get_current_user
from dentalcare.common.database.database import get_db_session
from dentalcare.common.utils.global_messages import GlobalMessages
from dentalcare.models.models import User
from dentalcare.modules.user.schemas import UserResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=schemas.AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    register_data: schemas.RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Register a new user account.

    - **name**: Display name
    - **email**: Login email, must be unique
    - **password**: Password (minimum 6 characters)
    - **role**: patient, doctor or assistant (defaults to patient)
    """
    user, access_token = await auth_service.register_user(
        db,
        name=register_data.name,
        email=register_data.email,
        password=register_data.password,
        role=register_data.role,
        phone=register_data.phone
    )
    return schemas.AuthResponse(access_token=access_token, user=UserResponse.model_validate(user))


@router.post("/login", response_model=schemas.AuthResponse)
async def login(
    credentials: schemas.LoginRequest,
    db: AsyncSession = Depends(get_db_session)
):
    """
    Authenticate a user and return an access token.
    """
    user, access_token = await auth_service.login_user(db, credentials.email, credentials.password)
    return schemas.AuthResponse(access_token=access_token, user=UserResponse.model_validate(user))


@router.get("/me", response_model=UserResponse)
async def me(current_user: User = Depends(get_current_user)):
    """Return the currently authenticated user."""
    return current_user


@router.post("/logout", response_model=schemas.LogoutResponse)
async def logout(current_user: User = Depends(get_current_user)):
    """Tokens are stateless; the client discards its copy."""
    return schemas.LogoutResponse(message=GlobalMessages.LOGOUT_SUCCESS)
