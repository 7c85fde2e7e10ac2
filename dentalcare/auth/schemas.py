# dentalcare/auth/schemas.py

from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from dentalcare.models.models import UserRole
from dentalcare.modules.user.schemas import UserResponse


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: UserRole = UserRole.PATIENT
    phone: Optional[str] = Field(None, max_length=20)


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class LogoutResponse(BaseModel):
    message: str
