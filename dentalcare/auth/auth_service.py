# dentalcare/auth/auth_service.py

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

import jwt
from fastapi import HTTPException, status
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from dentalcare.common.config import settings
from dentalcare.common.database.repository import Repository
from dentalcare.common.errors import Conflict
from dentalcare.common.utils.global_messages import GlobalMessages
from dentalcare.models.models import User, UserRole

logger = logging.getLogger(__name__)

# Initialize the password context (bcrypt)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify that the provided password matches the hashed password."""
    return pwd_context.verify(plain_password, hashed_password)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT token including an expiration date."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta if expires_delta else timedelta(minutes=settings.JWT_EXPIRATION_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def issue_token(user: User) -> str:
    return create_access_token({"sub": str(user.id), "role": user.role.value})


async def register_user(
    db: AsyncSession,
    name: str,
    email: str,
    password: str,
    role: UserRole = UserRole.PATIENT,
    phone: Optional[str] = None
) -> Tuple[User, str]:
    """Create an account and return it with a fresh access token."""
    users = Repository(db, User)
    if await users.find_one(email=email):
        raise Conflict(GlobalMessages.ACCOUNT_ALREADY_EXISTS)

    user = await users.insert(
        conflict_message=GlobalMessages.ACCOUNT_ALREADY_EXISTS,
        name=name,
        email=email,
        password_hash=hash_password(password),
        role=role,
        phone=phone
    )
    logger.info("Registered %s account %s", role.value, user.id)
    return user, issue_token(user)


async def login_user(db: AsyncSession, email: str, password: str) -> Tuple[User, str]:
    user = await Repository(db, User).find_one(email=email)
    if not user or not verify_password(password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=GlobalMessages.INVALID_CREDENTIALS
        )
    return user, issue_token(user)
