# dentalcare/auth/dependencies.py

from uuid import UUID

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from dentalcare.auth.policy import Actor
from dentalcare.common.config import settings
from dentalcare.common.database.database import get_db_session
from dentalcare.common.utils.global_messages import GlobalMessages
from dentalcare.models.models import User

bearer_scheme = HTTPBearer()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db_session)
) -> User:
    """
    Dependency to retrieve the current user based on the JWT token provided in the Authorization header.
    """
    token = credentials.credentials

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=GlobalMessages.INVALID_TOKEN,
        headers={"WWW-Authenticate": "Bearer"}
    )
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        user_id = UUID(payload.get("sub") or "")
    except jwt.InvalidTokenError:
        raise credentials_exception
    except ValueError:
        raise credentials_exception

    user = await db.get(User, user_id)
    if user is None:
        raise credentials_exception
    return user


async def get_current_actor(current_user: User = Depends(get_current_user)) -> Actor:
    return Actor.from_user(current_user)
