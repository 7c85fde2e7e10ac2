# dentalcare/modules/user/user_service.py

import logging
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from dentalcare.auth.policy import Action, Actor, ensure_access, ensure_staff
from dentalcare.common.database.repository import Repository
from dentalcare.common.errors import Conflict
from dentalcare.common.utils.global_messages import GlobalMessages
from dentalcare.models.models import User
from .schemas import UpdateUserRequest

logger = logging.getLogger(__name__)


async def list_users(session: AsyncSession, actor: Actor) -> List[User]:
    ensure_staff(actor, GlobalMessages.STAFF_ONLY)
    return await Repository(session, User).find_many(order_by=User.created_at.desc())


async def get_user(session: AsyncSession, actor: Actor, user_id: UUID) -> User:
    ensure_access(actor, Action.READ, user_id)
    return await Repository(session, User).get_by_id(user_id, GlobalMessages.USER_NOT_FOUND)


async def update_user(
    session: AsyncSession,
    actor: Actor,
    user_id: UUID,
    request: UpdateUserRequest
) -> User:
    """
    Update a user's contact details. Only the provided fields are changed.
    """
    ensure_access(actor, Action.UPDATE, user_id)
    users = Repository(session, User)
    user = await users.get_by_id(user_id, GlobalMessages.USER_NOT_FOUND)

    patch = {k: v for k, v in request.model_dump(exclude_unset=True).items() if v is not None or k == "phone"}
    new_email = patch.get("email")
    if new_email and new_email != user.email:
        if await users.find_one(User.id != user.id, email=new_email):
            raise Conflict(GlobalMessages.ACCOUNT_ALREADY_EXISTS)

    user = await users.update(user, patch, GlobalMessages.ACCOUNT_ALREADY_EXISTS)
    logger.info("User %s updated by %s: %s", user.id, actor.id, sorted(patch))
    return user


async def delete_user(session: AsyncSession, actor: Actor, user_id: UUID) -> None:
    ensure_access(actor, Action.DELETE, user_id)
    users = Repository(session, User)
    user = await users.get_by_id(user_id, GlobalMessages.USER_NOT_FOUND)
    await users.delete(user)
    logger.info("User %s deleted by %s", user_id, actor.id)
