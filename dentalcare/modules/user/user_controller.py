# dentalcare/modules/user/user_controller.py

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dentalcare.auth.dependencies import get_current_actor
from dentalcare.auth.policy import Actor, resolve_owner
from dentalcare.common.database.database import get_db_session
from dentalcare.common.utils.global_messages import GlobalMessages
from dentalcare.modules.user import user_service, schemas

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[schemas.UserResponse])
async def list_users(
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db_session)
):
    """
    List every account (staff only).
    """
    return await user_service.list_users(db, actor)


@router.get("/{user_id}", response_model=schemas.UserResponse)
async def get_user(
    user_id: str,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db_session)
):
    return await user_service.get_user(db, actor, resolve_owner(actor, user_id))


@router.put("/{user_id}", response_model=schemas.UserResponse)
async def update_user(
    user_id: str,
    user_data: schemas.UpdateUserRequest,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db_session)
):
    """
    Update name, email or phone of an account.

    Only the provided fields will be updated.
    """
    return await user_service.update_user(db, actor, resolve_owner(actor, user_id), user_data)


@router.delete("/{user_id}", response_model=schemas.UserDeleteResponse)
async def delete_user(
    user_id: str,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db_session)
):
    await user_service.delete_user(db, actor, resolve_owner(actor, user_id))
    return schemas.UserDeleteResponse(message=GlobalMessages.USER_DELETED)
