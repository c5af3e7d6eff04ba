# roomshare/routes/v1/users.py
"""
User administration routes - API v1 (ADMIN only)

Endpoints under /api/v1/users:
    GET / - List users
    POST / - Create a user
    PATCH /{user_id}/role - Change a user's role
    DELETE /{user_id} - Remove a user and their bookings
"""

import asyncio
import logging
from typing import List

from fastapi import APIRouter, Body, Depends, Response, status
from fastapi.params import Path

from ...api.dependencies import get_user_service, require_admin
from ...core.exceptions import DomainException
from ...principal import CallerPrincipal
from ...schemas.user import UserCreate, UserResponse, UserRoleUpdate
from ...services.user_service import UserService
from .bookings import ULID_PATH_PATTERN, handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users-v1"])


@router.get("", response_model=List[UserResponse])
async def list_users(
    principal: CallerPrincipal = Depends(require_admin),
    user_service: UserService = Depends(get_user_service),
) -> List[UserResponse]:
    try:
        users = await asyncio.to_thread(user_service.list_users, principal)
        return [UserResponse.model_validate(user) for user in users]
    except DomainException as e:
        handle_domain_exception(e)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    principal: CallerPrincipal = Depends(require_admin),
    payload: UserCreate = Body(...),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    try:
        user = await asyncio.to_thread(
            user_service.create_user,
            principal,
            name=payload.name,
            email=payload.email,
            role=payload.role,
        )
        return UserResponse.model_validate(user)
    except DomainException as e:
        handle_domain_exception(e)


@router.patch("/{user_id}/role", response_model=UserResponse)
async def change_user_role(
    user_id: str = Path(..., description="User ULID", pattern=ULID_PATH_PATTERN),
    principal: CallerPrincipal = Depends(require_admin),
    payload: UserRoleUpdate = Body(...),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    try:
        user = await asyncio.to_thread(user_service.change_role, user_id, principal, payload.role)
        return UserResponse.model_validate(user)
    except DomainException as e:
        handle_domain_exception(e)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_user(
    user_id: str = Path(..., description="User ULID", pattern=ULID_PATH_PATTERN),
    principal: CallerPrincipal = Depends(require_admin),
    user_service: UserService = Depends(get_user_service),
) -> Response:
    try:
        await asyncio.to_thread(user_service.remove_user, user_id, principal)
    except DomainException as e:
        handle_domain_exception(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
