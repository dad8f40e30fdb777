"""FastAPI routes for Identity: the customer's own profile and user administration."""

from dataclasses import asdict

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.deps import admin_user_id, current_user_id
from storefront.identity.api.schemas import (
    AssignRoleRequest,
    ProfileResponse,
    StatusResponse,
    UpdateProfileRequest,
    UserResponse,
)
from storefront.identity.profile import UpdateProfile, find_profile
from storefront.identity.role import AssignRole, role_of
from storefront.identity.users import list_users

account_profile_router = APIRouter(prefix="/account", tags=["account"])
admin_user_router = APIRouter(prefix="/admin/users", tags=["admin"], dependencies=[Depends(admin_user_id)])


def _profile_response(user_id: str) -> ProfileResponse:
    profile = find_profile(user_id)
    return ProfileResponse(
        user_id=user_id,
        full_name=profile.full_name if profile else None,
        phone=profile.phone if profile else None,
        avatar_url=profile.avatar_url if profile else None,
        role=role_of(user_id),
    )


@account_profile_router.get("/profile", response_model=ProfileResponse)
async def get_profile(user_id: str = Depends(current_user_id)) -> ProfileResponse:
    return _profile_response(user_id)


@account_profile_router.put("/profile", response_model=ProfileResponse)
async def update_profile(body: UpdateProfileRequest, user_id: str = Depends(current_user_id)) -> ProfileResponse:
    command = UpdateProfile(
        user_id=user_id,
        full_name=body.full_name,
        phone=body.phone,
        avatar_url=body.avatar_url,
    )
    current_domain.process(command, asynchronous=False)
    return _profile_response(user_id)


@admin_user_router.get("", response_model=list[UserResponse])
async def admin_list_users(search: str | None = None, role: str | None = None) -> list[UserResponse]:
    return [UserResponse(**asdict(user)) for user in list_users(search=search, role=role)]


@admin_user_router.put("/{user_id}/role", response_model=StatusResponse)
async def assign_role(user_id: str, body: AssignRoleRequest) -> StatusResponse:
    current_domain.process(AssignRole(user_id=user_id, role=body.role), asynchronous=False)
    return StatusResponse()
