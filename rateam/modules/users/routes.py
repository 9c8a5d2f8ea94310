from fastapi import APIRouter, Depends
from rateam.database.supabase_client import get_supabase, get_admin_supabase
from rateam.modules.auth.schemas import CurrentUser
from rateam.modules.users.schemas import ProfileUpdate, ProfileResponse, UserWithRoleResponse
from rateam.modules.users.service import UserService
from rateam.core.dependencies import get_current_user, require_permission
from supabase import Client
from typing import List

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(supabase: Client = Depends(get_supabase)) -> UserService:
    return UserService(supabase)


def get_admin_user_service(supabase: Client = Depends(get_admin_supabase)) -> UserService:
    return UserService(supabase)


@router.get("", response_model=List[UserWithRoleResponse])
async def list_users(
    limit: int = 50,
    offset: int = 0,
    current_user: CurrentUser = Depends(require_permission("users:manage")),
    service: UserService = Depends(get_admin_user_service)
):
    """List all users with their roles (admin)"""
    return service.list_users(limit=limit, offset=offset)


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    current_user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    """Get the caller's profile"""
    return service.get_profile(current_user.id)


@router.put("/me", response_model=ProfileResponse)
async def update_my_profile(
    profile_data: ProfileUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    """Update the caller's profile"""
    return service.update_profile(current_user.id, profile_data)
