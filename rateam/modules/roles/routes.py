from fastapi import APIRouter, Depends, HTTPException, status
from rateam.config.roles_config import get_role_permissions
from rateam.core.dependencies import get_current_user, require_permission, has_permission
from rateam.database.supabase_client import get_admin_supabase
from rateam.modules.auth.schemas import CurrentUser
from rateam.modules.roles.schemas import RoleAssign, UserRoleResponse
from rateam.modules.roles.service import RoleService
from supabase import Client

router = APIRouter(prefix="/roles", tags=["roles"])


def get_admin_role_service(supabase: Client = Depends(get_admin_supabase)) -> RoleService:
    return RoleService(supabase)


def _role_response(user_id: str, role) -> UserRoleResponse:
    return UserRoleResponse(
        user_id=user_id,
        role=role,
        is_admin=role.is_admin,
        is_vendor=role.is_vendor,
        permissions=get_role_permissions(role),
    )


@router.get("/me", response_model=UserRoleResponse)
async def get_my_role(current_user: CurrentUser = Depends(get_current_user)):
    """Resolved role of the caller with derived is_admin / is_vendor flags"""
    return _role_response(current_user.id, current_user.role)


@router.put("/users/{user_id}", response_model=UserRoleResponse)
async def set_user_role(
    user_id: str,
    role_data: RoleAssign,
    current_user: CurrentUser = Depends(require_permission("roles:assign")),
    service: RoleService = Depends(get_admin_role_service)
):
    """Set the single role of a user. Granting or revoking admin roles requires super_admin."""
    current_role = service.get_user_role(user_id, strict=True)
    touches_admin = role_data.role.is_admin or (current_role is not None and current_role.is_admin)
    if touches_admin and not has_permission(current_user, "roles:assign_admin"):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only super admins can grant or revoke admin roles"
        )
    role = service.set_user_role(user_id, role_data.role)
    return _role_response(user_id, role)
