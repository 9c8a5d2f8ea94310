"""
Core dependencies for route protection and role checking
"""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from rateam.config.roles_config import get_role_permissions
from rateam.database.supabase_client import get_supabase
from rateam.modules.auth.schemas import CurrentUser
from rateam.modules.auth.service import AuthService
from rateam.modules.roles.schemas import Role
from rateam.modules.roles.service import RoleService
from supabase import Client
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def _get_request_cache(request: Request) -> Dict[str, Any]:
    """Return request-scoped cache for access data (role, permissions)."""
    if not hasattr(request.state, "access_cache"):
        request.state.access_cache = {}
    return request.state.access_cache


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_access_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return credentials.credentials


def resolve_role(user_id: str, supabase: Client, cache: Optional[Dict[str, Any]] = None) -> Role:
    """Resolve role once per request. Uses request-scoped cache when provided."""
    if cache is not None and "role" in cache:
        return cache["role"]
    role = RoleService(supabase).get_user_role(user_id) or Role.USER
    if cache is not None:
        cache["role"] = role
    return role


def _build_current_user(request: Request, token: str, auth_service: AuthService, supabase: Client) -> CurrentUser:
    user_data = auth_service.get_current_user(token)
    role = resolve_role(user_data["id"], supabase, _get_request_cache(request))
    return CurrentUser(
        id=user_data["id"],
        email=user_data.get("email"),
        user_metadata=user_data.get("user_metadata") or {},
        role=role,
    )


def get_current_user(
    request: Request,
    token: str = Depends(get_access_token),
    auth_service: AuthService = Depends(get_auth_service),
    supabase: Client = Depends(get_supabase)
) -> CurrentUser:
    """Session context for the signed-in caller: identity plus resolved role"""
    return _build_current_user(request, token, auth_service, supabase)


def get_optional_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
    auth_service: AuthService = Depends(get_auth_service),
    supabase: Client = Depends(get_supabase)
) -> Optional[CurrentUser]:
    """Like get_current_user, but anonymous callers get None instead of 401"""
    if credentials is None or not credentials.credentials:
        return None
    return _build_current_user(request, credentials.credentials, auth_service, supabase)


def has_permission(user: CurrentUser, permission: str) -> bool:
    return permission in get_role_permissions(user.role)


def require_permission(required_permission: str):
    """Factory function to create permission check dependency"""
    def check_permission(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        """Dependency to check if the caller's role grants the permission"""
        if not has_permission(user, required_permission):
            logger.info(f"Access denied for user {user.id} (role {user.role.value}) to {required_permission}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Required: {required_permission}"
            )
        return user
    return check_permission
