from fastapi import APIRouter, Depends
from rateam.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse,
    RefreshRequest, CurrentUser, MeResponse
)
from rateam.modules.auth.service import AuthService
from rateam.config.roles_config import get_role_permissions
from rateam.core.dependencies import get_auth_service, get_access_token, get_current_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new user or vendor account (email confirmation required before sign-in)"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token plus role"""
    return service.login(login_data)


@router.post("/refresh", response_model=TokenResponse)
async def refresh(
    refresh_data: RefreshRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Exchange a refresh token for a new session"""
    return service.refresh(refresh_data.refresh_token)


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_access_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=MeResponse)
async def get_me(current_user: CurrentUser = Depends(get_current_user)):
    """Get current authenticated user, role and permissions (for frontend UI)."""
    return MeResponse(
        id=current_user.id,
        email=current_user.email,
        full_name=current_user.user_metadata.get("full_name"),
        role=current_user.role,
        is_admin=current_user.is_admin,
        is_vendor=current_user.is_vendor,
        permissions=get_role_permissions(current_user.role),
    )
