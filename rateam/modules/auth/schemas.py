from pydantic import BaseModel, EmailStr, Field, field_validator
from rateam.modules.roles.schemas import Role
from typing import Any, Dict, List, Literal, Optional


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    user_id: str
    email: str
    role: Role = Role.USER


class RefreshRequest(BaseModel):
    refresh_token: str


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    full_name: str
    role: Literal["user", "vendor"] = "user"

    @field_validator("full_name")
    @classmethod
    def full_name_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Full name is required")
        return value


class RegisterResponse(BaseModel):
    user_id: str
    email: str
    role: Role
    message: str


class CurrentUser(BaseModel):
    """Identity and resolved role of the caller, injected per request."""
    id: str
    email: Optional[str] = None
    user_metadata: Dict[str, Any] = {}
    role: Role = Role.USER

    @property
    def is_admin(self) -> bool:
        return self.role.is_admin

    @property
    def is_vendor(self) -> bool:
        return self.role.is_vendor


class MeResponse(BaseModel):
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    role: Role
    is_admin: bool
    is_vendor: bool
    permissions: List[str]
