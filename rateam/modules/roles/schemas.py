from enum import Enum
from pydantic import BaseModel
from typing import List, Optional


class Role(str, Enum):
    USER = "user"
    VENDOR = "vendor"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"

    @property
    def rank(self) -> int:
        return _ROLE_ORDER.index(self)

    @property
    def is_admin(self) -> bool:
        return self in (Role.ADMIN, Role.SUPER_ADMIN)

    @property
    def is_vendor(self) -> bool:
        return self is Role.VENDOR

    @classmethod
    def parse(cls, value) -> Optional["Role"]:
        """Return the Role for a raw table value, or None when unknown."""
        try:
            return cls(value)
        except ValueError:
            return None


_ROLE_ORDER = [Role.USER, Role.VENDOR, Role.ADMIN, Role.SUPER_ADMIN]


class RoleAssign(BaseModel):
    role: Role


class UserRoleResponse(BaseModel):
    user_id: str
    role: Role
    is_admin: bool
    is_vendor: bool
    permissions: List[str] = []
