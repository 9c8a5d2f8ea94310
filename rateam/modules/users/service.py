from supabase import Client
from rateam.modules.users.schemas import ProfileUpdate, ProfileResponse, UserWithRoleResponse
from rateam.modules.roles.service import RoleService
from typing import List, Optional
from fastapi import HTTPException
from datetime import datetime, timezone


def clean_optional(value: Optional[str]) -> Optional[str]:
    """Trim a form value; blank becomes None"""
    if value is None:
        return None
    value = value.strip()
    return value or None


class UserService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_profile(self, user_id: str) -> ProfileResponse:
        """Get user profile by ID"""
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .eq("id", user_id)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Profile not found")

            return ProfileResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_profile(self, user_id: str, profile_data: ProfileUpdate) -> ProfileResponse:
        """Update the fields the caller sent; blank strings clear a field"""
        try:
            update_data = {
                field: clean_optional(value)
                for field, value in profile_data.model_dump(exclude_unset=True).items()
            }
            update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

            result = self.supabase.table("profiles")\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Profile not found")

            return ProfileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_users(self, limit: int = 50, offset: int = 0) -> List[UserWithRoleResponse]:
        """List profiles newest first, each with its resolved role"""
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .order("created_at", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()
            profiles = result.data or []
            roles = RoleService(self.supabase).get_roles_for_users([p["id"] for p in profiles])
            return [UserWithRoleResponse(**p, role=roles[p["id"]]) for p in profiles]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
