from supabase import Client
from rateam.modules.roles.schemas import Role
from typing import Dict, Iterable, List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def highest_role(values: Iterable) -> Role:
    """Most privileged known role among raw role values; USER when none are known."""
    roles = [r for r in (Role.parse(v) for v in values) if r is not None]
    if not roles:
        return Role.USER
    return max(roles, key=lambda r: r.rank)


class RoleService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_user_role(self, user_id: Optional[str], strict: bool = False) -> Optional[Role]:
        """Resolve the role of a user. None without a user; USER when no row exists or the lookup fails.

        With strict=True a failed lookup raises instead, for callers that must
        not mistake an unknown role for a plain user.
        """
        if not user_id:
            return None
        try:
            result = self.supabase.table("user_roles")\
                .select("role")\
                .eq("user_id", user_id)\
                .execute()
            rows = result.data or []
            if len(rows) > 1:
                logger.warning(f"User {user_id} has {len(rows)} role rows, using the most privileged")
            return highest_role(row.get("role") for row in rows)
        except Exception as e:
            logger.error(f"Error fetching user role for {user_id}: {e}")
            if strict:
                raise HTTPException(status_code=500, detail="Could not verify the user's current role")
            return Role.USER

    def get_roles_for_users(self, user_ids: List[str]) -> Dict[str, Role]:
        """Resolve roles for many users with one query. Users without rows map to USER."""
        if not user_ids:
            return {}
        try:
            result = self.supabase.table("user_roles")\
                .select("user_id, role")\
                .in_("user_id", user_ids)\
                .execute()
            raw: Dict[str, list] = {}
            for row in result.data or []:
                raw.setdefault(row["user_id"], []).append(row.get("role"))
            return {uid: highest_role(raw.get(uid, [])) for uid in user_ids}
        except Exception as e:
            logger.error(f"Error fetching roles for users: {e}")
            return {uid: Role.USER for uid in user_ids}

    def assign_initial_role(self, user_id: str, role: Role) -> bool:
        """Write the role chosen at sign-up. Failure is logged; role resolution falls back to USER."""
        try:
            self.supabase.table("user_roles").insert({
                "user_id": user_id,
                "role": role.value
            }).execute()
            return True
        except Exception as e:
            logger.error(f"Error assigning role {role.value} to user {user_id}: {e}")
            return False

    def set_user_role(self, user_id: str, role: Role) -> Role:
        """Replace every role row of a user with a single row.

        The new row is written before the old ones are removed, so a failed
        write leaves the previous role in place.
        """
        try:
            result = self.supabase.table("user_roles").insert({
                "user_id": user_id,
                "role": role.value
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to update user role")

            self.supabase.table("user_roles")\
                .delete()\
                .eq("user_id", user_id)\
                .neq("id", result.data[0]["id"])\
                .execute()

            logger.info(f"Role of user {user_id} set to {role.value}")
            return role
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
