from supabase import Client
from rateam.config import settings
from rateam.modules.roles.schemas import Role
from rateam.modules.roles.service import RoleService
from rateam.modules.users.service import clean_optional
from rateam.modules.vendors.schemas import (
    VendorCreate, VendorUpdate, VendorResponse, VendorStatus, VendorSort, CategoryResponse
)
from typing import List, Optional
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "All Categories"
_VENDOR_SELECT = "*, categories(name, icon)"

# Characters that would break a PostgREST or=() filter expression
_FILTER_UNSAFE = str.maketrans("", "", ",()*%\\")

_SORT_ORDER = {
    VendorSort.RATING: ("rating", True),
    VendorSort.REVIEWS: ("review_count", True),
    VendorSort.NAME: ("business_name", False),
    VendorSort.NEWEST: ("created_at", True),
}


class VendorService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_vendors(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        sort_by: VendorSort = VendorSort.NEWEST,
        limit: int = 50,
        offset: int = 0
    ) -> List[VendorResponse]:
        """List approved vendors, optionally filtered by search term and category"""
        try:
            query = self.supabase.table("vendors")\
                .select(_VENDOR_SELECT)\
                .eq("status", VendorStatus.APPROVED.value)

            term = (search or "").translate(_FILTER_UNSAFE).strip()
            if term:
                query = query.or_(f"business_name.ilike.%{term}%,description.ilike.%{term}%")

            if category and category != ALL_CATEGORIES:
                query = query.eq("category", category)

            column, desc = _SORT_ORDER[sort_by]
            result = query.order(column, desc=desc)\
                .limit(limit)\
                .offset(offset)\
                .execute()
            return [VendorResponse(**vendor) for vendor in result.data]
        except Exception as e:
            logger.error(f"Error fetching vendors: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_vendor(self, vendor_id: str, approved_only: bool = True) -> VendorResponse:
        """Get vendor by ID. Public reads only see approved vendors."""
        try:
            query = self.supabase.table("vendors")\
                .select(_VENDOR_SELECT)\
                .eq("id", vendor_id)
            if approved_only:
                query = query.eq("status", VendorStatus.APPROVED.value)
            result = query.maybe_single().execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Vendor not found")

            return VendorResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_categories(self) -> List[CategoryResponse]:
        try:
            result = self.supabase.table("categories")\
                .select("*")\
                .order("name")\
                .execute()
            return [CategoryResponse(**c) for c in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _find_vendor_for_user(self, user_id: str) -> Optional[dict]:
        result = self.supabase.table("vendors")\
            .select("*")\
            .eq("user_id", user_id)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def onboard_vendor(self, user_id: str, user_email: Optional[str], role: Role, vendor_data: VendorCreate) -> VendorResponse:
        """Register the caller's business. New vendors always start pending approval."""
        try:
            if self._find_vendor_for_user(user_id):
                raise HTTPException(status_code=409, detail="You have already registered a business")

            # Plain users become vendors before the row exists; admins keep their role
            if role is Role.USER:
                RoleService(self.supabase).set_user_role(user_id, Role.VENDOR)

            result = self.supabase.table("vendors").insert({
                "user_id": user_id,
                "business_name": vendor_data.business_name,
                "description": clean_optional(vendor_data.description),
                "category": clean_optional(vendor_data.category),
                "location": clean_optional(vendor_data.location),
                "phone": clean_optional(vendor_data.phone),
                "whatsapp": clean_optional(vendor_data.whatsapp),
                "email": clean_optional(vendor_data.email) or user_email,
                "preferred_contact": vendor_data.preferred_contact.value,
                "status": VendorStatus.PENDING.value
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to register business")

            logger.info(f"Vendor {result.data[0]['id']} registered by user {user_id}, pending approval")
            return VendorResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_my_vendor(self, user_id: str) -> VendorResponse:
        """Get the vendor owned by the caller, whatever its status"""
        try:
            vendor = self._find_vendor_for_user(user_id)
            if not vendor:
                raise HTTPException(status_code=404, detail="No business registered for this account")
            return VendorResponse(**vendor)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_my_vendor(self, user_id: str, vendor_data: VendorUpdate) -> VendorResponse:
        """Update the caller's vendor profile. Status is not editable here."""
        try:
            vendor = self.get_my_vendor(user_id)
            fields = vendor_data.model_dump(exclude_unset=True)

            update_data = {}
            for field, value in fields.items():
                if field == "gallery":
                    gallery = [url for url in (value or []) if url]
                    if len(gallery) > settings.max_vendor_images:
                        raise HTTPException(
                            status_code=400,
                            detail=f"A vendor can have at most {settings.max_vendor_images} gallery images"
                        )
                    update_data["gallery"] = gallery
                elif field == "preferred_contact":
                    update_data[field] = value.value if value else None
                elif field == "business_name":
                    name = clean_optional(value)
                    if not name:
                        raise HTTPException(status_code=400, detail="Business name is required")
                    update_data[field] = name
                else:
                    update_data[field] = clean_optional(value)
            update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

            result = self.supabase.table("vendors")\
                .update(update_data)\
                .eq("id", vendor.id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Vendor not found")

            return VendorResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_all_vendors(self, status: Optional[VendorStatus] = None, limit: int = 100, offset: int = 0) -> List[VendorResponse]:
        """List vendors of every status with owner profile (admin)"""
        try:
            query = self.supabase.table("vendors")\
                .select("*, profiles(full_name, email)")
            if status:
                query = query.eq("status", status.value)
            result = query.order("created_at", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()
            return [VendorResponse(**vendor) for vendor in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def set_vendor_status(self, vendor_id: str, status: VendorStatus) -> VendorResponse:
        """Approve, reject, suspend or reactivate a vendor. Last write wins."""
        try:
            result = self.supabase.table("vendors")\
                .update({"status": status.value})\
                .eq("id", vendor_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Vendor not found")

            logger.info(f"Vendor {vendor_id} status set to {status.value}")
            return VendorResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
