from supabase import Client
from rateam.modules.reviews.schemas import ReviewCreate, ReviewResponse, ReviewStatus
from rateam.modules.users.service import clean_optional
from rateam.modules.vendors.service import VendorService
from typing import List, Optional
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

# Reviewer fields a vendor may only see when the reviewer opted in to contact
_CONTACT_FIELDS = ("email", "whatsapp", "phone")


def hide_contact_details(review: dict) -> dict:
    """Drop reviewer contact fields unless the reviewer allowed vendor contact"""
    profile = review.get("profiles")
    if profile and not review.get("customer_contact_visible"):
        review = {**review, "profiles": {k: v for k, v in profile.items() if k not in _CONTACT_FIELDS}}
    return review


class ReviewService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def submit_review(self, user_id: str, review_data: ReviewCreate) -> ReviewResponse:
        """Submit a review against an approved vendor; it waits for moderation"""
        try:
            VendorService(self.supabase).get_vendor(review_data.vendor_id)

            result = self.supabase.table("reviews").insert({
                "vendor_id": review_data.vendor_id,
                "user_id": user_id,
                "rating": review_data.rating,
                "comment": clean_optional(review_data.comment),
                "customer_contact_visible": review_data.customer_contact_visible,
                "status": ReviewStatus.PENDING.value
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to submit review")

            return ReviewResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Review submission error for vendor {review_data.vendor_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_vendor_reviews(self, vendor_id: str) -> List[ReviewResponse]:
        """Approved reviews of a vendor, newest first"""
        try:
            result = self.supabase.table("reviews")\
                .select("*, profiles(full_name, avatar_url)")\
                .eq("vendor_id", vendor_id)\
                .eq("status", ReviewStatus.APPROVED.value)\
                .order("created_at", desc=True)\
                .execute()
            return [ReviewResponse(**review) for review in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_my_vendor_reviews(self, user_id: str) -> List[ReviewResponse]:
        """Every review of the caller's vendor, any status, with contact details where allowed"""
        try:
            vendor = VendorService(self.supabase).get_my_vendor(user_id)
            result = self.supabase.table("reviews")\
                .select("*, profiles(full_name, avatar_url, email, whatsapp, phone)")\
                .eq("vendor_id", vendor.id)\
                .order("created_at", desc=True)\
                .execute()
            return [ReviewResponse(**hide_contact_details(review)) for review in result.data]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def reply_to_review(self, user_id: str, review_id: str, reply: str) -> ReviewResponse:
        """Post or replace the vendor's reply. Only the owner of the reviewed vendor may reply."""
        try:
            vendor = VendorService(self.supabase).get_my_vendor(user_id)

            review_result = self.supabase.table("reviews")\
                .select("id, vendor_id")\
                .eq("id", review_id)\
                .maybe_single()\
                .execute()
            if not review_result or not review_result.data:
                raise HTTPException(status_code=404, detail="Review not found")
            if review_result.data["vendor_id"] != vendor.id:
                raise HTTPException(status_code=403, detail="You can only reply to reviews of your own business")

            result = self.supabase.table("reviews")\
                .update({
                    "vendor_reply": reply,
                    "vendor_reply_at": datetime.now(timezone.utc).isoformat()
                })\
                .eq("id", review_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Review not found")

            return ReviewResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_all_reviews(self, status: Optional[ReviewStatus] = None, limit: int = 100, offset: int = 0) -> List[ReviewResponse]:
        """Reviews of every status with reviewer and vendor (admin)"""
        try:
            query = self.supabase.table("reviews")\
                .select("*, profiles(full_name, email), vendors(business_name)")
            if status:
                query = query.eq("status", status.value)
            result = query.order("created_at", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()
            return [ReviewResponse(**review) for review in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def set_review_status(self, review_id: str, status: ReviewStatus) -> ReviewResponse:
        """Approve or reject a review. Last write wins."""
        try:
            result = self.supabase.table("reviews")\
                .update({"status": status.value})\
                .eq("id", review_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Review not found")

            logger.info(f"Review {review_id} status set to {status.value}")
            return ReviewResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
