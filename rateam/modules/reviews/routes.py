from fastapi import APIRouter, Depends
from rateam.database.supabase_client import get_supabase, get_admin_supabase
from rateam.modules.auth.schemas import CurrentUser
from rateam.modules.reviews.schemas import (
    ReviewCreate, ReviewReply, ReviewResponse, ReviewStatus, ReviewStatusUpdate
)
from rateam.modules.reviews.service import ReviewService
from rateam.core.dependencies import require_permission
from supabase import Client
from typing import List, Optional

router = APIRouter(prefix="/reviews", tags=["reviews"])


def get_review_service(supabase: Client = Depends(get_supabase)) -> ReviewService:
    return ReviewService(supabase)


def get_admin_review_service(supabase: Client = Depends(get_admin_supabase)) -> ReviewService:
    return ReviewService(supabase)


@router.post("", response_model=ReviewResponse, status_code=201)
async def submit_review(
    review_data: ReviewCreate,
    current_user: CurrentUser = Depends(require_permission("reviews:create")),
    service: ReviewService = Depends(get_review_service)
):
    """Rate and review a vendor; the review is pending until approved"""
    return service.submit_review(current_user.id, review_data)


@router.get("/vendor/{vendor_id}", response_model=List[ReviewResponse])
async def list_vendor_reviews(
    vendor_id: str,
    service: ReviewService = Depends(get_review_service)
):
    """Approved reviews of a vendor"""
    return service.list_vendor_reviews(vendor_id)


@router.get("/mine/received", response_model=List[ReviewResponse])
async def list_my_vendor_reviews(
    current_user: CurrentUser = Depends(require_permission("reviews:reply")),
    service: ReviewService = Depends(get_review_service)
):
    """Reviews received by the caller's business"""
    return service.list_my_vendor_reviews(current_user.id)


@router.put("/{review_id}/reply", response_model=ReviewResponse)
async def reply_to_review(
    review_id: str,
    reply_data: ReviewReply,
    current_user: CurrentUser = Depends(require_permission("reviews:reply")),
    service: ReviewService = Depends(get_review_service)
):
    return service.reply_to_review(current_user.id, review_id, reply_data.reply)


@router.get("/admin/all", response_model=List[ReviewResponse])
async def list_all_reviews(
    status: Optional[ReviewStatus] = None,
    limit: int = 100,
    offset: int = 0,
    current_user: CurrentUser = Depends(require_permission("reviews:moderate")),
    service: ReviewService = Depends(get_admin_review_service)
):
    """List reviews of every status (admin)"""
    return service.list_all_reviews(status=status, limit=limit, offset=offset)


@router.put("/{review_id}/status", response_model=ReviewResponse)
async def set_review_status(
    review_id: str,
    status_data: ReviewStatusUpdate,
    current_user: CurrentUser = Depends(require_permission("reviews:moderate")),
    service: ReviewService = Depends(get_admin_review_service)
):
    """Approve or reject a review (admin)"""
    return service.set_review_status(review_id, status_data.status)
