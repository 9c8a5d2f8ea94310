from supabase import Client
from rateam.modules.analytics.schemas import AnalyticsResponse
from rateam.modules.reviews.schemas import ReviewStatus
from rateam.modules.vendors.schemas import VendorStatus
from typing import List, Optional
from fastapi import HTTPException
from datetime import datetime, timedelta, timezone
import logging

logger = logging.getLogger(__name__)

GROWTH_WINDOW = timedelta(days=30)


def _parse_timestamp(value) -> Optional[datetime]:
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            logger.warning(f"Skipping unparsable timestamp {value!r}")
            return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def _created_since(rows: List[dict], since: datetime) -> int:
    count = 0
    for row in rows:
        created_at = _parse_timestamp(row.get("created_at"))
        if created_at is not None and created_at > since:
            count += 1
    return count


def compute_analytics(users: List[dict], vendors: List[dict], reviews: List[dict],
                      categories: List[dict], now: Optional[datetime] = None) -> AnalyticsResponse:
    """Dashboard totals and 30-day growth over already-fetched rows"""
    now = now or datetime.now(timezone.utc)
    since = now - GROWTH_WINDOW
    ratings = [r["rating"] for r in reviews if r.get("rating") is not None]
    return AnalyticsResponse(
        total_users=len(users),
        total_vendors=len(vendors),
        approved_vendors=sum(1 for v in vendors if v.get("status") == VendorStatus.APPROVED.value),
        pending_vendors=sum(1 for v in vendors if v.get("status") == VendorStatus.PENDING.value),
        total_reviews=len(reviews),
        approved_reviews=sum(1 for r in reviews if r.get("status") == ReviewStatus.APPROVED.value),
        average_rating=(sum(ratings) / len(ratings)) if ratings else 0.0,
        total_categories=len(categories),
        new_users_this_month=_created_since(users, since),
        new_vendors_this_month=_created_since(vendors, since),
        new_reviews_this_month=_created_since(reviews, since),
    )


class AnalyticsService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_analytics(self, now: Optional[datetime] = None) -> AnalyticsResponse:
        try:
            users = self.supabase.table("profiles").select("id, created_at").execute()
            vendors = self.supabase.table("vendors").select("id, status, created_at, rating").execute()
            reviews = self.supabase.table("reviews").select("id, status, rating, created_at").execute()
            categories = self.supabase.table("categories").select("id").execute()
            return compute_analytics(
                users.data or [], vendors.data or [], reviews.data or [], categories.data or [], now
            )
        except Exception as e:
            logger.error(f"Error computing analytics: {e}")
            raise HTTPException(status_code=500, detail=str(e))
