from pydantic import BaseModel


class AnalyticsResponse(BaseModel):
    total_users: int
    total_vendors: int
    approved_vendors: int
    pending_vendors: int
    total_reviews: int
    approved_reviews: int
    average_rating: float
    total_categories: int
    new_users_this_month: int
    new_vendors_this_month: int
    new_reviews_this_month: int
