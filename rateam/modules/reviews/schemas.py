from enum import Enum
from pydantic import BaseModel, Field, field_validator
from typing import Optional, Dict, Any
from datetime import datetime


class ReviewStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ReviewCreate(BaseModel):
    vendor_id: str
    rating: int = Field(ge=1, le=5)
    comment: Optional[str] = None
    customer_contact_visible: bool = False


class ReviewReply(BaseModel):
    reply: str

    @field_validator("reply")
    @classmethod
    def reply_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Reply cannot be empty")
        return value


class ReviewStatusUpdate(BaseModel):
    status: ReviewStatus


class ReviewResponse(BaseModel):
    id: str
    vendor_id: str
    user_id: Optional[str] = None
    rating: int
    comment: Optional[str] = None
    status: ReviewStatus
    customer_contact_visible: bool = False
    vendor_reply: Optional[str] = None
    vendor_reply_at: Optional[datetime] = None
    profiles: Optional[Dict[str, Any]] = None
    vendors: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
