from enum import Enum
from pydantic import BaseModel, field_validator
from typing import Optional, List, Dict, Any
from datetime import datetime


class VendorStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    SUSPENDED = "suspended"
    REJECTED = "rejected"


class ContactChannel(str, Enum):
    WHATSAPP = "whatsapp"
    PHONE = "phone"
    EMAIL = "email"


class VendorSort(str, Enum):
    NEWEST = "newest"
    RATING = "rating"
    REVIEWS = "reviews"
    NAME = "name"


class CategoryResponse(BaseModel):
    id: str
    name: str
    icon: Optional[str] = None


class VendorCreate(BaseModel):
    business_name: str
    description: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    email: Optional[str] = None
    preferred_contact: ContactChannel = ContactChannel.WHATSAPP

    @field_validator("business_name")
    @classmethod
    def business_name_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Business name is required")
        return value


class VendorUpdate(BaseModel):
    business_name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    email: Optional[str] = None
    preferred_contact: Optional[ContactChannel] = None
    image_url: Optional[str] = None
    gallery: Optional[List[str]] = None


class VendorStatusUpdate(BaseModel):
    status: VendorStatus


class VendorResponse(BaseModel):
    id: str
    user_id: Optional[str] = None
    business_name: str
    category: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    email: Optional[str] = None
    preferred_contact: Optional[ContactChannel] = None
    image_url: Optional[str] = None
    gallery: Optional[List[Any]] = None
    rating: Optional[float] = None
    review_count: Optional[int] = None
    status: VendorStatus
    categories: Optional[Dict[str, Any]] = None
    profiles: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
