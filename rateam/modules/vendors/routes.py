from fastapi import APIRouter, Depends
from rateam.database.supabase_client import get_supabase, get_admin_supabase
from rateam.modules.auth.schemas import CurrentUser
from rateam.modules.vendors.schemas import (
    VendorCreate, VendorUpdate, VendorResponse, VendorStatus, VendorStatusUpdate,
    VendorSort, CategoryResponse
)
from rateam.modules.vendors.service import VendorService
from rateam.core.dependencies import require_permission
from supabase import Client
from typing import List, Optional

router = APIRouter(prefix="/vendors", tags=["vendors"])


def get_vendor_service(supabase: Client = Depends(get_supabase)) -> VendorService:
    return VendorService(supabase)


def get_admin_vendor_service(supabase: Client = Depends(get_admin_supabase)) -> VendorService:
    return VendorService(supabase)


@router.get("", response_model=List[VendorResponse])
async def list_vendors(
    search: Optional[str] = None,
    category: Optional[str] = None,
    sort_by: VendorSort = VendorSort.NEWEST,
    limit: int = 50,
    offset: int = 0,
    service: VendorService = Depends(get_vendor_service)
):
    """Browse approved vendors"""
    return service.list_vendors(search=search, category=category, sort_by=sort_by, limit=limit, offset=offset)


@router.get("/categories", response_model=List[CategoryResponse])
async def list_categories(service: VendorService = Depends(get_vendor_service)):
    return service.list_categories()


@router.post("/onboarding", response_model=VendorResponse, status_code=201)
async def onboard_vendor(
    vendor_data: VendorCreate,
    current_user: CurrentUser = Depends(require_permission("vendors:own")),
    service: VendorService = Depends(get_vendor_service)
):
    """Register a business for the caller; it stays pending until an admin approves it"""
    return service.onboard_vendor(current_user.id, current_user.email, current_user.role, vendor_data)


@router.get("/me", response_model=VendorResponse)
async def get_my_vendor(
    current_user: CurrentUser = Depends(require_permission("vendors:own")),
    service: VendorService = Depends(get_vendor_service)
):
    """Vendor dashboard: the caller's business with its current status"""
    return service.get_my_vendor(current_user.id)


@router.put("/me", response_model=VendorResponse)
async def update_my_vendor(
    vendor_data: VendorUpdate,
    current_user: CurrentUser = Depends(require_permission("vendors:own")),
    service: VendorService = Depends(get_vendor_service)
):
    return service.update_my_vendor(current_user.id, vendor_data)


@router.get("/admin/all", response_model=List[VendorResponse])
async def list_all_vendors(
    status: Optional[VendorStatus] = None,
    limit: int = 100,
    offset: int = 0,
    current_user: CurrentUser = Depends(require_permission("vendors:moderate")),
    service: VendorService = Depends(get_admin_vendor_service)
):
    """List vendors of every status (admin)"""
    return service.list_all_vendors(status=status, limit=limit, offset=offset)


@router.put("/{vendor_id}/status", response_model=VendorResponse)
async def set_vendor_status(
    vendor_id: str,
    status_data: VendorStatusUpdate,
    current_user: CurrentUser = Depends(require_permission("vendors:moderate")),
    service: VendorService = Depends(get_admin_vendor_service)
):
    """Approve, reject, suspend or reactivate a vendor (admin)"""
    return service.set_vendor_status(vendor_id, status_data.status)


@router.get("/{vendor_id}", response_model=VendorResponse)
async def get_vendor(
    vendor_id: str,
    service: VendorService = Depends(get_vendor_service)
):
    """Get an approved vendor by ID"""
    return service.get_vendor(vendor_id)
