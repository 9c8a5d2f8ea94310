from fastapi import APIRouter, Depends, File, Form, UploadFile
from rateam.database.supabase_client import get_supabase
from rateam.modules.auth.schemas import CurrentUser
from rateam.modules.storage.schemas import ImageUploadResponse, ImageDeleteResponse
from rateam.modules.storage.service import ImageStorage, ImageFile
from rateam.core.dependencies import get_current_user
from supabase import Client
from typing import List

router = APIRouter(prefix="/images", tags=["images"])


@router.post("/{bucket}", response_model=ImageUploadResponse, status_code=201)
async def upload_images(
    bucket: str,
    files: List[UploadFile] = File(...),
    current_count: int = Form(0),
    current_user: CurrentUser = Depends(get_current_user),
    supabase: Client = Depends(get_supabase)
):
    """Upload images under the caller's prefix; returns public URLs"""
    storage = ImageStorage(supabase, bucket)
    images = [
        ImageFile(filename=f.filename or "", content=await f.read(), content_type=f.content_type)
        for f in files
    ]
    urls = storage.upload_images(current_user.id, images, current_count=current_count)
    plural = "s" if len(urls) > 1 else ""
    return ImageUploadResponse(
        bucket=bucket,
        urls=urls,
        message=f"{len(urls)} image{plural} uploaded successfully."
    )


@router.delete("/{bucket}", response_model=ImageDeleteResponse)
async def delete_image(
    bucket: str,
    url: str,
    current_user: CurrentUser = Depends(get_current_user),
    supabase: Client = Depends(get_supabase)
):
    """Delete one of the caller's images by its public URL"""
    storage = ImageStorage(supabase, bucket)
    deleted = storage.delete_image(current_user.id, url)
    return ImageDeleteResponse(bucket=bucket, url=url, deleted=deleted)
