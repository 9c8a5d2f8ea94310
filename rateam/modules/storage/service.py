"""Supabase Storage for profile and vendor images."""
import secrets
import time
import logging
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urlparse, unquote

from fastapi import HTTPException
from supabase import Client

from rateam.config import settings

logger = logging.getLogger(__name__)


@dataclass
class ImageFile:
    filename: str
    content: bytes
    content_type: Optional[str] = None


def object_path(user_id: str, filename: str, content_type: Optional[str] = None) -> str:
    """<user_id>/<unix_ms>_<random>.<ext>; objects live under their owner's prefix."""
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    if not ext and content_type and "/" in content_type:
        ext = content_type.split("/", 1)[1]
    name = f"{int(time.time() * 1000)}_{secrets.token_hex(6)}"
    return f"{user_id}/{name}.{ext}" if ext else f"{user_id}/{name}"


def path_from_public_url(user_id: str, public_url: str) -> str:
    """Object path of a public URL, scoped to the caller's prefix"""
    file_name = unquote(urlparse(public_url).path.rstrip("/").split("/")[-1])
    if not file_name:
        raise HTTPException(status_code=400, detail="Invalid image URL")
    return f"{user_id}/{file_name}"


class ImageStorage:
    def __init__(self, supabase: Client, bucket_name: str):
        limits = settings.get_bucket_limits()
        if bucket_name not in limits:
            raise HTTPException(status_code=404, detail=f"Unknown bucket: {bucket_name}")
        self.supabase = supabase
        self.bucket_name = bucket_name
        self.max_images = limits[bucket_name]

    def _bucket(self):
        return self.supabase.storage.from_(self.bucket_name)

    def upload_images(self, user_id: str, files: List[ImageFile], current_count: int = 0) -> List[str]:
        """Upload as many files as the bucket's remaining slots allow and return their public URLs"""
        remaining = self.max_images - max(current_count, 0)
        to_upload = files[:max(remaining, 0)]
        if not to_upload:
            plural = "s" if self.max_images > 1 else ""
            raise HTTPException(
                status_code=400,
                detail=f"Upload limit reached. You can only upload {self.max_images} image{plural}."
            )

        for image in to_upload:
            if not (image.content_type or "").startswith("image/"):
                raise HTTPException(status_code=400, detail=f"{image.filename} is not an image")
            if len(image.content) > settings.max_upload_bytes:
                raise HTTPException(status_code=413, detail=f"{image.filename} is too large")

        urls = []
        for image in to_upload:
            path = object_path(user_id, image.filename, image.content_type)
            try:
                self._bucket().upload(
                    path=path,
                    file=image.content,
                    file_options={"content-type": image.content_type}
                )
            except Exception as e:
                logger.error(f"Failed to upload {path} to {self.bucket_name}: {e}")
                raise HTTPException(status_code=500, detail="Failed to upload images. Please try again.")
            urls.append(self._bucket().get_public_url(path))
        logger.info(f"Uploaded {len(urls)} image(s) to {self.bucket_name} for user {user_id}")
        return urls

    def delete_image(self, user_id: str, public_url: str) -> bool:
        """Delete an image owned by the user. Storage failures are logged, not raised."""
        path = path_from_public_url(user_id, public_url)
        try:
            self._bucket().remove([path])
            return True
        except Exception as e:
            logger.error(f"Storage deletion error for {path} in {self.bucket_name}: {e}")
            return False
