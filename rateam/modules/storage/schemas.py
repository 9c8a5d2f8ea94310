from pydantic import BaseModel
from typing import List


class ImageUploadResponse(BaseModel):
    bucket: str
    urls: List[str]
    message: str


class ImageDeleteResponse(BaseModel):
    bucket: str
    url: str
    deleted: bool
