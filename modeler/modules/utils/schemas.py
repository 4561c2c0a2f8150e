from pydantic import BaseModel


class ImageUploadResponse(BaseModel):
    success: bool = False
    image_url: str = ""
