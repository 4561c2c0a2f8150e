from fastapi import APIRouter, Request
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile
from modeler.modules.utils.s3_storage import S3Storage
from modeler.modules.utils.schemas import ImageUploadResponse
import logging
import time

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/utils", tags=["utils"])

USER_THUMBNAIL_PREFIX = "thumbnail/user"


def epoch_seconds() -> int:
    return int(time.time())


def thumbnail_key(field_name: str, filename: str) -> str:
    return f"{USER_THUMBNAIL_PREFIX}/{epoch_seconds()}_{field_name}_{filename}"


@router.post("/image/upload/user-thumbnail", response_model=ImageUploadResponse)
async def upload_user_thumbnail(request: Request):
    """
    Store the first file of a multipart form as a public user thumbnail.
    The form field name is kept in the object key. No file means success=false.
    """
    form = await request.form()
    for field_name, value in form.multi_items():
        if not isinstance(value, UploadFile):
            continue

        content = await value.read()
        key = thumbnail_key(field_name, value.filename or "upload")
        storage = S3Storage()
        image_url = await run_in_threadpool(
            storage.upload_file,
            content,
            key,
            value.content_type or "application/octet-stream"
        )
        logger.info("Uploaded user thumbnail %s", key)
        return ImageUploadResponse(success=True, image_url=image_url)

    return ImageUploadResponse(success=False)
