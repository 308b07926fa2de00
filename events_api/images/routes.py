"""Admin image library endpoints."""

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from events_api.auth.dependencies import require_admin
from events_api.config.settings import get_settings
from events_api.images.service import ImageLibrary, get_categories
from events_api.utils.errors import PayloadTooLarge, ValidationError

router = APIRouter(prefix="/api/admin/images", tags=["Images"], dependencies=[Depends(require_admin)])

_CHUNK_SIZE = 64 * 1024


def get_image_library() -> ImageLibrary:
    return ImageLibrary(get_categories())


async def _read_limited(upload: UploadFile, limit: int) -> bytes:
    chunks = []
    size = 0
    while True:
        chunk = await upload.read(_CHUNK_SIZE)
        if not chunk:
            break
        size += len(chunk)
        if size > limit:
            raise PayloadTooLarge(f"Image exceeds the {limit} byte upload limit.")
        chunks.append(chunk)
    return b"".join(chunks)


@router.get("", summary="List image categories", description="Without `category`, summarize every category; with it, list that category's files.")
async def list_images(category: str | None = Query(None), library: ImageLibrary = Depends(get_image_library)):
    if category:
        return {"category": library.describe(category), "files": library.list_files(category)}
    return library.list_categories()


@router.post("", status_code=201, summary="Upload an image")
async def upload(
    category: str | None = Form(None),
    image: UploadFile | None = File(None),
    library: ImageLibrary = Depends(get_image_library),
):
    if not category:
        raise ValidationError("Category is required.")
    library.get_category(category)
    if image is None:
        raise ValidationError("Image file is required.")

    data = await _read_limited(image, get_settings().MAX_UPLOAD_BYTES)
    info = library.store(category, image.filename, data)
    return {"message": "Image uploaded successfully.", "file": info}


@router.delete("/{category}/{filename:path}", summary="Delete an image")
async def delete(category: str, filename: str, library: ImageLibrary = Depends(get_image_library)):
    library.remove(category, filename)
    return {"message": "Image deleted successfully."}
