from typing import List

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from catalog_admin.adapters.media import MediaError, get_media_adapter
from catalog_admin.config import settings

router = APIRouter(prefix="/api/media", tags=["media"])


@router.post("/upload", summary="Upload images, returns their public URLs")
def upload_images(
    files: List[UploadFile] = File(...),
    folder: str = Form(settings.MEDIA_DEFAULT_FOLDER),
    media=Depends(get_media_adapter),
):
    try:
        return media.upload_many(
            [(f.file.read(), f.filename or "upload") for f in files], folder=folder
        )
    except MediaError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.delete("/{file_id}", summary="Revoke a previously uploaded image")
def delete_image(file_id: str, media=Depends(get_media_adapter)):
    try:
        media.delete(file_id)
    except MediaError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return {"success": True}


@router.get("/auth", summary="Signed parameters for direct browser uploads")
def auth_parameters(media=Depends(get_media_adapter)):
    return media.auth_parameters()
