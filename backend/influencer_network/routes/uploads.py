"""
Influencer Network Backend: Upload Route Handlers
==================================================

What:  Attachment storage for logos, profile photos, portfolio files,
       rate-card and invoice attachments and payment receipts.
How:   POST stores the file via FileService and returns its relative path
       and serving URL, which clients then save on the owning record.

Route Inventory:
    POST   /api/uploads          multipart "file" (authenticated)
    GET    /api/uploads/{path}   serve a stored file
    DELETE /api/uploads/{path}   remove a stored file (authenticated)

Serving is unauthenticated so stored URLs work directly in <img> tags;
paths are UUID-based and resolved strictly inside the storage root.
"""

import logging

from fastapi import APIRouter, File, UploadFile
from fastapi.responses import FileResponse

from influencer_network.routes.deps import PROTECTED
from influencer_network.schemas.common import COMMON_ERROR_RESPONSES, ApiResponse
from influencer_network.schemas.upload import StoredFileData
from influencer_network.services.file_service import file_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/uploads", tags=["Uploads"], responses=COMMON_ERROR_RESPONSES)


@router.post(
    "",
    status_code=201,
    response_model=ApiResponse[StoredFileData],
    dependencies=PROTECTED,
    summary="Upload an attachment",
    description="Accepts PNG, JPG, JPEG, WEBP or PDF files up to the configured size limit.",
)
async def upload_file(
    file: UploadFile = File(..., description="The file to store"),
) -> ApiResponse[StoredFileData]:
    try:
        # Reject on the declared part size before pulling the body into memory
        file_service.validate_extension(file.filename or "")
        file_service.validate_size(file.size)
        content = await file.read()
        logger.info("Received upload: filename=%s, size=%d bytes", file.filename or "unknown", len(content))
        stored = await file_service.store(file.filename or "", content, declared_size=file.size)
    finally:
        await file.close()
    return ApiResponse[StoredFileData](message="File uploaded successfully", data=StoredFileData(file=stored))


@router.get(
    "/{file_path:path}",
    summary="Serve a stored file",
    responses={200: {"description": "File content"}},
)
async def serve_file(file_path: str) -> FileResponse:
    path = file_service.resolve(file_path)
    return FileResponse(
        path=str(path),
        media_type=file_service.content_type_for(path),
        headers={"Cache-Control": "private, max-age=3600"},
    )


@router.delete(
    "/{file_path:path}",
    response_model=ApiResponse[None],
    dependencies=PROTECTED,
    summary="Delete a stored file",
)
async def delete_file(file_path: str) -> ApiResponse[None]:
    await file_service.delete(file_path)
    return ApiResponse[None](message="File deleted successfully")
