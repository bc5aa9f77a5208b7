"""
Influencer Network Backend: File Storage Service
=================================================

What:  Stores uploaded attachments (logos, profile photos, portfolio files,
       rate-card and invoice attachments, payment receipts) and serves them back.
How:   Validates extension and size, writes to a date-organized directory
       under a UUID filename with async file I/O, and resolves stored paths
       strictly inside the storage root.

Layout:
    storage/
    └── 2026/
        └── 10/
            └── 19/
                ├── 0b9d3c1e-....png
                └── 5f2a77c4-....pdf

Stored paths are relative to the storage root and contain no user input, so
they are safe to persist on records and to echo back in URLs.
"""

import logging
import os
import uuid
from pathlib import Path
from typing import Optional, Tuple

import aiofiles

from influencer_network.config import settings
from influencer_network.database import utcnow
from influencer_network.exceptions import FileStorageError, NotFoundError, ValidationError
from influencer_network.schemas.upload import StoredFile

logger = logging.getLogger(__name__)

# Extension → content type served back for it
ALLOWED_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".webp": "image/webp",
    ".pdf": "application/pdf",
}

UPLOADS_URL_PREFIX = "/api/uploads"


class FileService:
    """
    Upload validation, storage and lookup.

    The storage root is created on construction; tests pass their own
    temporary directory.
    """

    def __init__(self, storage_root: Optional[str] = None):
        self.storage_root = Path(storage_root or settings.storage_root).resolve()
        self.storage_root.mkdir(parents=True, exist_ok=True)
        logger.debug("FileService storage_root=%s", self.storage_root)

    def validate_extension(self, filename: str) -> str:
        """Return the lower-cased extension or raise ValidationError."""
        ext = Path(filename or "").suffix.lower()
        if ext not in ALLOWED_TYPES:
            raise ValidationError(
                message=(
                    f"File type '{ext or filename}' is not supported. "
                    f"Allowed types: {', '.join(sorted(ALLOWED_TYPES))}"
                ),
                field="file",
                context={"extension": ext, "allowed": sorted(ALLOWED_TYPES)},
            )
        return ext

    def validate_size(self, content_length: Optional[int], actual_size: Optional[int] = None) -> None:
        """
        Check the declared size, then the byte count once the body is read.

        content_length comes from the multipart part (UploadFile.size) and lets
        an oversized upload fail before it is read; actual_size catches
        clients that under-report. Pass actual_size=None for the pre-read check.
        """
        max_mb = settings.max_file_size / (1024 * 1024)

        if content_length and content_length > settings.max_file_size:
            raise ValidationError(
                message=f"File size exceeds maximum of {max_mb:.0f}MB. Please upload a smaller file.",
                field="file",
                context={"max_size_mb": max_mb, "reported_size": content_length},
            )

        if actual_size is None:
            return
        if actual_size == 0:
            raise ValidationError("Uploaded file is empty", field="file")
        if actual_size > settings.max_file_size:
            raise ValidationError(
                message=f"File size ({actual_size / (1024 * 1024):.1f}MB) exceeds maximum of {max_mb:.0f}MB.",
                field="file",
                context={"max_size_mb": max_mb, "actual_size": actual_size},
            )

    def _generate_storage_path(self, extension: str) -> Tuple[Path, str]:
        relative_path = f"{utcnow():%Y/%m/%d}/{uuid.uuid4()}{extension}"
        return self.storage_root / relative_path, relative_path

    async def store(self, filename: str, content: bytes, declared_size: Optional[int] = None) -> StoredFile:
        """
        Validate and persist an upload.

        Raises:
            ValidationError: unsupported extension, empty or oversized file.
            FileStorageError: the write failed.
        """
        ext = self.validate_extension(filename)
        self.validate_size(declared_size, len(content))

        absolute_path, relative_path = self._generate_storage_path(ext)
        try:
            absolute_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(absolute_path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store file at %s: %s", absolute_path, str(e))
            raise FileStorageError(
                message="Failed to save uploaded file. Please try again.",
                context={"os_error": str(e)},
            )

        logger.info("File stored: %s (%d bytes)", relative_path, len(content))
        return StoredFile(
            path=relative_path,
            url=f"{UPLOADS_URL_PREFIX}/{relative_path}",
            size=len(content),
            content_type=ALLOWED_TYPES[ext],
            original_name=Path(filename).name,
        )

    def resolve(self, relative_path: str) -> Path:
        """
        Map a stored relative path to an existing file inside the storage root.

        Raises:
            ValidationError: the path escapes the storage root.
            NotFoundError: no such file.
        """
        candidate = (self.storage_root / relative_path).resolve()
        if candidate != self.storage_root and self.storage_root not in candidate.parents:
            logger.warning("Rejected upload path outside storage root: %s", relative_path)
            raise ValidationError("Invalid file path", field="path")
        if not candidate.is_file():
            raise NotFoundError("File", relative_path)
        return candidate

    def content_type_for(self, path: Path) -> str:
        return ALLOWED_TYPES.get(path.suffix.lower(), "application/octet-stream")

    async def delete(self, relative_path: str) -> None:
        path = self.resolve(relative_path)
        try:
            os.remove(path)
        except OSError as e:
            logger.error("Failed to delete file %s: %s", relative_path, str(e))
            raise FileStorageError("Failed to delete file", context={"os_error": str(e)})
        logger.info("File deleted: %s", relative_path)


file_service = FileService()
