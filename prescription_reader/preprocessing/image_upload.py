from __future__ import annotations

import io

from PIL import Image, UnidentifiedImageError
from fastapi import HTTPException, UploadFile

from prescription_reader.encoding.image_encoder import ImageBlob


SUPPORTED_IMAGE_MIME = {
    "image/jpeg",
    "image/png",
    "image/webp",
    "image/gif",
    "image/bmp",
    "image/heic",
    "image/heif",
}

# Pillow cannot decode these without a plugin; accept them on content type alone.
_UNVERIFIED_MIME = {"image/heic", "image/heif"}


def _mb_to_bytes(mb: int) -> int:
    return mb * 1024 * 1024


async def load_image_upload(file: UploadFile, *, max_mb: int = 10) -> ImageBlob:
    """
    Read an uploaded image fully into memory.
    - Validates MIME type (header-based, best-effort)
    - Enforces size limit
    - Checks that Pillow can identify the bytes as an image
    """
    # 1) Basic type check
    content_type = (file.content_type or "").lower()
    if content_type not in SUPPORTED_IMAGE_MIME:
        raise HTTPException(
            status_code=400,
            detail={"code": "unsupported_file_type", "message": f"Unsupported content_type={file.content_type}"},
        )

    # 2) Read bytes and enforce size limit
    data = await file.read()
    if len(data) > _mb_to_bytes(max_mb):
        raise HTTPException(
            status_code=413,
            detail={"code": "payload_too_large", "message": f"Image exceeds max size of {max_mb}MB"},
        )

    # 3) Make sure it really is an image
    if content_type not in _UNVERIFIED_MIME:
        try:
            with Image.open(io.BytesIO(data)) as img:
                img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError):
            raise HTTPException(
                status_code=422,
                detail={"code": "unprocessable_input", "message": "Invalid or corrupted image"},
            )

    return ImageBlob(data=data, media_type=content_type, filename=file.filename)
