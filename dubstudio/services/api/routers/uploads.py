# dubstudio/services/api/routers/uploads.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from dubstudio.common.logging import get_logger
from dubstudio.common.naming.slugger import upload_identifier
from dubstudio.common.settings import get_settings
from dubstudio.domain.enums import UploadContext
from dubstudio.domain.errors import FieldValidationError
from dubstudio.domain.ports.images import ImageStorePort
from dubstudio.services.api.deps import get_image_store, require_admin
from dubstudio.services.images.inspect import inspect_image
from dubstudio.services.schemas.uploads import UploadResult

cfg = get_settings()
logger = get_logger(__name__)
router = APIRouter(
    prefix=f"{cfg.api.prefix}/admin/projects",
    tags=["uploads"],
    dependencies=[Depends(require_admin)],
)


def _context(raw: str) -> UploadContext:
    try:
        return UploadContext(raw)
    except ValueError as e:
        allowed = ", ".join(c.value for c in UploadContext)
        raise FieldValidationError.single("uploadContext", f"Must be one of: {allowed}.") from e


def _folder(raw: Optional[str], ctx: UploadContext) -> str:
    parts = [p for p in (raw or "").strip().split("/") if p]
    if any(p in (".", "..") for p in parts):
        raise FieldValidationError.single("folder", "Invalid folder.")
    return "/".join(parts) or ctx.default_folder


@router.post("/cover-image", response_model=UploadResult)
def upload_project_image(
    image_file: Optional[UploadFile] = File(None, alias="imageFile"),
    upload_context: str = Form(UploadContext.projectCover.value, alias="uploadContext"),
    identifier: Optional[str] = Form(None),
    folder: Optional[str] = Form(None),
    store: ImageStorePort = Depends(get_image_store),
) -> UploadResult:
    """
    Store one project image and return its public id (<folder>/<identifier>).
    Re-uploading for the same identifier replaces the stored image.
    """
    ctx = _context(upload_context)
    if image_file is None or not image_file.filename:
        raise FieldValidationError.single("imageFile", "No image file was provided.")

    limit = cfg.images.max_upload_bytes
    data = image_file.file.read(limit + 1)
    if len(data) > limit:
        raise FieldValidationError.single(
            "imageFile", f"Image is too large (max {limit // (1024 * 1024)} MB)."
        )
    info = inspect_image(data, cfg.images.allowed_formats)

    ident = upload_identifier(identifier, ctx.value)
    public_id = f"{_folder(folder, ctx)}/{ident}"
    filename = f"{ident}.{info.extension}"

    stored = store.upload(data, public_id=public_id, filename=filename, content_type=image_file.content_type)
    logger.info("%s image uploaded as %s (%sx%s %s)", ctx.label, stored, info.width, info.height, info.format)
    return UploadResult(public_id=stored)
