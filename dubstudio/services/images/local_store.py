# dubstudio/services/images/local_store.py
from __future__ import annotations

import os
from pathlib import Path

from dubstudio.common.logging import get_logger
from dubstudio.common.path.safe import safe_join
from dubstudio.domain.errors import ImageUploadError
from dubstudio.domain.ports.images import ImageStorePort

logger = get_logger(__name__)


class LocalImageStore(ImageStorePort):
    """
    Filesystem implementation of ImageStorePort for development and tests.
    Files land at <root>/<public_id>.<ext>; the public id keeps its folder.
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    def upload(self, data: bytes, *, public_id: str, filename: str, content_type: str | None = None) -> str:
        ext = Path(filename).suffix.lower() or ".bin"
        try:
            dst = safe_join(self.root, f"{public_id}{ext}")
        except ValueError as e:
            raise ImageUploadError("Invalid image identifier.") from e

        dst.parent.mkdir(parents=True, exist_ok=True)
        tmp = dst.with_name(dst.name + ".part")
        try:
            tmp.write_bytes(data)
            # atomic within the same filesystem
            os.replace(tmp, dst)
        except OSError as e:
            logger.exception("Writing %s failed", dst)
            raise ImageUploadError("Image could not be stored.") from e
        logger.info("Stored image %s (%d bytes)", public_id, len(data))
        return public_id

    def path_for(self, public_id: str) -> Path | None:
        matches = sorted(safe_join(self.root, public_id).parent.glob(Path(public_id).name + ".*"))
        return matches[0] if matches else None
