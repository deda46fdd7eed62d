import logging
import os
import tempfile
from typing import Optional

from fastapi import UploadFile

from catalog.clients.cloudinary import MediaUploader
from catalog.core.errors import BadRequest
from catalog.domain.services.constants import UPLOAD_CHUNK_SIZE

logger = logging.getLogger(__name__)


# Stream using async reads (UploadFile doesn't implement __aiter__)
async def _iter_bytes(upload: UploadFile, chunk_size: int = UPLOAD_CHUNK_SIZE):
    while True:
        chunk = await upload.read(chunk_size)
        if not chunk:
            break
        yield chunk


class UploadService:
    def __init__(self, media: MediaUploader, tmp_dir: Optional[str] = None):
        self.media = media
        self.tmp_dir = tmp_dir

    async def _stage(self, upload: UploadFile) -> str:
        suffix = os.path.splitext(upload.filename or "")[1]
        fd, path = tempfile.mkstemp(prefix="upload-", suffix=suffix, dir=self.tmp_dir)
        try:
            with os.fdopen(fd, "wb") as out:
                async for chunk in _iter_bytes(upload):
                    out.write(chunk)
        except BaseException:
            os.unlink(path)
            raise
        return path

    async def upload_image(self, upload: Optional[UploadFile]) -> dict:
        """
        Stage the uploaded file on disk, hand its path to the media host and
        return `{"url": ...}`. The staging file never outlives the call.
        """
        if upload is None:
            raise BadRequest("No image provided")

        path = await self._stage(upload)
        try:
            url = await self.media.upload(path)
        finally:
            try:
                os.unlink(path)
            except FileNotFoundError:
                pass
        logger.info("image uploaded filename=%s url=%s", upload.filename, url)
        return {"url": url}
