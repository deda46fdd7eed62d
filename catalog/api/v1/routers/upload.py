# catalog/api/v1/routers/upload.py
from typing import Optional
from fastapi import APIRouter, File, UploadFile
import time

from catalog.api.deps import AdminDep, ContextDep
from catalog.domain.services.constants import UPLOAD_FIELD

import logging
logger = logging.getLogger(__name__)

router = APIRouter(tags=["upload"])


@router.post("/upload", dependencies=[AdminDep])
async def upload_image(
    ctx: ContextDep,
    image: Optional[UploadFile] = File(None, alias=UPLOAD_FIELD, description="Image file to host"),
):
    """
    Forward one image to the media host and return its public URL.
    """
    t0 = time.perf_counter()
    res = await ctx.uploads.upload_image(image)
    logger.info("Response: upload_image elapsed_time=%.4fs", time.perf_counter() - t0)
    return res
