"""Cloudinary image upload client."""
import hashlib
import logging
import time
from typing import Any, Dict, Optional, Protocol

import httpx

from catalog.core.config import Settings
from catalog.core.errors import UploadFailed

logger = logging.getLogger(__name__)

API_BASE = "https://api.cloudinary.com/v1_1"


class MediaUploader(Protocol):
    """Durably hosts a local file and returns its public URL."""

    async def upload(self, path: str) -> str: ...

    async def aclose(self) -> None: ...

def sign_params(params: Dict[str, Any], api_secret: str) -> str:
    """
    Cloudinary request signature.

    Args:
        params: Signed parameters (everything except file, api_key, resource_type)
        api_secret: Cloudinary API secret

    Returns:
        SHA-1 hex digest of "k1=v1&k2=v2..." (keys sorted) followed by the secret
    """
    to_sign = "&".join(f"{k}={params[k]}" for k in sorted(params) if params[k] not in (None, ""))
    return hashlib.sha1((to_sign + api_secret).encode()).hexdigest()


class CloudinaryUploader:
    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        folder: str = "kaly-products",
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.folder = folder
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Settings) -> "CloudinaryUploader":
        return cls(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            folder=settings.CLOUDINARY_FOLDER,
            timeout=settings.CLOUDINARY_TIMEOUT_S,
        )

    @property
    def upload_url(self) -> str:
        return f"{API_BASE}/{self.cloud_name}/image/upload"

    async def upload(self, path: str) -> str:
        """
        Upload the file at `path` and return its `secure_url`.
        Any transport error, non-2xx answer or malformed body raises UploadFailed.
        """
        if not (self.cloud_name and self.api_key and self.api_secret):
            raise UploadFailed("Image hosting is not configured")

        params = {"folder": self.folder, "timestamp": int(time.time())}
        signed = {**params, "api_key": self.api_key, "signature": sign_params(params, self.api_secret)}
        data = {k: str(v) for k, v in signed.items()}

        t0 = time.perf_counter()
        try:
            with open(path, "rb") as fh:
                resp = await self._client.post(self.upload_url, data=data, files={"file": fh})
        except httpx.HTTPError as e:
            logger.error("cloudinary upload transport error: %s", e)
            raise UploadFailed() from e

        if resp.status_code >= 400:
            logger.error("cloudinary upload failed status=%s body=%s", resp.status_code, resp.text[:500])
            raise UploadFailed()

        try:
            url = resp.json().get("secure_url")
        except ValueError as e:
            raise UploadFailed() from e
        if not url:
            raise UploadFailed()

        logger.info("cloudinary upload ok folder=%s time=%.3fs", self.folder, time.perf_counter() - t0)
        return url

    async def aclose(self) -> None:
        await self._client.aclose()
