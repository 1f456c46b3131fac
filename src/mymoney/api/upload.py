"""Profile image upload to the external image host."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import requests

from mymoney.api.endpoints import DEFAULT_UPLOAD_PRESET, DEFAULT_UPLOAD_URL
from mymoney.domain.errors import UploadError

logger = logging.getLogger(__name__)


class ImageUploader:
    """Uploads an image with an unsigned preset and returns its secure URL."""

    def __init__(
        self,
        upload_url: str = DEFAULT_UPLOAD_URL,
        preset: str = DEFAULT_UPLOAD_PRESET,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.upload_url = upload_url
        self.preset = preset
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    async def upload(self, image_path: str | Path) -> str:
        """Upload the file at image_path.

        Returns:
            Secure URL of the stored image

        Raises:
            UploadError: If the file cannot be read or the host rejects it
        """
        return await asyncio.to_thread(self._upload, Path(image_path))

    def _upload(self, image_path: Path) -> str:
        try:
            content = image_path.read_bytes()
        except OSError as e:
            logger.error("Error reading profile image %s: %s", image_path, e)
            raise UploadError(f"Could not read image '{image_path}': {e}") from e

        try:
            response = self.session.post(
                self.upload_url,
                files={"file": (image_path.name, content)},
                data={"upload_preset": self.preset},
                # Drop any session-wide JSON content type so requests
                # sets the multipart boundary itself
                headers={"Content-Type": None},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("Error uploading image: %s", e)
            raise UploadError(f"Failed to upload image: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if not response.ok or not data.get("secure_url"):
            error = data.get("error")
            detail = error.get("message") if isinstance(error, dict) else error
            logger.error("Failed to upload image (status %s): %s", response.status_code, detail)
            raise UploadError(
                f"Failed to upload image: {detail or response.reason or 'no URL returned'}",
                status=response.status_code,
            )

        logger.info("Image uploaded successfully: %s", data["secure_url"])
        return data["secure_url"]
