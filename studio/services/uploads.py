"""Upload intake for user-provided images.

Uploaded bytes are read fully into memory, verified with Pillow and handed on
as a base64 ``Image``. Files in a format the generative service does not
accept, or larger than ``settings.upload_max_dim``, are re-encoded:

    JPEG sources stay JPEG (RGB, ``settings.upload_quality``)
    everything else becomes PNG
"""
from __future__ import annotations

import io
import logging
from typing import Tuple

from PIL import Image as PILImage

from studio.models import JPEG, PNG, Image

logger = logging.getLogger(__name__)

READ_FAILED = "Failed to read the uploaded file."

_MEDIA_TYPES = {
    "JPEG": JPEG,
    "PNG": PNG,
    "WEBP": "image/webp",
}


class UploadError(Exception):
    """Raised when an upload cannot be turned into an image."""

    message = READ_FAILED

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class UploadIntake:  # pylint: disable=too-few-public-methods
    def __init__(self, *, max_bytes: int, max_dim: int, quality: int) -> None:
        self._max_bytes = max_bytes
        self._max_dim = max_dim
        self._quality = quality

    def read(self, data: bytes) -> Image:
        """Verify *data* is a decodable image and return it encoded.

        Raises ``UploadError`` for empty, oversized or undecodable input.
        """

        if not data:
            raise UploadError("empty upload")
        if len(data) > self._max_bytes:
            raise UploadError(f"upload of {len(data)} bytes exceeds {self._max_bytes} byte limit")

        try:
            with PILImage.open(io.BytesIO(data)) as img:
                img.load()
                fmt = (img.format or "").upper()
                if fmt in _MEDIA_TYPES and max(img.size) <= self._max_dim:
                    return Image.from_bytes(data, _MEDIA_TYPES[fmt])
                payload, media_type = _reencode_image(img, fmt, max_dim=self._max_dim, quality=self._quality)
        except (OSError, SyntaxError, ValueError, PILImage.DecompressionBombError) as exc:
            raise UploadError(f"not a readable image: {exc}") from exc

        logger.debug("Re-encoded %s upload as %s (%d bytes)", fmt or "unknown", media_type, len(payload))
        return Image.from_bytes(payload, media_type)


# ------------------------------------------------------------------
# Helper functions
# ------------------------------------------------------------------

def _reencode_image(
    img: PILImage.Image,
    fmt: str,
    *,
    max_dim: int,
    quality: int,
) -> Tuple[bytes, str]:
    """Resize/re-encode image with Pillow and return (bytes, media_type)."""

    width, height = img.size
    if max(width, height) > max_dim:
        img.thumbnail((max_dim, max_dim))
    buffer = io.BytesIO()
    if fmt == "JPEG":
        img.convert("RGB").save(buffer, format="JPEG", quality=quality, optimize=True)
        return buffer.getvalue(), JPEG
    if img.mode not in ("RGB", "RGBA", "L", "LA"):
        img = img.convert("RGBA")
    img.save(buffer, format="PNG", optimize=True)
    return buffer.getvalue(), PNG
