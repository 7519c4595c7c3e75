"""Tests for upload verification and re-encoding."""

from __future__ import annotations

import io

import pytest
from PIL import Image as PILImage

from studio.models import JPEG, PNG
from studio.services.uploads import READ_FAILED, UploadError, UploadIntake

from .conftest import make_image_bytes


def decoded_size(data: bytes) -> tuple[int, int]:
    with PILImage.open(io.BytesIO(data)) as img:
        return img.size


class TestAccepted:
    def test_png_kept_verbatim(self, intake: UploadIntake, png_bytes: bytes) -> None:
        image = intake.read(png_bytes)
        assert image.media_type == PNG
        assert image.to_bytes() == png_bytes

    def test_jpeg_kept_verbatim(self, intake: UploadIntake) -> None:
        data = make_image_bytes("JPEG")
        image = intake.read(data)
        assert image.media_type == JPEG
        assert image.to_bytes() == data

    def test_webp_media_type(self, intake: UploadIntake) -> None:
        assert intake.read(make_image_bytes("WEBP")).media_type == "image/webp"

    def test_large_jpeg_downsized(self, intake: UploadIntake) -> None:
        image = intake.read(make_image_bytes("JPEG", size=(1024, 512)))
        assert image.media_type == JPEG
        assert decoded_size(image.to_bytes()) == (256, 128)

    def test_unsupported_format_becomes_png(self, intake: UploadIntake) -> None:
        image = intake.read(make_image_bytes("GIF", mode="P"))
        assert image.media_type == PNG
        assert decoded_size(image.to_bytes()) == (8, 8)


class TestRejected:
    @pytest.mark.parametrize(
        "data",
        [
            b"",
            b"just some text, not an image",
            make_image_bytes("PNG")[:40],
        ],
    )
    def test_unreadable(self, intake: UploadIntake, data: bytes) -> None:
        with pytest.raises(UploadError) as exc_info:
            intake.read(data)
        assert exc_info.value.message == READ_FAILED

    def test_too_large(self, png_bytes: bytes) -> None:
        small = UploadIntake(max_bytes=len(png_bytes) - 1, max_dim=256, quality=85)
        with pytest.raises(UploadError, match="exceeds"):
            small.read(png_bytes)
