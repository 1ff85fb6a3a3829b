"""Tests for the event banner bucket"""

import re

import pytest

from event_portal.backends.banner_storage import (
    MAX_FILE_SIZE,
    BannerStorage,
    generate_banner_path,
)
from event_portal.exceptions import BannerUploadError


class TestBannerStorage:
    def test_generated_path_shape(self):
        path = generate_banner_path("My Banner.JPG")

        assert re.fullmatch(r"\d+-[a-z0-9]{7}\.jpg", path)
        assert generate_banner_path("a.png") != generate_banner_path("a.png")

    def test_upload_writes_file(self, tmp_path):
        storage = BannerStorage(str(tmp_path / "bucket"), "/banners/")

        path = storage.upload("banner.png", b"image-bytes")

        assert (tmp_path / "bucket" / path).read_bytes() == b"image-bytes"
        assert storage.public_url(path) == f"/banners/{path}"

    @pytest.mark.parametrize(
        "filename,data",
        [
            ("banner.png", b""),
            ("notes.txt", b"text"),
            ("no-extension", b"data"),
            ("huge.png", b"x" * (MAX_FILE_SIZE + 1)),
        ],
    )
    def test_rejected_uploads(self, tmp_path, filename, data):
        storage = BannerStorage(str(tmp_path))

        with pytest.raises(BannerUploadError):
            storage.upload(filename, data)
        assert list(tmp_path.iterdir()) == []
