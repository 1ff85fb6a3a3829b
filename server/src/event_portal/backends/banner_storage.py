"""Local bucket for event banner images"""

import random
import string
import time
from pathlib import Path

from event_portal.exceptions import BannerUploadError
from event_portal.logging_config import get_logger

logger = get_logger(__name__)

ALLOWED_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "webp", "svg"}
MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB


def generate_banner_path(filename: str) -> str:
    """Unique object path: '<epoch ms>-<7 random chars>.<original extension>'"""
    extension = filename.rsplit(".", 1)[1].lower() if "." in filename else ""
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=7))
    return f"{int(time.time() * 1000)}-{suffix}.{extension}"


class BannerStorage:
    """
    Stores uploaded banners on disk and serves them under a public prefix.

    Args:
        base_dir: Directory holding the stored files
        public_prefix: URL path the directory is mounted at
    """

    def __init__(self, base_dir: str, public_prefix: str = "/banners"):
        self.base_dir = Path(base_dir)
        self.public_prefix = public_prefix.rstrip("/")

    def upload(self, filename: str, data: bytes) -> str:
        """
        Store a banner file under a generated path.

        Returns:
            The stored object's path, relative to the bucket

        Raises:
            BannerUploadError: If the file is empty, too large, not an image,
                or cannot be written
        """
        if not filename or not data:
            raise BannerUploadError("No banner file provided")

        extension = filename.rsplit(".", 1)[1].lower() if "." in filename else ""
        if extension not in ALLOWED_EXTENSIONS:
            raise BannerUploadError(f"File type .{extension} is not allowed")
        if len(data) > MAX_FILE_SIZE:
            raise BannerUploadError("Banner file is larger than 5MB")

        path = generate_banner_path(filename)
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            (self.base_dir / path).write_bytes(data)
        except OSError as e:
            logger.error(f"Upload error for {path}: {e}")
            raise BannerUploadError("Failed to store banner") from e

        logger.info(f"Stored banner {path} ({len(data)} bytes)")
        return path

    def public_url(self, path: str) -> str:
        return f"{self.public_prefix}/{path}"
