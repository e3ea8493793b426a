"""
Image storage.

Book cover images live in a single directory, keyed by filename. The
directory is resolved once at startup and handed to the store explicitly.
"""

import base64
import binascii
from pathlib import Path

from loguru import logger


class ImageStoreError(Exception):
    """Raised when an image payload cannot be decoded or written."""


class ImageStore:
    """
    Local filesystem store for book cover images.

    Files are stored flat as ``{images_dir}/{filename}``.
    """

    def __init__(self, images_dir: str | Path):
        self.root = Path(images_dir)
        self.root.mkdir(parents=True, exist_ok=True)
        logger.info("Image store ready at {}", self.root.resolve())

    def path_for(self, filename: str) -> Path:
        """Resolve a filename inside the store; directory parts are discarded."""
        name = Path(filename).name
        if not name or name in {".", ".."}:
            raise ImageStoreError(f"Invalid image file name: {filename!r}")
        return self.root / name

    def exists(self, filename: str | None) -> bool:
        if not filename:
            return False
        return self.path_for(filename).is_file()

    def read_base64(self, filename: str | None) -> str | None:
        """Return the stored image as base64, or None when there is no file."""
        if not self.exists(filename):
            return None
        data = self.path_for(filename).read_bytes()
        return base64.b64encode(data).decode("ascii")

    def write_base64(self, filename: str, payload: str) -> Path:
        """Decode a base64 payload and write it under filename."""
        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ImageStoreError(f"Image payload for {filename!r} is not valid base64") from e

        path = self.path_for(filename)
        path.write_bytes(data)
        logger.debug("Wrote {} bytes to {}", len(data), path)
        return path

    def delete(self, filename: str | None) -> bool:
        """Delete a file. Returns True if deleted."""
        if not self.exists(filename):
            return False
        self.path_for(filename).unlink()
        logger.debug("Deleted image {}", filename)
        return True
