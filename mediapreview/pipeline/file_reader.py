"""Decode selected files into data URIs for immediate preview."""

import asyncio
import base64
import io
import logging
from typing import Optional

from PIL import Image, UnidentifiedImageError

from ..models.file_selection import SelectedFile
from .content_types import OCTET_STREAM, is_image, normalize_content_type, sniff_content_type

logger = logging.getLogger(__name__)

SNIFF_BYTES = 8192
# Vector formats Pillow cannot open
UNVERIFIABLE_IMAGE_TYPES = {"image/svg+xml"}


class FileDecodeError(Exception):
    """Raised when a selected file cannot be decoded for preview."""
    pass


class FileReader:
    """Base class for file-read capabilities."""

    async def read_as_data_uri(self, file: SelectedFile) -> str:
        raise NotImplementedError


class DataUriFileReader(FileReader):
    """Reads a file and encodes it as a base64 data URI.

    Args:
        max_file_bytes: Largest file accepted (None for no limit)
        verify_images: Verify image payloads with Pillow before encoding
    """

    def __init__(self, max_file_bytes: Optional[int] = None, verify_images: bool = True) -> None:
        self.max_file_bytes = max_file_bytes
        self.verify_images = verify_images

    async def read_as_data_uri(self, file: SelectedFile) -> str:
        """Decode a file into a data URI.

        Raises:
            FileDecodeError: If the file is unreadable, empty, too large or corrupt
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._encode, file)

    def _read_bytes(self, file: SelectedFile) -> bytes:
        if file.data is not None:
            return file.data
        try:
            return file.path.read_bytes()
        except OSError as e:
            raise FileDecodeError(f"Failed to read {file.name}: {e}") from e

    def _encode(self, file: SelectedFile) -> str:
        data = self._read_bytes(file)
        if not data:
            raise FileDecodeError(f"File is empty: {file.name}")
        if self.max_file_bytes is not None and len(data) > self.max_file_bytes:
            raise FileDecodeError(
                f"File {file.name} is {len(data)} bytes, limit is {self.max_file_bytes}"
            )

        content_type = normalize_content_type(file.content_type)
        if not content_type or content_type == OCTET_STREAM:
            content_type = sniff_content_type(file.name, data[:SNIFF_BYTES])

        if self.verify_images and is_image(content_type) and content_type not in UNVERIFIABLE_IMAGE_TYPES:
            self._verify_image(file, data)

        payload = base64.b64encode(data).decode("ascii")
        return f"data:{content_type};base64,{payload}"

    def _verify_image(self, file: SelectedFile, data: bytes) -> None:
        try:
            with Image.open(io.BytesIO(data)) as img:
                img.verify()
        except Image.DecompressionBombError as e:
            raise FileDecodeError(f"Image {file.name} exceeds the pixel limit: {e}") from e
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
            raise FileDecodeError(f"Corrupt image {file.name}: {e}") from e
