"""Image preprocessing for page uploads.

Applies each page's rotation and re-encodes it in its original format before
the page leaves the service for the model. Pages are independent, so a whole
set is processed concurrently and reassembled in document order.
"""

import asyncio
import logging
from io import BytesIO
from typing import List, Sequence

from PIL import Image, UnidentifiedImageError

from ..errors import ProcessingError
from .models import DEFAULT_MIME_TYPE, EncodedPage, PageImage, normalize_rotation

logger = logging.getLogger(__name__)

# MIME type -> Pillow format name
MIME_TO_FORMAT = {
    "image/jpeg": "JPEG",
    "image/jpg": "JPEG",
    "image/png": "PNG",
    "image/webp": "WEBP",
    "image/gif": "GIF",
    "image/bmp": "BMP",
    "image/tiff": "TIFF",
}

FORMAT_TO_MIME = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "WEBP": "image/webp",
    "GIF": "image/gif",
    "BMP": "image/bmp",
    "TIFF": "image/tiff",
}

JPEG_QUALITY = 95


def decode_image(data: bytes) -> Image.Image:
    """Decode image bytes, forcing a full pixel load.

    Raises:
        ProcessingError: If the bytes are not a decodable image
    """
    if not data:
        raise ProcessingError("Image is empty")
    try:
        image = Image.open(BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as e:
        raise ProcessingError(f"Could not decode image: {e}") from e
    return image


def rotate_bytes(data: bytes, mime_type: str, degrees: int) -> EncodedPage:
    """Rotate encoded image bytes clockwise and re-encode them.

    Rotation happens about the image centre; 90 and 270 degree rotations swap
    width and height. A rotation of 0 still re-encodes.

    Args:
        data: Encoded source image
        mime_type: MIME type of the source; kept for the output
        degrees: Clockwise rotation, a multiple of 90

    Returns:
        EncodedPage with the rotated pixels

    Raises:
        ProcessingError: If decoding or re-encoding fails
    """
    degrees = normalize_rotation(degrees)
    image = decode_image(data)

    fmt = MIME_TO_FORMAT.get(mime_type) or image.format
    if not fmt:
        raise ProcessingError(f"Unsupported image type: {mime_type}")
    out_mime = mime_type if mime_type in MIME_TO_FORMAT else FORMAT_TO_MIME.get(fmt, DEFAULT_MIME_TYPE)

    # Pillow rotates counter-clockwise; multiples of 90 take the lossless transpose path
    rotated = image.rotate(-degrees, expand=True) if degrees else image.copy()

    save_kwargs = {}
    if fmt == "JPEG":
        if rotated.mode not in ("RGB", "L", "CMYK"):
            rotated = rotated.convert("RGB")
        save_kwargs["quality"] = JPEG_QUALITY
    elif fmt == "WEBP":
        save_kwargs["quality"] = JPEG_QUALITY

    buffer = BytesIO()
    try:
        rotated.save(buffer, format=fmt, **save_kwargs)
    except (OSError, ValueError, KeyError) as e:
        raise ProcessingError(f"Could not re-encode image as {fmt}: {e}") from e

    return EncodedPage(
        data=buffer.getvalue(),
        mime_type=out_mime,
        width=rotated.width,
        height=rotated.height,
    )


class ImagePreprocessor:
    """Normalizes uploaded pages before submission."""

    def process(self, page: PageImage) -> EncodedPage:
        """Apply the page's rotation and re-encode it."""
        try:
            encoded = rotate_bytes(page.data, page.mime_type, page.rotation)
        except ProcessingError as e:
            logger.warning(f"Preprocessing failed for page {page.order + 1}: {e.message}")
            raise ProcessingError(f"Page {page.order + 1}: {e.message}") from e
        logger.debug(
            f"Preprocessed page {page.order + 1}: rotation={page.rotation}, "
            f"size={encoded.width}x{encoded.height}, bytes={len(encoded.data)}"
        )
        return encoded

    async def process_all(self, pages: Sequence[PageImage]) -> List[EncodedPage]:
        """Preprocess pages concurrently, returning them in document order."""
        ordered = sorted(pages, key=lambda p: p.order)
        loop = asyncio.get_running_loop()
        tasks = [loop.run_in_executor(None, self.process, page) for page in ordered]
        return list(await asyncio.gather(*tasks))
