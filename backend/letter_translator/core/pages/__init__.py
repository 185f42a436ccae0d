"""Page set model and image preprocessing."""

from .models import PageImage, PageSet, EncodedPage, VALID_ROTATIONS, normalize_rotation
from .preprocessor import ImagePreprocessor, decode_image, rotate_bytes

__all__ = [
    "PageImage",
    "PageSet",
    "EncodedPage",
    "VALID_ROTATIONS",
    "normalize_rotation",
    "ImagePreprocessor",
    "decode_image",
    "rotate_bytes",
]
