"""File name and upload helpers."""

import re
from typing import Iterable, Optional

from letter_translator.core.errors import InputError

DEFAULT_EXPORT_FILENAME = "Letter_Translation.pdf"
DEFAULT_UPLOAD_MIME_TYPE = "image/jpeg"


def export_filename(document_id: Optional[str]) -> str:
    """Download name for an exported letter.

    Every character outside ``[A-Za-z0-9_.-]`` is replaced by ``_``. Without
    a document ID a fixed default name is used.

    >>> export_filename("AB#1/2")
    'Letter_AB_1_2.pdf'
    """
    if document_id is None or not document_id.strip():
        return DEFAULT_EXPORT_FILENAME
    safe_id = re.sub(r"[^A-Za-z0-9_.\-]", "_", document_id.strip())
    return f"Letter_{safe_id}.pdf"


def resolve_upload_mime_type(
    content_type: Optional[str],
    allowed: Iterable[str],
    filename: Optional[str] = None,
) -> str:
    """MIME type for an uploaded page.

    Uploads without a content type are treated as JPEG.

    Raises:
        InputError: If the content type is not an accepted image type
    """
    mime_type = (content_type or "").split(";")[0].strip().lower()
    if not mime_type or mime_type == "application/octet-stream":
        return DEFAULT_UPLOAD_MIME_TYPE
    if mime_type == "image/jpg":
        mime_type = "image/jpeg"
    if mime_type not in set(allowed):
        name = f" ({filename})" if filename else ""
        raise InputError(f"Unsupported file type{name}: {mime_type}. Use JPG, PNG or WebP.")
    return mime_type
