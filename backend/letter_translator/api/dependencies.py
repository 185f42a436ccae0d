"""API dependencies for the pipeline, the exporter and page uploads.

This module provides:
- Shared pipeline and exporter instances, created on first use
- Upload parsing that turns multipart files into a validated PageSet
"""

import logging
from functools import lru_cache
from typing import List, Optional

from fastapi import UploadFile

from letter_translator.config import Settings, settings
from letter_translator.core.errors import InputError
from letter_translator.core.export import PDFExporter
from letter_translator.core.pages import PageSet, normalize_rotation
from letter_translator.core.translation import PipelineFactory, TranslationPipeline
from letter_translator.utils.files import resolve_upload_mime_type

logger = logging.getLogger(__name__)


def get_settings() -> Settings:
    return settings


@lru_cache
def get_pipeline() -> TranslationPipeline:
    """Shared pipeline, so in-flight request tracking spans requests.

    Raises:
        ConfigurationError: If the model API key is missing. Not cached, so
            setting the key later takes effect.
    """
    return PipelineFactory.create(settings)


@lru_cache
def get_exporter() -> PDFExporter:
    return PDFExporter(
        logo_path=settings.export_logo_path,
        font_path=settings.export_font_path,
        attribution=settings.export_attribution,
    )


def parse_rotations(rotations: Optional[str], count: int) -> List[int]:
    """Parse a comma-separated rotation list, one entry per file.

    Raises:
        InputError: If the list is malformed or its length does not match
    """
    if rotations is None or not rotations.strip():
        return [0] * count
    try:
        values = [int(value.strip() or 0) for value in rotations.split(",")]
    except ValueError as e:
        raise InputError(f"Invalid rotations: {rotations}") from e
    if len(values) != count:
        raise InputError(f"Expected {count} rotations, got {len(values)}")
    return [normalize_rotation(value) for value in values]


async def read_page_set(
    files: List[UploadFile],
    rotations: Optional[str],
    config: Settings = settings,
) -> PageSet:
    """Read uploaded files into a page set in upload order.

    Raises:
        InputError: If there are no files or too many, a file is empty,
            too large, or of an unsupported type
    """
    if not files:
        raise InputError("No pages were provided.")
    if len(files) > config.max_pages:
        raise InputError(
            f"Too many pages: {len(files)} submitted, at most {config.max_pages} allowed."
        )

    page_rotations = parse_rotations(rotations, len(files))
    page_set = PageSet(capacity=config.max_pages)

    for index, (upload, rotation) in enumerate(zip(files, page_rotations), start=1):
        mime_type = resolve_upload_mime_type(
            upload.content_type, config.allowed_mime_types, upload.filename
        )
        data = await upload.read()
        if not data:
            raise InputError(f"Page {index} is empty.")
        if len(data) > config.max_upload_size_bytes:
            raise InputError(
                f"Page {index} is too large: maximum size is {config.max_upload_size_mb}MB."
            )
        page_set.add(data, mime_type=mime_type, rotation=rotation)

    logger.info(f"Received {len(page_set)} page(s)")
    return page_set
