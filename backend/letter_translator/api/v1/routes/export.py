"""Export API routes."""

import asyncio
import logging
from datetime import date
from functools import partial
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import Response
from pydantic import ValidationError

from letter_translator.api.dependencies import get_exporter, read_page_set
from letter_translator.core.errors import InputError
from letter_translator.core.export import PDFExporter
from letter_translator.core.translation import TranslationResult

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/export")
async def export_pdf(
    files: List[UploadFile] = File(...),
    result: str = Form(...),
    translation: str = Form(""),
    rotations: Optional[str] = Form(None),
    document_id: Optional[str] = Form(None),
    export_date: Optional[date] = Form(None),
    exporter: PDFExporter = Depends(get_exporter),
):
    """Export the letter pages and edited translation as a PDF download."""
    try:
        translation_result = TranslationResult.model_validate_json(result)
    except ValidationError as e:
        raise InputError(f"Invalid translation result: {e.errors()[0]['msg']}") from e

    page_set = await read_page_set(files, rotations)

    # ReportLab is synchronous
    loop = asyncio.get_running_loop()
    artifact = await loop.run_in_executor(
        None,
        partial(
            exporter.export,
            page_set,
            translation_result,
            translation,
            document_id=document_id,
            export_date=export_date,
        ),
    )

    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={"Content-Disposition": f'attachment; filename="{artifact.filename}"'},
    )
