"""Translation API routes."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from pydantic import BaseModel

from letter_translator.api.dependencies import get_pipeline, read_page_set
from letter_translator.config import settings
from letter_translator.core.translation import PromptBuilder, SourceLanguage, TranslationPipeline

logger = logging.getLogger(__name__)

router = APIRouter()


class TranslateResponse(BaseModel):
    """Successful translation response."""
    success: bool = True
    data: dict


@router.post("/translate", response_model=TranslateResponse)
async def translate_letter(
    files: List[UploadFile] = File(...),
    source_language: str = Form(SourceLanguage.AUTO.value),
    rotations: Optional[str] = Form(None),
    pipeline: TranslationPipeline = Depends(get_pipeline),
) -> TranslateResponse:
    """Translate an ordered set of letter page photographs.

    Pipeline failures are raised as TranslatorError and rendered by the
    application's exception handler.
    """
    page_set = await read_page_set(files, rotations)
    request = pipeline.build_request(page_set, source_language)
    result = await pipeline.translate(request)
    return TranslateResponse(data=result.to_api_dict())


@router.get("/prompt/preview")
async def preview_prompt(
    page_count: int = Query(1, ge=1),
    source_language: str = Query(SourceLanguage.AUTO.value),
):
    """Preview the prompt for a page count and language without calling the model."""
    page_count = min(page_count, settings.max_pages)
    return PromptBuilder().preview(page_count, source_language)
