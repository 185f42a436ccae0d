"""Language selector API routes."""

from typing import List, Optional

from fastapi import APIRouter
from pydantic import BaseModel

from letter_translator.core.translation import SourceLanguage, get_language_profile

router = APIRouter()


class LanguageOption(BaseModel):
    """One selectable source language."""

    value: str
    script: Optional[str] = None
    has_hints: bool


@router.get("/languages", response_model=List[LanguageOption])
async def list_languages() -> List[LanguageOption]:
    """List the source languages the frontend can offer."""
    options = []
    for language in SourceLanguage:
        profile = get_language_profile(language)
        options.append(LanguageOption(
            value=language.value,
            script=profile.script if profile else None,
            has_hints=bool(profile and profile.hints),
        ))
    return options
